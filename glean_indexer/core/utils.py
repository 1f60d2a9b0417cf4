"""Utility functions."""

import re
import uuid

from glean_indexer.core.constants import UPLOAD_ID_PREFIX

_WORD_PATTERN = re.compile(r"[A-Z]{2,}(?=[A-Z][a-z]|[^A-Za-z]|$)|[A-Z]?[a-z]+|[A-Z]+|\d+")


def start_case(text: str) -> str:
    """Split text into words and capitalize each one.

    ``"getting-started/index.html"`` becomes ``"Getting Started Index Html"``.
    """
    words = _WORD_PATTERN.findall(text)
    return " ".join(word[:1].upper() + word[1:] for word in words)


def strip_html_suffix(file_path: str) -> str:
    """Drop a trailing ``/index.html``, or failing that a trailing ``.html``."""
    if file_path.endswith("/index.html"):
        return file_path[: -len("/index.html")]
    if file_path.endswith(".html"):
        return file_path[: -len(".html")]
    return file_path


def generate_upload_id() -> str:
    """Create an identifier for one bulk upload session."""
    return f"{UPLOAD_ID_PREFIX}{uuid.uuid4()}"
