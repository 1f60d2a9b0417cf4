"""Application constants."""

# Glean
DEFAULT_DATASOURCE = "backstage"
BULK_INDEX_PATH = "bulkindexdocuments"
UPLOAD_ID_PREFIX = "upload-"
BODY_MIME_TYPE = "HTML"

# Batching
DEFAULT_BATCH_SIZE = 25

# Entities
DEFAULT_NAMESPACE = "default"
DEFAULT_ENTITY = "default/component/some-handbook"
TECHDOCS_REF_ANNOTATION = "backstage.io/techdocs-ref"

# TechDocs markup
LAST_REVISED_SELECTOR = ".git-revision-date-localized-plugin.git-revision-date-localized-plugin-date"
LAST_REVISED_FORMATS = [
    "%B %d, %Y",
    "%B %d, %Y %H:%M:%S",
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M:%S",
    "%d %B %Y",
]

# Schedule defaults
DEFAULT_SCHEDULE_FREQUENCY_MINUTES = 10
DEFAULT_SCHEDULE_TIMEOUT_MINUTES = 15
DEFAULT_SCHEDULE_INITIAL_DELAY_SECONDS = 3
