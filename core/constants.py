# Supported MIME types for resume processing
ACCEPTED_FILE_TYPES = [
    # Images
    "image/jpeg",
    "image/png",
    "image/webp",
    "image/heic",
    "image/heif",
    # Documents
    "application/pdf",
    "text/plain",
    "text/html",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
]

# Maximum file size (10MB)
MAX_FILE_SIZE = 10 * 1024 * 1024

# Multipart field shared by the ingest and convert endpoints
UPLOAD_FIELD_NAME = "files"

# Gemini generation defaults
GEMINI_MODEL = "gemini-2.0-flash"
GEMINI_TEMPERATURE = 0.4
GEMINI_TOP_K = 32
GEMINI_TOP_P = 1.0
GEMINI_MAX_OUTPUT_TOKENS = 8192

OVERLEAF_URL = "https://www.overleaf.com/docs"
