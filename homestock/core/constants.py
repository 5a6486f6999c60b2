UINT32_MAX = 0xFFFFFFFF

NAME_TEMPLATE_PLACEHOLDER = "%1$d"

IMAGES_DIR = "images"
THUMBNAILS_DIR = "thumbnails"
IMAGE_EXTENSION = ".jpg"
DEFAULT_THUMBNAIL_SIZE = 256

DEFAULT_ASSIGNMENT_AMOUNT = 1
DEFAULT_ID_MAX_ATTEMPTS = 10_000

BACKUP_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
