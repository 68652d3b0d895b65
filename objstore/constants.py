"""Project-wide constants (metadata directory name, digest parameters, record format)."""

METADATA_DIR_NAME: str = ".gitlet"
DEFAULT_OBJECTS_DIR_NAME: str = "objects"

HASH_ALGORITHM: str = "sha1"
UID_LENGTH: int = 40  # hex characters in a 160-bit digest

RECORD_FORMAT: str = "objstore-record"
RECORD_FORMAT_VERSION: int = 1
