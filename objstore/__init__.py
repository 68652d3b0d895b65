"""Support layer for a content-addressed object store: fingerprints, record
encoding and guarded filesystem operations scoped to the .gitlet directory."""

from objstore.codec import Record, decode, encode
from objstore.composer import compose
from objstore.constants import METADATA_DIR_NAME, UID_LENGTH
from objstore.digest import IncrementalDigest, digest, digest_parts, is_fingerprint
from objstore.exceptions import ObjectStoreError, error
from objstore.file_io import (
    copy_file,
    read_bytes,
    read_record,
    read_text,
    write_bytes,
    write_record,
    write_text,
)
from objstore.fs_ops import join, list_plain_files, safe_delete
from objstore.logging_config import get_logger, setup_logging
from objstore.object_store import ObjectStore

__all__ = [
    "METADATA_DIR_NAME",
    "UID_LENGTH",
    "IncrementalDigest",
    "ObjectStore",
    "ObjectStoreError",
    "Record",
    "compose",
    "copy_file",
    "decode",
    "digest",
    "digest_parts",
    "encode",
    "error",
    "get_logger",
    "is_fingerprint",
    "join",
    "list_plain_files",
    "read_bytes",
    "read_record",
    "read_text",
    "safe_delete",
    "setup_logging",
    "write_bytes",
    "write_record",
    "write_text",
]
