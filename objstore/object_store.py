"""Content-addressed object storage under the metadata directory."""

import logging
import os
from pathlib import Path
from typing import List, Optional, Type, TypeVar, Union

from pydantic import BaseModel

from objstore import config
from objstore.codec import decode, encode
from objstore.constants import METADATA_DIR_NAME
from objstore.digest import digest, is_fingerprint
from objstore.exceptions import ObjectStoreError
from objstore.file_io import read_bytes, write_bytes
from objstore.fs_ops import join, list_plain_files, safe_delete

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=BaseModel)


class ObjectStore:
    """
    Stores opaque byte objects and encoded records, each named by the
    fingerprint of its stored bytes, in <work_dir>/.gitlet/objects.
    """

    def __init__(self, work_dir: Optional[Union[str, os.PathLike]] = None):
        """
        Initialize store paths. Nothing is created until init().

        Args:
            work_dir: Working tree root; defaults to OBJSTORE_WORK_DIR or the current directory
        """
        self.work_dir = Path(work_dir if work_dir is not None else config.WORK_DIR)
        self.metadata_dir = join(self.work_dir, METADATA_DIR_NAME)
        self.objects_dir = join(self.metadata_dir, config.OBJECTS_DIR_NAME)

    def init(self) -> None:
        """Create the metadata and objects directories if they are missing."""
        try:
            self.objects_dir.mkdir(parents=True, exist_ok=True)
        except (OSError, ValueError) as e:
            raise ObjectStoreError(
                f"Cannot create object directory {self.objects_dir}: {getattr(e, 'strerror', None) or e}"
            ) from e
        logger.info("Initialized object store at %s", self.objects_dir)

    def get_object_path(self, oid: str) -> Path:
        """
        Get file path for an object.

        Raises:
            ObjectStoreError: If oid is not a well-formed fingerprint
        """
        if not is_fingerprint(oid):
            raise ObjectStoreError(f"Malformed object id: {oid!r}")
        return join(self.objects_dir, oid)

    def put_bytes(self, data: bytes) -> str:
        """
        Store data unless an identical object is already present.

        Returns:
            Object id (fingerprint of data)
        """
        if not isinstance(data, (bytes, bytearray)):
            raise ObjectStoreError(f"Cannot store a value of type {type(data).__name__}; pass bytes")
        oid = digest(data)
        path = self.get_object_path(oid)
        if not path.exists():
            write_bytes(path, data)
            logger.debug("Stored object %s (%d bytes)", oid, len(data))
        return oid

    def get_bytes(self, oid: str) -> bytes:
        """
        Read an object and verify it against its id.

        Raises:
            ObjectStoreError: If the object is missing or its contents no longer match its id
        """
        path = self.get_object_path(oid)
        if not path.is_file():
            raise ObjectStoreError(f"No object with id {oid} in {self.objects_dir}")
        data = read_bytes(path)
        actual = digest(data)
        if actual != oid:
            raise ObjectStoreError(f"Corrupt object {oid}: contents hash to {actual}")
        return data

    def put_record(self, record: BaseModel) -> str:
        """Encode record and store it; returns its object id."""
        return self.put_bytes(encode(record))

    def get_record(self, oid: str, expected_type: Type[R]) -> R:
        """Load and decode the record stored under oid."""
        data = self.get_bytes(oid)
        try:
            return decode(data, expected_type)
        except ObjectStoreError as e:
            raise ObjectStoreError(f"{e} (object {oid})") from e

    def exists(self, oid: str) -> bool:
        """Check whether an object with this id is stored."""
        return self.get_object_path(oid).is_file()

    def delete(self, oid: str) -> bool:
        """
        Delete an object.

        Returns:
            True if the object was deleted, False if it was not stored
        """
        return safe_delete(self.get_object_path(oid))

    def list_objects(self) -> List[str]:
        """
        List stored object ids in sorted order.

        Returns:
            Object ids; an empty list if the store was never initialized
        """
        if not self.objects_dir.exists():
            return []
        return [name for name in list_plain_files(self.objects_dir) if is_fingerprint(name)]
