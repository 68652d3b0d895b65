"""Reads and writes whole files (bytes, text, records) with precise failure messages."""

import logging
import os
import shutil
from pathlib import Path
from typing import Type, TypeVar, Union

from pydantic import BaseModel

from objstore.codec import decode, encode
from objstore.exceptions import ObjectStoreError

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=BaseModel)
PathArg = Union[str, os.PathLike]


def _as_path(path: PathArg) -> Path:
    if path is None:
        raise ObjectStoreError("Path must not be None")
    if not isinstance(path, (str, os.PathLike)):
        raise ObjectStoreError(f"Expected a path, got {type(path).__name__}")
    return Path(path)


def read_bytes(path: PathArg) -> bytes:
    """
    Return the entire contents of a regular file.

    Raises:
        ObjectStoreError: If the file does not exist, is a directory, or cannot be read
    """
    path = _as_path(path)
    if not path.exists():
        raise ObjectStoreError(f"File does not exist: {path}")
    if path.is_dir():
        raise ObjectStoreError(f"File is a directory: {path}")
    try:
        return path.read_bytes()
    except (OSError, ValueError) as e:
        raise ObjectStoreError(f"Cannot read file {path}: {getattr(e, 'strerror', None) or e}") from e


def write_bytes(path: PathArg, data: bytes) -> None:
    """
    Write data to path, creating the file or replacing its previous contents.

    Use compose() to write several parts together.

    Args:
        path: Destination file; its parent directory must exist
        data: Full new contents

    Raises:
        ObjectStoreError: If path is a directory, its parent is missing or is not a
            directory, or the write fails
    """
    path = _as_path(path)
    if not isinstance(data, (bytes, bytearray)):
        raise ObjectStoreError(
            f"Cannot write a value of type {type(data).__name__}; pass bytes "
            "(use write_text() for str or write_record() for records)"
        )
    if path.is_dir():
        raise ObjectStoreError(f"Cannot overwrite directory: {path}")
    parent = path.parent
    if not parent.exists():
        raise ObjectStoreError(f"Parent directory does not exist: {parent}")
    if not parent.is_dir():
        raise ObjectStoreError(f"Parent is not a directory: {parent}")
    try:
        path.write_bytes(data)
    except (OSError, ValueError) as e:
        raise ObjectStoreError(f"Cannot write file {path}: {getattr(e, 'strerror', None) or e}") from e
    logger.debug("Wrote %d bytes to %s", len(data), path)


def read_text(path: PathArg) -> str:
    """
    Like read_bytes(), but decodes the contents as UTF-8.

    Avoid this for arbitrary working-tree files: binary content is not text.
    """
    data = read_bytes(path)
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError as e:
        raise ObjectStoreError(f"File is not valid UTF-8 text: {path}") from e


def write_text(path: PathArg, text: str) -> None:
    """Like write_bytes(), but writes text encoded as UTF-8."""
    if not isinstance(text, str):
        raise ObjectStoreError(f"Cannot write a value of type {type(text).__name__} as text")
    write_bytes(path, text.encode('utf-8'))


def read_record(path: PathArg, expected_type: Type[R]) -> R:
    """
    Read a record written by write_record().

    Args:
        path: File holding the encoded record
        expected_type: Record class the file must contain

    Returns:
        Decoded record

    Raises:
        ObjectStoreError: On any file or decoding failure; the message names the path
    """
    data = read_bytes(path)
    try:
        return decode(data, expected_type)
    except ObjectStoreError as e:
        raise ObjectStoreError(f"{e} (reading {path})") from e


def write_record(path: PathArg, value: BaseModel) -> None:
    """Encode value and write it to path."""
    try:
        data = encode(value)
    except ObjectStoreError as e:
        raise ObjectStoreError(f"{e} (writing {path})") from e
    write_bytes(path, data)


def copy_file(source: PathArg, destination: PathArg) -> None:
    """
    Copy source to destination, overwriting destination if it exists.

    Raises:
        ObjectStoreError: If source does not exist, or either path is a directory
    """
    source = _as_path(source)
    destination = _as_path(destination)
    if not source.exists():
        raise ObjectStoreError(f"Source file does not exist: {source}")
    if source.is_dir():
        raise ObjectStoreError(f"Source file is a directory: {source}")
    if destination.is_dir():
        raise ObjectStoreError(f"Destination file is a directory: {destination}")
    try:
        shutil.copyfile(source, destination)
    except (OSError, ValueError) as e:
        raise ObjectStoreError(f"Cannot copy {source} to {destination}: {getattr(e, 'strerror', None) or e}") from e
    logger.debug("Copied %s to %s", source, destination)
