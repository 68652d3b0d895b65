"""Scoped deletion, plain-file listing and path joining."""

import logging
import os
from pathlib import Path
from typing import List, Union

from objstore.constants import METADATA_DIR_NAME
from objstore.exceptions import ObjectStoreError

logger = logging.getLogger(__name__)

PathArg = Union[str, os.PathLike]


def join(first: PathArg, *others: PathArg) -> Path:
    """
    Join path segments with the platform separator. No I/O is performed.

    Args:
        first: First segment (str or path)
        *others: Following segments

    Returns:
        Joined path

    Raises:
        ObjectStoreError: If any segment is None or neither str nor path
    """
    segments = (first,) + others
    for position, segment in enumerate(segments):
        if segment is None:
            raise ObjectStoreError(
                f"Cannot join path: segment {position} is None (segments: {list(segments)!r})"
            )
        if not isinstance(segment, (str, os.PathLike)):
            raise ObjectStoreError(
                f"Cannot join path: segment {position} is {type(segment).__name__}, "
                f"not str or path (segments: {list(segments)!r})"
            )
    return Path(first, *others)


def is_in_metadata_dir(path: PathArg) -> bool:
    """Check whether path names something inside the metadata directory, by its components."""
    return METADATA_DIR_NAME in Path(path).parts


def safe_delete(path: PathArg) -> bool:
    """
    Delete a single file if it exists.

    Only files inside the metadata directory, or files whose own directory
    contains the metadata directory (the working tree root), may be deleted.

    Args:
        path: File to delete

    Returns:
        True if the file was deleted, False if it did not exist

    Raises:
        ObjectStoreError: If deletion is not permitted for path, or path is a directory
    """
    if path is None:
        raise ObjectStoreError("Path must not be None")
    path = Path(path)
    in_metadata_dir = is_in_metadata_dir(path)
    in_work_tree = (path.parent / METADATA_DIR_NAME).is_dir()
    if not in_metadata_dir and not in_work_tree:
        logger.warning("Refused to delete %s outside %s", path, METADATA_DIR_NAME)
        raise ObjectStoreError(
            f"Deletion not permitted: file is not in {METADATA_DIR_NAME} "
            f"or in a {METADATA_DIR_NAME} working directory: {path}"
        )
    if path.is_dir():
        raise ObjectStoreError(f"File to be deleted is a directory: {path}")
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except (OSError, ValueError) as e:
        raise ObjectStoreError(f"Cannot delete file {path}: {getattr(e, 'strerror', None) or e}") from e
    logger.debug("Deleted %s", path)
    return True


def list_plain_files(directory: PathArg) -> List[str]:
    """
    List the names of the regular files directly inside directory.

    Subdirectories are excluded. Names are sorted by their byte representation
    so the order is identical across runs and platforms.

    Raises:
        ObjectStoreError: If directory is not a directory
    """
    if directory is None:
        raise ObjectStoreError("Path must not be None")
    try:
        with os.scandir(directory) as entries:
            names = [entry.name for entry in entries if entry.is_file()]
    except (NotADirectoryError, FileNotFoundError) as e:
        raise ObjectStoreError(
            f"Not a directory, so cannot list the files in it: {directory}"
        ) from e
    except (OSError, ValueError) as e:
        raise ObjectStoreError(f"Cannot list directory {directory}: {getattr(e, 'strerror', None) or e}") from e
    return sorted(names, key=os.fsencode)
