"""Shared pytest fixtures for all tests."""

import pytest

from objstore.constants import METADATA_DIR_NAME
from objstore.object_store import ObjectStore


@pytest.fixture
def work_tree(tmp_path):
    """
    Create a working tree root containing an empty metadata directory.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to the working tree root
    """
    (tmp_path / METADATA_DIR_NAME).mkdir()
    return tmp_path


@pytest.fixture
def metadata_dir(work_tree):
    """
    Metadata directory inside the working tree.

    Returns:
        Path to <work_tree>/.gitlet
    """
    return work_tree / METADATA_DIR_NAME


@pytest.fixture
def store(work_tree):
    """
    Create an initialized object store in the working tree.

    Returns:
        ObjectStore instance
    """
    object_store = ObjectStore(work_tree)
    object_store.init()
    return object_store
