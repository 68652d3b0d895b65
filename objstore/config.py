"""Configuration settings for the object store."""

import os

from objstore.constants import DEFAULT_OBJECTS_DIR_NAME

WORK_DIR = os.environ.get("OBJSTORE_WORK_DIR", os.getcwd())

OBJECTS_DIR_NAME = os.environ.get("OBJSTORE_OBJECTS_DIR", DEFAULT_OBJECTS_DIR_NAME)
