"""Filesystem access layer for build and document generation."""

from lumbar_fs.errors import (
    AlreadyExistsError,
    FileAccessError,
    NotFoundError,
    ResourceExhaustedError,
    TemplateCompileError,
)
from lumbar_fs.file_util import FileUtil
from lumbar_fs.load_config import load_config
from lumbar_fs.resource_descriptor import PathSpec, ResourceDescriptor, ResourceSpec

__all__ = [
    "AlreadyExistsError",
    "FileAccessError",
    "FileUtil",
    "NotFoundError",
    "PathSpec",
    "ResourceDescriptor",
    "ResourceExhaustedError",
    "ResourceSpec",
    "TemplateCompileError",
    "load_config",
]
