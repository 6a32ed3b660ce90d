"""Shared core utilities for the build tools."""

from .config_loader import (
    ConfigLoader,
    FILE_LOADERS,
    load_config_file,
    load_config_files,
    merge_mappings,
    normalize_string_list,
)
from .console import Console

__all__ = [
    "ConfigLoader",
    "FILE_LOADERS",
    "Console",
    "load_config_file",
    "load_config_files",
    "merge_mappings",
    "normalize_string_list",
]
