# dotconf/__init__.py
"""
dotconf – hierarchical configuration store with dot-notation paths.

Import `Configuration` from `dotconf.store`, the loader functions from
`dotconf.loader` and `FileLocator` from `dotconf.files`. The most used names
are re-exported here.
"""

from .exceptions import (
    ConfigError,
    ConversionError,
    DirectoryNotFound,
    InvalidArgument,
    InvalidFormat,
    InvalidPathError,
    ResourceNotFound,
)
from .files import FileLocator
from .loader import dumps, load_configuration, loads, save_to_file
from .store import Configuration, get_by_dot, set_by_dot

__version__ = "0.1.0"

__all__ = [
    "Configuration",
    "ConfigError",
    "ConversionError",
    "DirectoryNotFound",
    "FileLocator",
    "InvalidArgument",
    "InvalidFormat",
    "InvalidPathError",
    "ResourceNotFound",
    "dumps",
    "get_by_dot",
    "load_configuration",
    "loads",
    "save_to_file",
    "set_by_dot",
]
