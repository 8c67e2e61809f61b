# dotconf/exceptions.py
"""
dotconf.exceptions
------------------

Custom exceptions for dotconf.

Read misses are never errors: a path that cannot be resolved yields the
caller's default. Everything below is raised only by operations that cannot
produce a meaningful result.
"""


class ConfigError(Exception):
    """
    Base type for every exception raised by dotconf.
    """


class InvalidArgument(ConfigError, ValueError):
    """
    Raised when an argument is unusable, e.g. a malformed path or a missing
    directory.
    """


class InvalidPathError(InvalidArgument):
    """
    Raised when a write is attempted through an empty, whitespace-only or
    malformed dotted path.
    """

    def __init__(self, path):
        super().__init__(f"Invalid configuration path: {path!r}")
        self.path = path


class DirectoryNotFound(InvalidArgument):
    """
    Raised by the file enumerator when the directory to walk does not exist.
    """

    def __init__(self, directory):
        super().__init__(f"Directory does not exist: {directory}")
        self.directory = directory


class ConversionError(ConfigError, ValueError):
    """
    Raised by the converting getters (``get_int(path)`` etc. without a default)
    when the stored value cannot be converted to the requested type.
    """

    def __init__(self, path, value, target):
        super().__init__(
            f"Cannot convert value {value!r} (type: {type(value).__name__}) at '{path}' to {target}"
        )
        self.path = path
        self.value = value
        self.target = target


class ResourceNotFound(ConfigError, FileNotFoundError):
    """
    Raised when a configuration file or other required resource is missing.
    """

    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = path


class InvalidFormat(ConfigError):
    """
    Raised when a document cannot be decoded into a configuration tree, or
    when an unknown document format is requested.
    """
