# dotconf/loader.py
"""
dotconf.loader
--------------

Load configuration documents into a :class:`~dotconf.store.Configuration` and
write them back out. Supports JSON and TOML files.

A loaded document must have a mapping at its top level. Each top-level item is
fed to the store with ``Configuration.set``, so a top-level key containing dots
ends up nested. Blank documents load as an empty configuration.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

import toml

# Use tomli for reading TOML (tomllib ships with Python 3.11+)
try:
    import tomli
except ImportError:
    import tomllib as tomli

from .exceptions import InvalidFormat, InvalidPathError, ResourceNotFound
from .files import user_path
from .store import Configuration

log = logging.getLogger(__name__)

FORMATS = ("json", "toml")

PathLike = Union[str, os.PathLike]


def detect_format(path: PathLike, fmt: Optional[str] = None) -> str:
    """
    Pick the document format for `path`.

    An explicit `fmt` wins; otherwise ``.toml`` files are TOML and everything
    else is JSON.

    Raises:
        InvalidFormat: If `fmt` is not one of ``"json"`` or ``"toml"``.
    """
    if fmt is not None:
        fmt = fmt.lower()
        if fmt not in FORMATS:
            raise InvalidFormat(f"Unsupported config format: {fmt}")
        return fmt
    return "toml" if Path(path).suffix.lower() == ".toml" else "json"


def decode(text: str, fmt: str = "json", source: str = "<string>") -> dict:
    """
    Decode `text` into a plain dictionary.

    Blank input decodes to ``{}``.

    Raises:
        InvalidFormat: On parse errors or when the top level is not a mapping.
    """
    fmt = detect_format(source, fmt)
    if not text.strip():
        return {}
    try:
        if fmt == "toml":
            data = tomli.loads(text)
        else:
            data = json.loads(text)
    except (ValueError, tomli.TOMLDecodeError) as e:
        raise InvalidFormat(f"Error parsing {fmt.upper()} from {source}: {e}") from e

    if not isinstance(data, dict):
        raise InvalidFormat(
            f"Top level of {source} must be a mapping, got {type(data).__name__}"
        )
    return data


def _none_paths(d: dict, prefix: str = "") -> list:
    """Dotted paths of every None value in `d`, nested dicts included."""
    paths = []
    for k, val in d.items():
        key = f"{prefix}.{k}" if prefix else k
        if val is None:
            paths.append(key)
        elif isinstance(val, dict):
            paths.extend(_none_paths(val, key))
    return paths


def encode(data: dict, fmt: str = "json") -> str:
    """Serialize a plain dictionary tree to JSON (2-space indent) or TOML."""
    fmt = detect_format("", fmt)
    if fmt == "toml":
        dropped = _none_paths(data)
        if dropped:
            log.warning("TOML cannot store null values; dropping keys: %s", ", ".join(dropped))
        return toml.dumps(data)
    return json.dumps(data, indent=2, ensure_ascii=False)


def loads(text: str,
          fmt: str = "json",
          name: Optional[str] = None,
          current_path: Optional[str] = None) -> Configuration:
    """Build a configuration from document text."""
    data = decode(text, fmt, source=current_path or "<string>")
    config = Configuration(name=name, current_path=current_path)
    for key, value in data.items():
        try:
            config.set(key, value)
        except InvalidPathError as e:
            raise InvalidFormat(f"Invalid top-level key {key!r} in {current_path or '<string>'}") from e
    log.debug("Loaded %d top-level keys from %s", len(data), current_path or "<string>")
    return config


def dumps(config: Configuration, fmt: str = "json") -> str:
    """Serialize a configuration's tree to document text."""
    return encode(config.as_dict(), fmt)


def load_configuration(path: PathLike, fmt: Optional[str] = None) -> Configuration:
    """
    Load a JSON or TOML file into a new configuration.

    The configuration is named after the file and remembers its absolute path,
    so that ``Configuration.save()`` can write it back.

    Args:
        path: File to load; ``~`` and environment variables are expanded.
        fmt: ``"json"`` or ``"toml"``; inferred from the suffix when omitted.

    Raises:
        ResourceNotFound: If the file does not exist.
        InvalidFormat: If the file cannot be decoded into a mapping.
    """
    if path is None:
        raise ResourceNotFound("No configuration file given.")
    file_path = user_path(path)
    if not file_path.is_file():
        raise ResourceNotFound(f"Config file not found: {file_path}", path=str(file_path))

    fmt = detect_format(file_path, fmt)
    try:
        # utf-8-sig drops a leading byte-order mark
        text = file_path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise InvalidFormat(f"Config file {file_path} is not valid UTF-8: {e}") from e
    return loads(text, fmt, name=file_path.name, current_path=str(file_path.resolve()))


def save_to_file(config: Configuration, path: Optional[PathLike], fmt: Optional[str] = None) -> None:
    """
    Serialize `config` and overwrite `path` in full.

    Parent directories are created as needed.

    Raises:
        ResourceNotFound: If no destination path is given.
    """
    if path is None:
        raise ResourceNotFound("No destination file given for saving the configuration.")
    file_path = user_path(path)
    text = dumps(config, detect_format(file_path, fmt))

    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(text, encoding="utf-8")
    log.debug("Saved configuration '%s' to %s", config.name, file_path)
