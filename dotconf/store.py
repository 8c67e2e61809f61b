# dotconf/store.py
"""
dotconf.store
-------------

The configuration store: a mutable tree of nested dictionaries addressed with
dot-notation paths (e.g. ``"database.host"``), plus the typed accessors built
on top of it.

Reads never fail on a missing path; they return the caller's default. Writes
create intermediate dictionaries on demand and replace any non-dictionary value
found along the way.
"""

import copy
import json
import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional, Set

from . import values as v
from .exceptions import InvalidPathError

log = logging.getLogger(__name__)

# Marks "no default supplied" so that None stays usable as a default.
_MISSING = object()


# --- Path helpers ---

def split_path(path: Any) -> Optional[List[str]]:
    """
    Split a dot-notation path into its segments.

    Returns:
        The list of segments, or None if `path` is not a string, is empty or
        whitespace-only, or contains an empty segment (``"a..b"``, ``".a"``).
    """
    if not isinstance(path, str) or not path.strip():
        return None
    parts = path.split('.')
    if not all(parts):
        return None
    return parts


def get_by_dot(cfg: Mapping, key: str, default: Any = None) -> Any:
    """
    Retrieve a nested value from a mapping using a dot-notated key.

    Traversal stops at the first missing segment or at the first intermediate
    value that is not a dictionary; `default` is returned in both cases. The
    stored value itself is returned, not a copy.

    Args:
        cfg: The dictionary to retrieve from.
        key: The dot-notation string representing the path (e.g., "database.host").
        default: Value returned when the path cannot be resolved.
    """
    parts = split_path(key)
    if parts is None:
        return default

    d = cfg
    for p in parts[:-1]:
        d = d.get(p, _MISSING)
        if not isinstance(d, Mapping):
            return default
    return d.get(parts[-1], default)


def set_by_dot(cfg: dict, key: str, value: Any) -> None:
    """
    Set a nested dictionary value using a dot-notated key string.

    Intermediate dictionaries are created along the path if they do not exist.
    If a part of the path exists but is not a dictionary, it is overwritten with
    a new empty dictionary (a warning is logged) and the previous value is lost.
    The final key is inserted or replaced.

    Raises:
        InvalidPathError: If `key` is empty, whitespace-only or has an empty segment.
    """
    parts = split_path(key)
    if parts is None:
        raise InvalidPathError(key)

    d = cfg
    for p in parts[:-1]:
        current_val = d.get(p)
        if not isinstance(current_val, dict):
            if p in d:
                log.warning(
                    "Overwriting non-dictionary key '%s' (type: %s) in path '%s'.",
                    p, type(current_val).__name__, key,
                )
            current_val = {}
            d[p] = current_val
        d = current_val

    d[parts[-1]] = value


def flatten_keys(d: Mapping, prefix: str = "") -> List[str]:
    """Get a flat list of all dot-notation keys in `d`, intermediate ones included."""
    keys = []
    for k, val in d.items():
        new_key = f"{prefix}.{k}" if prefix else k
        keys.append(new_key)
        if isinstance(val, Mapping):
            keys.extend(flatten_keys(val, new_key))
    return keys


def flatten_values(d: Mapping, prefix: str = "") -> Dict[str, Any]:
    """Flatten nested dict into { 'a.b.c': value, … }; empty dicts are kept as leaves."""
    items = {}
    for k, val in d.items():
        key = f"{prefix}.{k}" if prefix else k
        if isinstance(val, Mapping) and val:
            items.update(flatten_values(val, key))
        else:
            items[key] = val
    return items


# --- Configuration Class ---

class Configuration:
    """
    Configuration store providing typed access to a tree of nested dictionaries.

    The store owns a single root dictionary and two identity fields: `name`
    (a display label, typically the source file name) and `current_path` (where
    the configuration came from). Both are fixed at construction.

    Accessor families, for T in string, boolean, int, long, double:

    - ``get_T(path)``: for numeric and boolean types the stored value is
      *converted* (``"42"`` -> 42, missing -> 0) and a value that cannot be
      converted raises :class:`~dotconf.exceptions.ConversionError`.
      ``get_string(path)`` returns None for anything that is not a string.
    - ``get_T(path, default)``: exact type match only, otherwise `default`.
      Never converts and never raises.
    - ``is_T(path)``: exact type match predicate.

    List accessors (``get_string_list`` etc.) return the stored list only if
    every element has the requested kind, and a new empty list otherwise.

    Example:
        >>> cfg = Configuration({"db": {"port": 5432}}, name="app.json")
        >>> cfg.get_int("db.port")
        5432
        >>> cfg.get_string("db.port", "n/a")
        'n/a'
    """

    def __init__(self,
                 initial: Optional[Mapping[str, Any]] = None,
                 name: Optional[str] = None,
                 current_path: Optional[str] = None):
        self._values: Dict[str, Any] = {}
        self._name = name
        self._current_path = current_path
        if initial:
            for key, value in initial.items():
                self.set(key, value)

    # --- Identity ---
    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def current_path(self) -> Optional[str]:
        return self._current_path

    def get_name(self) -> Optional[str]:
        return self._name

    def get_current_path(self) -> Optional[str]:
        return self._current_path

    def get_root(self) -> "Configuration":
        """The store is always its own root."""
        return self

    # --- Generic access ---
    def get(self, path: str, default: Any = None) -> Any:
        """Retrieve a value using dot-notation, returning `default` if not found."""
        return get_by_dot(self._values, path, default)

    def set(self, path: str, value: Any) -> None:
        """Insert or replace the value at `path`, creating intermediate dicts."""
        set_by_dot(self._values, path, value)

    def contains(self, path: str) -> bool:
        """True if `path` resolves to a stored value (None included)."""
        return self.get(path, _MISSING) is not _MISSING

    def is_set(self, path: str) -> bool:
        """True if `path` resolves to a stored value other than None."""
        return self.get(path) is not None

    def get_keys(self, deep: bool = False) -> Set[str]:
        """
        Return the top-level keys, or with `deep` every dotted path in the tree
        (intermediate dictionaries included).
        """
        if deep:
            return set(flatten_keys(self._values))
        return set(self._values)

    def get_values(self, deep: bool = False) -> Dict[str, Any]:
        """
        Return a shallow copy of the root dictionary, or with `deep` a flat
        ``{dotted_path: leaf}`` dictionary of every non-dictionary leaf.
        """
        if deep:
            return flatten_values(self._values)
        return dict(self._values)

    # --- Strings ---
    def get_string(self, path: str, default: Any = _MISSING) -> Optional[str]:
        value = self.get(path)
        if v.is_string(value):
            return value
        return None if default is _MISSING else default

    def is_string(self, path: str) -> bool:
        return v.is_string(self.get(path))

    # --- Numbers and booleans ---
    def get_int(self, path: str, default: Any = _MISSING) -> int:
        value = self.get(path)
        if default is _MISSING:
            return v.to_int(value, path)
        return value if v.is_int(value) else default

    def is_int(self, path: str) -> bool:
        return v.is_int(self.get(path))

    def get_long(self, path: str, default: Any = _MISSING) -> int:
        value = self.get(path)
        if default is _MISSING:
            return v.to_long(value, path)
        return value if v.is_long(value) else default

    def is_long(self, path: str) -> bool:
        return v.is_long(self.get(path))

    def get_double(self, path: str, default: Any = _MISSING) -> float:
        value = self.get(path)
        if default is _MISSING:
            return v.to_double(value, path)
        return value if v.is_double(value) else default

    def is_double(self, path: str) -> bool:
        return v.is_double(self.get(path))

    def get_boolean(self, path: str, default: Any = _MISSING) -> bool:
        value = self.get(path)
        if default is _MISSING:
            return v.to_boolean(value, path)
        return value if v.is_boolean(value) else default

    def is_boolean(self, path: str) -> bool:
        return v.is_boolean(self.get(path))

    # --- Lists ---
    def get_list(self, path: str, default: Any = _MISSING, item_type: Any = None) -> Any:
        """
        Return the list stored at `path`.

        With `item_type` (a kind name such as ``"int"``, a builtin type or a
        predicate) every element must match, otherwise the list is rejected.
        Rejected or missing values give `default`, or a new empty list when no
        default was supplied. Elements are never converted.
        """
        value = self.get(path)
        if v.is_list(value) and (item_type is None or v.all_items(value, v.item_predicate(item_type))):
            return value
        return [] if default is _MISSING else default

    def is_list(self, path: str) -> bool:
        return v.is_list(self.get(path))

    def _typed_list(self, path: str, predicate) -> list:
        value = self.get(path)
        if v.is_list(value) and v.all_items(value, predicate):
            return value
        return []

    def get_string_list(self, path: str) -> List[str]:
        return self._typed_list(path, v.is_string)

    def get_integer_list(self, path: str) -> List[int]:
        return self._typed_list(path, v.is_int)

    def get_boolean_list(self, path: str) -> List[bool]:
        return self._typed_list(path, v.is_boolean)

    def get_double_list(self, path: str) -> List[float]:
        return self._typed_list(path, v.is_double)

    def get_float_list(self, path: str) -> List[float]:
        return self._typed_list(path, v.is_float)

    def get_long_list(self, path: str) -> List[int]:
        return self._typed_list(path, v.is_long)

    def get_byte_list(self, path: str) -> List[int]:
        return self._typed_list(path, v.is_byte)

    def get_character_list(self, path: str) -> List[str]:
        return self._typed_list(path, v.is_character)

    def get_short_list(self, path: str) -> List[int]:
        return self._typed_list(path, v.is_short)

    def get_map_list(self, path: str) -> List[Dict[str, Any]]:
        return self._typed_list(path, v.is_mapping)

    # --- Loading and saving ---
    @classmethod
    def load(cls, path, fmt: Optional[str] = None) -> "Configuration":
        """Load a JSON or TOML file. See :func:`dotconf.loader.load_configuration`."""
        from .loader import load_configuration
        return load_configuration(path, fmt=fmt)

    def save(self, path=None, fmt: Optional[str] = None) -> None:
        """Write the tree to `path`, or back to `current_path` when omitted."""
        from .loader import save_to_file
        save_to_file(self, path if path is not None else self._current_path, fmt=fmt)

    # --- Mapping protocol ---
    def __getitem__(self, path: str) -> Any:
        value = self.get(path, _MISSING)
        if value is _MISSING:
            raise KeyError(path)
        return value

    def __setitem__(self, path: str, value: Any) -> None:
        self.set(path, value)

    def __contains__(self, path: Any) -> bool:
        return self.contains(path)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    # --- Utility Methods ---
    def as_dict(self) -> dict:
        """Return the configuration tree as a deep-copied plain dictionary."""
        return copy.deepcopy(self._values)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, values={self._values!r})"

    def __str__(self) -> str:
        """Return a JSON representation of the configuration."""
        try:
            return json.dumps(self._values, indent=2, ensure_ascii=False)
        except (TypeError, ValueError):
            return repr(self)
