# dotconf/files.py
"""
dotconf.files
-------------

File-system helpers for applications that keep their configuration files under
a single root directory.

:class:`FileLocator` resolves relative paths against an explicit root, walks
directories, reads and writes text, and extracts bundled resources (files
shipped inside a Python package) to disk. Absolute paths given to any method
are used as-is.
"""

import logging
import os
import shutil
from importlib import resources
from pathlib import Path
from typing import Iterator, List, Optional, Union

from .exceptions import DirectoryNotFound, ResourceNotFound

log = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

DEFAULT_RESOURCE_PACKAGE = "dotconf.resources"


def user_path(path: PathLike) -> Path:
    """Path with a leading ``~`` and any $VARS expanded; not made absolute."""
    return Path(os.path.expandvars(os.path.expanduser(os.fspath(path))))


class FileLocator:
    """
    Resolve, enumerate and create files below a root directory.

    Args:
        root: Base directory for relative paths. ``~`` and environment
            variables are expanded. Defaults to the current working directory.
        resource_package: Package that bundled resources are read from.
    """

    def __init__(self, root: Optional[PathLike] = None, resource_package: str = DEFAULT_RESOURCE_PACKAGE):
        self.root = user_path(root if root is not None else os.getcwd()).resolve()
        self.resource_package = resource_package

    def __repr__(self) -> str:
        return f"{type(self).__name__}(root={str(self.root)!r})"

    def resolve(self, relative: PathLike) -> Path:
        """Join `relative` onto the root."""
        return self.root / relative

    # --- Single files ---
    def get_file_or_none(self, relative: PathLike) -> Optional[Path]:
        """Return the resolved file path, or None if no such file exists."""
        path = self.resolve(relative)
        return path if path.is_file() else None

    def get_file(self, relative: PathLike) -> Path:
        """
        Return the resolved file path.

        Raises:
            ResourceNotFound: If the file does not exist.
        """
        path = self.get_file_or_none(relative)
        if path is None:
            raise ResourceNotFound(f"File does not exist: {self.resolve(relative)}",
                                   path=str(self.resolve(relative)))
        return path

    def get_file_or_create(self, relative: PathLike) -> Path:
        """Return the resolved file path, creating an empty file (and its parents) if absent."""
        path = self.resolve(relative)
        if not path.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch()
            log.debug("Created empty file %s", path)
        return path

    # --- Enumeration ---
    def iter_files(self, directory: PathLike = "", deep: bool = False) -> Iterator[Path]:
        """
        Yield the files in `directory`, lazily.

        Files of a directory come before those of its subdirectories; both are
        visited in name order. With `deep`, subdirectories are walked
        recursively.

        Raises:
            DirectoryNotFound: If `directory` does not exist. Since this is a
                generator, the error surfaces on the first iteration.
        """
        path = self.resolve(directory)
        if not path.is_dir():
            raise DirectoryNotFound(path)
        yield from self._walk(path, deep)

    def _walk(self, path: Path, deep: bool) -> Iterator[Path]:
        entries = sorted(path.iterdir(), key=lambda p: p.name)
        for entry in entries:
            if entry.is_file():
                yield entry
        if deep:
            for entry in entries:
                if entry.is_dir():
                    yield from self._walk(entry, True)

    def get_files(self, directory: PathLike = "", deep: bool = False) -> List[Path]:
        return list(self.iter_files(directory, deep))

    def get_file_names(self, directory: PathLike = "", deep: bool = False) -> List[str]:
        return [p.name for p in self.iter_files(directory, deep)]

    def get_file_names_without_extensions(self, directory: PathLike = "", deep: bool = False) -> List[str]:
        return [p.stem for p in self.iter_files(directory, deep)]

    # --- Text I/O ---
    def read_text(self, relative: PathLike) -> str:
        return self.resolve(relative).read_text(encoding="utf-8")

    def write_text(self, relative: PathLike, text: str) -> None:
        self.resolve(relative).write_text(text, encoding="utf-8")

    # --- Configurations ---
    def load(self, relative: PathLike, fmt: Optional[str] = None):
        """Load the configuration file at `relative`."""
        from .loader import load_configuration
        return load_configuration(self.get_file(relative), fmt=fmt)

    def save(self, config, relative: PathLike, fmt: Optional[str] = None) -> None:
        """Save `config` to `relative`, replacing the file."""
        from .loader import save_to_file
        save_to_file(config, self.resolve(relative), fmt=fmt)

    # --- Bundled resources ---
    def save_resource(self, resource_name: str, out_path: PathLike = "", package: Optional[str] = None) -> bool:
        """
        Copy a bundled resource to disk unless the destination already exists.

        `out_path` is resolved against the root. If it has no file extension it
        is treated as a directory and `resource_name` is appended to it. Parent
        directories are created as needed.

        Args:
            resource_name: File name of the resource inside `package`.
            out_path: Destination file or directory, relative to the root.
            package: Package holding the resource; defaults to the locator's
                `resource_package`.

        Returns:
            True if the resource was written, False if the destination already
            existed or the resource is not bundled.
        """
        source = resources.files(package or self.resource_package).joinpath(resource_name)
        if not source.is_file():
            log.warning("Bundled resource '%s' not found in package '%s'.",
                        resource_name, package or self.resource_package)
            return False

        target = self.resolve(out_path)
        if not target.suffix:
            target = target / resource_name
        target.parent.mkdir(parents=True, exist_ok=True)

        if target.exists():
            return False

        with source.open("rb") as src, open(target, "wb") as dst:
            shutil.copyfileobj(src, dst)
        log.debug("Extracted resource '%s' to %s", resource_name, target)
        return True
