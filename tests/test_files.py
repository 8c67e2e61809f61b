# tests/test_files.py
"""
Tests for dotconf.files.FileLocator.

Covers:
    - path resolution against an explicit root
    - get_file_or_none / get_file / get_file_or_create
    - recursive enumeration and DirectoryNotFound
    - bundled resource extraction
"""

import json
import logging

import pytest

from dotconf.exceptions import DirectoryNotFound, InvalidArgument, ResourceNotFound
from dotconf.files import FileLocator
from dotconf.store import Configuration


@pytest.fixture
def locator(tmp_path):
    return FileLocator(tmp_path)


@pytest.fixture
def tree(tmp_path):
    """
    root/
      a.json
      b.txt
      sub/
        c.json
        deeper/
          d.toml
    """
    (tmp_path / "a.json").write_text("{}")
    (tmp_path / "b.txt").write_text("b")
    (tmp_path / "sub" / "deeper").mkdir(parents=True)
    (tmp_path / "sub" / "c.json").write_text("{}")
    (tmp_path / "sub" / "deeper" / "d.toml").write_text("")
    return tmp_path


class TestResolve:

    def test_relative(self, locator, tmp_path):
        assert locator.resolve("conf/app.json") == tmp_path.resolve() / "conf" / "app.json"

    def test_absolute_is_kept(self, locator, tmp_path):
        other = tmp_path / "elsewhere.json"
        assert locator.resolve(str(other)) == other

    def test_root_expands_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DOTCONF_ROOT", str(tmp_path))
        assert FileLocator("$DOTCONF_ROOT").root == tmp_path.resolve()

    def test_default_root_is_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert FileLocator().root == tmp_path.resolve()


class TestSingleFiles:

    def test_get_file_or_none(self, locator, tree):
        assert locator.get_file_or_none("a.json") == tree.resolve() / "a.json"
        assert locator.get_file_or_none("missing.json") is None
        assert locator.get_file_or_none("sub") is None

    def test_get_file_missing(self, locator):
        with pytest.raises(ResourceNotFound):
            locator.get_file("missing.json")

    def test_get_file_or_create(self, locator, tmp_path):
        path = locator.get_file_or_create("new/dir/app.json")
        assert path.is_file()
        assert path.read_text() == ""
        assert path == tmp_path.resolve() / "new" / "dir" / "app.json"

    def test_get_file_or_create_keeps_existing(self, locator, tree):
        path = locator.get_file_or_create("b.txt")
        assert path.read_text() == "b"

    def test_text_io(self, locator):
        locator.get_file_or_create("notes.txt")
        locator.write_text("notes.txt", "ünïcode")
        assert locator.read_text("notes.txt") == "ünïcode"


class TestEnumeration:

    def test_shallow(self, locator, tree):
        assert locator.get_file_names("") == ["a.json", "b.txt"]

    def test_deep(self, locator, tree):
        assert locator.get_file_names("", deep=True) == ["a.json", "b.txt", "c.json", "d.toml"]

    def test_subdirectory(self, locator, tree):
        assert locator.get_files("sub") == [tree.resolve() / "sub" / "c.json"]

    def test_without_extensions(self, locator, tree):
        assert locator.get_file_names_without_extensions("sub", deep=True) == ["c", "d"]

    def test_iter_is_lazy(self, locator, tree):
        files = locator.iter_files("", deep=True)
        assert next(files).name == "a.json"

    def test_missing_directory(self, locator):
        with pytest.raises(DirectoryNotFound):
            locator.get_files("nope")
        with pytest.raises(InvalidArgument):
            list(locator.iter_files("nope"))


class TestConfigurations:

    def test_load_and_save(self, locator, tmp_path):
        locator.save(Configuration({"a": {"b": 1}}), "conf/app.json")
        assert json.loads((tmp_path / "conf" / "app.json").read_text()) == {"a": {"b": 1}}
        cfg = locator.load("conf/app.json")
        assert cfg.get_int("a.b") == 1
        assert cfg.name == "app.json"

    def test_load_missing(self, locator):
        with pytest.raises(ResourceNotFound):
            locator.load("conf/missing.json")


class TestSaveResource:

    def test_extract_into_directory(self, locator, tmp_path):
        assert locator.save_resource("default.json", "conf") is True
        target = tmp_path / "conf" / "default.json"
        assert target.is_file()
        assert json.loads(target.read_text())["server"]["port"] == 8080

    def test_extract_to_file_name(self, locator, tmp_path):
        assert locator.save_resource("default.json", "conf/app.json") is True
        cfg = locator.load("conf/app.json")
        assert cfg.get_string_list("features.enabled") == ["search", "export"]

    def test_existing_destination_untouched(self, locator, tmp_path):
        target = tmp_path / "default.json"
        target.write_text('{"mine": true}')
        assert locator.save_resource("default.json") is False
        assert json.loads(target.read_text()) == {"mine": True}

    def test_missing_resource(self, locator, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="dotconf.files"):
            assert locator.save_resource("nope.json", "conf") is False
        assert "nope.json" in caplog.text
        assert not (tmp_path / "conf").exists()
