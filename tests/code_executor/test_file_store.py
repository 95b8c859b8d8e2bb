"""Tests for script file storage."""

import re

import pytest

from code_executor.primitives.errors import NotFoundError
from code_executor.primitives.file_store import FileStore

GENERATED = re.compile(r"^(?P<base>.+)_[0-9a-f]{8}\.py$")


class TestGenerateFilename:
    """Collision-avoiding file names."""

    def test_default_base(self, storage_dir):
        name = FileStore(storage_dir).generate_filename()
        assert GENERATED.match(name).group("base") == "code"

    def test_supplied_base(self, storage_dir):
        name = FileStore(storage_dir).generate_filename("analysis")
        assert GENERATED.match(name).group("base") == "analysis"

    def test_py_suffix_stripped(self, storage_dir):
        name = FileStore(storage_dir).generate_filename("analysis.py")
        assert GENERATED.match(name).group("base") == "analysis"
        assert ".py_" not in name

    def test_directory_components_dropped(self, storage_dir):
        name = FileStore(storage_dir).generate_filename("../../etc/evil.py")
        assert GENERATED.match(name).group("base") == "evil"

    def test_bare_suffix_falls_back_to_default(self, storage_dir):
        name = FileStore(storage_dir).generate_filename(".py")
        assert GENERATED.match(name).group("base") == "code"


class TestInitialize:
    def test_creates_storage_dir(self, tmp_path):
        store = FileStore(tmp_path / "a" / "b")
        assert store.storage_dir.is_dir()
        assert store.storage_dir.is_absolute()

    def test_writes_content_under_root(self, storage_dir):
        store = FileStore(storage_dir)
        path = store.initialize("print('hi')\n", "hello")
        assert path.parent == store.storage_dir
        assert path.is_absolute()
        assert path.read_text(encoding="utf-8") == "print('hi')\n"

    def test_same_base_name_twice_gives_distinct_paths(self, storage_dir):
        store = FileStore(storage_dir)
        first = store.initialize("a", "same")
        second = store.initialize("b", "same")
        assert first != second
        assert first.read_text() == "a"
        assert second.read_text() == "b"


class TestAppendAndRead:
    def test_round_trip(self, storage_dir):
        store = FileStore(storage_dir)
        path = store.initialize("a")
        store.append(str(path), "b")
        assert store.read(str(path)) == "ab"

    def test_append_is_verbatim(self, storage_dir):
        store = FileStore(storage_dir)
        path = store.initialize("x = 1\n")
        store.append(path, "y = 2")
        store.append(path, "\n")
        assert store.read(path) == "x = 1\ny = 2\n"

    def test_append_missing_file_raises_and_does_not_create(self, storage_dir):
        store = FileStore(storage_dir)
        missing = storage_dir / "nope.py"
        with pytest.raises(NotFoundError, match="File not found") as exc_info:
            store.append(str(missing), "print(1)")
        assert exc_info.value.path == str(missing)
        assert not missing.exists()

    def test_read_missing_file_raises(self, storage_dir):
        with pytest.raises(NotFoundError):
            FileStore(storage_dir).read(storage_dir / "nope.py")

    def test_paths_outside_root_are_accepted(self, storage_dir, tmp_path):
        """Caller-supplied paths are not contained to the storage root."""
        outside = tmp_path / "outside.py"
        outside.write_text("x", encoding="utf-8")
        store = FileStore(storage_dir)
        store.append(outside, "y")
        assert store.read(outside) == "xy"

    def test_unicode_content(self, storage_dir):
        store = FileStore(storage_dir)
        path = store.initialize("s = 'héllo'\n")
        store.append(path, "t = '世界'\n")
        assert store.read(path) == "s = 'héllo'\nt = '世界'\n"
