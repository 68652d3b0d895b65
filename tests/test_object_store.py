"""Tests for the content-addressed object store."""

import pytest

from objstore.codec import Record, encode
from objstore.constants import METADATA_DIR_NAME
from objstore.digest import digest
from objstore.exceptions import ObjectStoreError
from objstore.object_store import ObjectStore


class Tree(Record):
    entries: dict = {}


class Note(Record):
    text: str


class TestInit:
    """Test store initialization."""

    def test_init_creates_directories(self, tmp_path):
        store = ObjectStore(tmp_path)
        store.init()

        assert (tmp_path / METADATA_DIR_NAME / "objects").is_dir()

    def test_init_is_idempotent(self, store):
        store.init()

        assert store.objects_dir.is_dir()

    def test_default_work_dir_from_config(self, tmp_path, monkeypatch):
        monkeypatch.setattr("objstore.config.WORK_DIR", str(tmp_path))

        store = ObjectStore()

        assert store.objects_dir == tmp_path / METADATA_DIR_NAME / "objects"

    def test_objects_dir_name_from_config(self, tmp_path, monkeypatch):
        monkeypatch.setattr("objstore.config.OBJECTS_DIR_NAME", "blobs")

        store = ObjectStore(tmp_path)

        assert store.objects_dir == tmp_path / METADATA_DIR_NAME / "blobs"

    def test_list_before_init(self, tmp_path):
        assert ObjectStore(tmp_path).list_objects() == []


class TestBytesObjects:
    """Test storing raw byte objects."""

    def test_put_returns_digest(self, store):
        assert store.put_bytes(b"hello") == digest(b"hello")

    def test_put_then_get(self, store):
        oid = store.put_bytes(b"\x00binary\xff")

        assert store.get_bytes(oid) == b"\x00binary\xff"

    def test_identical_content_stored_once(self, store):
        first = store.put_bytes(b"same")
        second = store.put_bytes(b"same")

        assert first == second
        assert store.list_objects() == [first]

    def test_get_missing(self, store):
        with pytest.raises(ObjectStoreError, match="No object with id"):
            store.get_bytes(digest(b"never stored"))

    def test_malformed_id(self, store):
        with pytest.raises(ObjectStoreError, match="Malformed object id"):
            store.get_bytes("../../etc/passwd")

    def test_corrupt_object_detected(self, store):
        oid = store.put_bytes(b"original")
        store.get_object_path(oid).write_bytes(b"tampered")

        with pytest.raises(ObjectStoreError, match="Corrupt object"):
            store.get_bytes(oid)

    def test_put_rejects_text(self, store):
        with pytest.raises(ObjectStoreError, match="pass bytes"):
            store.put_bytes("text")

    def test_put_before_init(self, tmp_path):
        store = ObjectStore(tmp_path)

        with pytest.raises(ObjectStoreError, match="Parent directory does not exist"):
            store.put_bytes(b"data")


class TestRecordObjects:
    """Test storing encoded records."""

    def test_put_then_get_record(self, store):
        tree = Tree(entries={"a.txt": digest(b"a")})
        oid = store.put_record(tree)

        assert oid == digest(encode(tree))
        assert store.get_record(oid, Tree) == tree

    def test_get_record_wrong_type(self, store):
        oid = store.put_record(Note(text="hi"))

        with pytest.raises(ObjectStoreError, match="Type mismatch") as exc_info:
            store.get_record(oid, Tree)

        assert oid in str(exc_info.value)

    def test_get_record_from_raw_bytes(self, store):
        oid = store.put_bytes(b"not a record")

        with pytest.raises(ObjectStoreError, match="not produced by encode"):
            store.get_record(oid, Note)


class TestBookkeeping:
    """Test exists(), delete() and list_objects()."""

    def test_exists(self, store):
        oid = store.put_bytes(b"present")

        assert store.exists(oid)
        assert not store.exists(digest(b"absent"))

    def test_delete(self, store):
        oid = store.put_bytes(b"short-lived")

        assert store.delete(oid) is True
        assert not store.exists(oid)
        assert store.delete(oid) is False

    def test_list_is_sorted(self, store):
        oids = [store.put_bytes(f"object {i}".encode()) for i in range(5)]

        assert store.list_objects() == sorted(oids)

    def test_list_ignores_foreign_entries(self, store):
        oid = store.put_bytes(b"real")
        (store.objects_dir / "README").write_text("not an object")
        (store.objects_dir / "subdir").mkdir()

        assert store.list_objects() == [oid]
