"""
Name: JsonFileStore Tests

Responsibilities:
  - CRUD over index.json + per-record files
  - Filters, counts and pagination slices
  - Ok/Err read results (empty collection vs broken disk)
  - Natural-key uniqueness (also under concurrent writers) and atomic writes

Notes:
  - Offline tests over tmp_path (no DB)
"""

import json
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from takopi.crosscutting.exceptions import ConflictError, OperationalError
from takopi.infrastructure.storage import (
    DuplicateRecordError,
    JsonFileStore,
    StorageConfigurationError,
    StorageReadError,
    StorageWriteError,
    generate_id,
)

pytestmark = pytest.mark.unit


def _seed(store: JsonFileStore, n: int, **extra) -> list[dict]:
    return [store.create("items", {"n": i, **extra}) for i in range(n)]


class TestGenerateId:
    def test_prefixed_id_has_three_parts(self):
        parts = generate_id("follow").split("_")

        assert parts[0] == "follow"
        assert parts[1].isdigit()
        assert len(parts[2]) == 9

    def test_ids_are_unique_within_process(self):
        ids = {generate_id("x") for _ in range(500)}

        assert len(ids) == 500


class TestCreateAndRead:
    def test_create_assigns_id_and_timestamps(self, file_store):
        record = file_store.create("items", {"name": "a"}, id_prefix="item")

        assert record["_id"].startswith("item_")
        assert record["createdAt"] == record["updatedAt"]
        assert record["name"] == "a"

    def test_create_writes_index_and_record_file(self, file_store, store_root):
        record = file_store.create("items", {"name": "a"})

        index = json.loads((store_root / "items" / "index.json").read_text("utf-8"))
        single = json.loads(
            (store_root / "items" / f"{record['_id']}.json").read_text("utf-8")
        )
        assert index == [record]
        assert single == record

    def test_find_all_on_missing_collection_is_ok_empty(self, file_store):
        result = file_store.find_all("nothing")

        assert result.is_ok
        assert result.unwrap() == []

    def test_find_by_id_returns_record(self, file_store):
        record = file_store.create("items", {"name": "a"})

        assert file_store.find_by_id("items", record["_id"]).unwrap() == record

    def test_find_by_id_unknown_is_ok_none(self, file_store):
        file_store.create("items", {"name": "a"})

        result = file_store.find_by_id("items", "missing")

        assert result.is_ok
        assert result.unwrap() is None

    def test_find_by_id_falls_back_to_index_scan(self, file_store, store_root):
        record = file_store.create("items", {"name": "a"})
        (store_root / "items" / f"{record['_id']}.json").unlink()

        assert file_store.find_by_id("items", record["_id"]).unwrap() == record

    def test_find_by_id_with_unsafe_id_scans_index(self, file_store):
        file_store.create("items", {"name": "a"})

        assert file_store.find_by_id("items", "../etc/passwd").unwrap() is None

    def test_find_matches_all_criteria(self, file_store):
        file_store.create("items", {"user": "u1", "kind": "a"})
        file_store.create("items", {"user": "u1", "kind": "b"})
        file_store.create("items", {"user": "u2", "kind": "a"})

        found = file_store.find("items", {"user": "u1", "kind": "a"}).unwrap()

        assert [(r["user"], r["kind"]) for r in found] == [("u1", "a")]

    def test_missing_key_does_not_match_none(self, file_store):
        file_store.create("items", {"user": "u1"})

        assert file_store.find("items", {"other": None}).unwrap() == []

    def test_count_with_and_without_criteria(self, file_store):
        _seed(file_store, 3, user="u1")
        file_store.create("items", {"user": "u2"})

        assert file_store.count("items").unwrap() == 4
        assert file_store.count("items", {"user": "u1"}).unwrap() == 3


class TestReadErrors:
    def test_corrupt_index_is_err_not_empty(self, file_store, store_root):
        (store_root / "items").mkdir(parents=True)
        (store_root / "items" / "index.json").write_text("{not json", "utf-8")

        result = file_store.find_all("items")

        assert not result.is_ok
        assert result.reason == "JSON inválido"
        with pytest.raises(StorageReadError):
            result.unwrap()

    def test_index_that_is_not_a_list_is_err(self, file_store, store_root):
        (store_root / "items").mkdir(parents=True)
        (store_root / "items" / "index.json").write_text('{"a": 1}', "utf-8")

        result = file_store.count("items")

        assert not result.is_ok
        assert result.unwrap_or(-1) == -1

    def test_storage_errors_are_operational(self):
        assert issubclass(StorageReadError, OperationalError)
        assert issubclass(StorageWriteError, OperationalError)
        assert issubclass(DuplicateRecordError, ConflictError)


class TestPaginate:
    def test_second_page_slice(self, file_store):
        _seed(file_store, 25)

        page = file_store.paginate("items", page=2, limit=10).unwrap()

        assert [r["n"] for r in page.data] == list(range(10, 20))
        assert page.pagination.current_page == 2
        assert page.pagination.total_pages == 3
        assert page.pagination.total_items == 25
        assert page.pagination.items_per_page == 10

    def test_last_page_is_partial(self, file_store):
        _seed(file_store, 25)

        page = file_store.paginate("items", page=3, limit=10).unwrap()

        assert [r["n"] for r in page.data] == list(range(20, 25))

    def test_page_past_end_is_empty(self, file_store):
        _seed(file_store, 3)

        page = file_store.paginate("items", page=5, limit=10).unwrap()

        assert page.data == []
        assert page.pagination.total_pages == 1

    def test_empty_collection_has_zero_pages(self, file_store):
        page = file_store.paginate("items").unwrap()

        assert page.data == []
        assert page.pagination.total_pages == 0

    def test_paginate_with_criteria(self, file_store):
        _seed(file_store, 4, user="u1")
        _seed(file_store, 2, user="u2")

        page = file_store.paginate("items", page=1, limit=3, criteria={"user": "u2"}).unwrap()

        assert page.pagination.total_items == 2
        assert all(r["user"] == "u2" for r in page.data)

    @pytest.mark.parametrize("page,limit", [(0, 10), (1, 0), (-1, 5)])
    def test_invalid_page_or_limit_raises(self, file_store, page, limit):
        with pytest.raises(ValueError):
            file_store.paginate("items", page=page, limit=limit)


class TestUpdate:
    def test_update_merges_and_bumps_updated_at(self, file_store):
        record = file_store.create("items", {"name": "a", "keep": True})

        updated = file_store.update("items", record["_id"], {"name": "b"})

        assert updated["name"] == "b"
        assert updated["keep"] is True
        assert updated["createdAt"] == record["createdAt"]
        assert updated["updatedAt"] > record["updatedAt"]
        assert file_store.find_by_id("items", record["_id"]).unwrap() == updated
        assert file_store.find_all("items").unwrap() == [updated]

    def test_update_cannot_change_id(self, file_store):
        record = file_store.create("items", {"name": "a"})

        updated = file_store.update("items", record["_id"], {"_id": "other"})

        assert updated["_id"] == record["_id"]

    def test_update_unknown_id_returns_none(self, file_store):
        assert file_store.update("items", "missing", {"name": "b"}) is None


class TestDelete:
    def test_delete_removes_file_and_index_entry(self, file_store, store_root):
        record = file_store.create("items", {"name": "a"})

        assert file_store.delete("items", record["_id"]) is True

        assert not (store_root / "items" / f"{record['_id']}.json").exists()
        assert file_store.find_all("items").unwrap() == []

    def test_delete_without_record_file_still_succeeds(self, file_store, store_root):
        record = file_store.create("items", {"name": "a"})
        (store_root / "items" / f"{record['_id']}.json").unlink()

        assert file_store.delete("items", record["_id"]) is True
        assert file_store.count("items").unwrap() == 0

    def test_delete_where_returns_removed_count(self, file_store):
        _seed(file_store, 3, user="u1")
        _seed(file_store, 2, user="u2")

        assert file_store.delete_where("items", {"user": "u1"}) == 3
        assert file_store.count("items").unwrap() == 2
        assert file_store.delete_where("items", {"user": "u1"}) == 0


class TestUniqueness:
    def test_duplicate_natural_key_raises_and_writes_nothing(self, file_store):
        file_store.create("likes", {"u": "1", "c": "x"}, unique_on=("u", "c"))

        with pytest.raises(DuplicateRecordError):
            file_store.create("likes", {"u": "1", "c": "x"}, unique_on=("u", "c"))

        assert file_store.count("likes").unwrap() == 1

    def test_different_key_is_allowed(self, file_store):
        file_store.create("likes", {"u": "1", "c": "x"}, unique_on=("u", "c"))
        file_store.create("likes", {"u": "1", "c": "y"}, unique_on=("u", "c"))

        assert file_store.count("likes").unwrap() == 2

    def test_concurrent_writers_create_a_single_record(self, file_store):
        writers = 20
        barrier = threading.Barrier(writers)

        def _create_follow(_):
            barrier.wait()
            try:
                file_store.create(
                    "follows",
                    {"followerId": "u1", "followingId": "u2"},
                    unique_on=("followerId", "followingId"),
                )
            except DuplicateRecordError:
                return "duplicate"
            return "created"

        with ThreadPoolExecutor(max_workers=writers) as pool:
            outcomes = list(pool.map(_create_follow, range(writers)))

        assert outcomes.count("created") == 1
        assert outcomes.count("duplicate") == writers - 1
        assert file_store.count("follows").unwrap() == 1


class TestAtomicWrites:
    def test_no_temp_files_left_behind(self, file_store, store_root):
        record = file_store.create("items", {"name": "a"})
        file_store.update("items", record["_id"], {"name": "b"})

        leftovers = [p.name for p in (store_root / "items").iterdir() if p.suffix == ".tmp"]
        assert leftovers == []

    def test_unserializable_payload_raises_write_error(self, file_store, store_root):
        file_store.create("items", {"name": "a"})

        with pytest.raises(StorageWriteError):
            file_store.create("items", {"nested": {(1, 2): "tuple keys"}})

        assert file_store.count("items").unwrap() == 1
        leftovers = [p.name for p in (store_root / "items").iterdir() if p.suffix == ".tmp"]
        assert leftovers == []


class TestPaths:
    def test_collection_name_cannot_escape_root(self, file_store):
        with pytest.raises(ValueError):
            file_store.create("../outside", {"a": 1})

    def test_ensure_root_creates_directory(self, tmp_path):
        root = tmp_path / "nested" / "storage"

        JsonFileStore(root).ensure_root()

        assert root.is_dir()

    def test_ensure_root_on_file_raises_configuration_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x", "utf-8")

        with pytest.raises(StorageConfigurationError):
            JsonFileStore(blocker / "storage").ensure_root()
