"""
Name: File Repository Tests

Responsibilities:
  - Map camelCase records to domain entities
  - Newest-first ordering and derived counts
  - Natural-key uniqueness surfaced as ConflictError
  - Collection cascade + updated_at bump on item changes

Notes:
  - Runs over a tmp_path JsonFileStore (conftest: repos)
"""

import json
from datetime import datetime, timezone

import pytest

from takopi.crosscutting.exceptions import ConflictError
from takopi.domain.entities import CollectionChanges
from takopi.infrastructure.repositories.file.base import parse_timestamp
from takopi.infrastructure.storage import StorageReadError

pytestmark = pytest.mark.unit


class TestParseTimestamp:
    def test_zulu_suffix_is_utc(self):
        parsed = parse_timestamp("2024-01-02T03:04:05.000Z", collection="x")

        assert parsed == datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    def test_naive_value_is_assumed_utc(self):
        parsed = parse_timestamp("2024-01-02T03:04:05", collection="x")

        assert parsed.tzinfo == timezone.utc

    def test_missing_value_is_epoch(self):
        assert parse_timestamp(None, collection="x").year == 1970

    def test_garbage_raises_read_error(self):
        with pytest.raises(StorageReadError):
            parse_timestamp("yesterday", collection="x")


class TestFileFollowRepository:
    def test_create_maps_entity(self, repos):
        follow = repos.follows.create("ana", "bob")

        assert follow.id.startswith("follow_")
        assert follow.follower_id == "ana"
        assert follow.following_id == "bob"
        assert follow.created_at.tzinfo is not None

    def test_record_uses_camel_case_keys(self, repos, store_root):
        repos.follows.create("ana", "bob")

        index = json.loads((store_root / "follows" / "index.json").read_text("utf-8"))
        assert index[0]["followerId"] == "ana"
        assert index[0]["followingId"] == "bob"

    def test_duplicate_edge_is_conflict(self, repos):
        repos.follows.create("ana", "bob")

        with pytest.raises(ConflictError):
            repos.follows.create("ana", "bob")

    def test_find_by_users_is_directional(self, repos):
        repos.follows.create("ana", "bob")

        assert repos.follows.find_by_users("ana", "bob") is not None
        assert repos.follows.find_by_users("bob", "ana") is None

    def test_lists_are_newest_first(self, repos):
        repos.follows.create("ana", "bob")
        repos.follows.create("ana", "cid")
        repos.follows.create("dan", "bob")

        following = [f.following_id for f in repos.follows.find_by_follower("ana")]
        followers = [f.follower_id for f in repos.follows.find_by_following("bob")]

        assert following == ["cid", "bob"]
        assert followers == ["dan", "ana"]

    def test_counts(self, repos):
        repos.follows.create("ana", "bob")
        repos.follows.create("cid", "bob")

        assert repos.follows.count_by_following("bob") == 2
        assert repos.follows.count_by_follower("ana") == 1
        assert repos.follows.count_by_follower("bob") == 0

    def test_delete_existing_and_missing(self, repos):
        follow = repos.follows.create("ana", "bob")

        assert repos.follows.delete(follow.id) is True
        assert repos.follows.delete(follow.id) is False
        assert repos.follows.find_by_id(follow.id) is None


class TestFileLikeRepository:
    def test_create_and_lookup(self, repos):
        like = repos.likes.create("ana", "post-1")

        assert repos.likes.find_by_id(like.id) == like
        assert repos.likes.find_by_user_and_content("ana", "post-1") == like

    def test_duplicate_like_is_conflict(self, repos):
        repos.likes.create("ana", "post-1")

        with pytest.raises(ConflictError):
            repos.likes.create("ana", "post-1")

    def test_find_filters_and_order(self, repos):
        repos.likes.create("ana", "post-1")
        repos.likes.create("bob", "post-1")
        repos.likes.create("ana", "post-2")

        assert [like.user_id for like in repos.likes.find_by_content("post-1")] == ["bob", "ana"]
        assert [like.content_id for like in repos.likes.find_by_user("ana")] == [
            "post-2",
            "post-1",
        ]
        assert repos.likes.count_by_content("post-2") == 1

    def test_count_and_delete(self, repos):
        like = repos.likes.create("ana", "post-1")
        repos.likes.create("bob", "post-1")

        assert repos.likes.count_by_content("post-1") == 2
        assert repos.likes.delete(like.id) is True
        assert repos.likes.count_by_content("post-1") == 1
        assert repos.likes.delete("missing") is False


class TestFilePinRepository:
    def test_create_keeps_visibility(self, repos):
        pin = repos.pins.create("ana", "post-1", False)

        assert pin.is_public is False
        assert repos.pins.find_by_user_and_content("ana", "post-1") == pin

    def test_public_only_filter(self, repos):
        repos.pins.create("ana", "post-1", True)
        repos.pins.create("ana", "post-2", False)

        assert repos.pins.count_by_user("ana") == 2
        assert repos.pins.count_by_user("ana", public_only=True) == 1
        assert [p.content_id for p in repos.pins.find_by_user("ana")] == [
            "post-2",
            "post-1",
        ]
        assert [p.content_id for p in repos.pins.find_by_user("ana", public_only=True)] == [
            "post-1"
        ]

    def test_delete_by_natural_key(self, repos):
        repos.pins.create("ana", "post-1", True)

        assert repos.pins.delete("ana", "post-1") is True
        assert repos.pins.delete("ana", "post-1") is False
        assert repos.pins.count_by_content("post-1") == 0


class TestFileCollectionRepository:
    def test_create_starts_empty(self, repos):
        collection = repos.collections.create("ana", "Favoritos", None, True)

        assert collection.item_count == 0
        assert collection.description is None
        assert collection.created_at == collection.updated_at

    def test_add_item_bumps_updated_at_and_count(self, repos):
        created = repos.collections.create("ana", "Favoritos", None, True)

        item = repos.collections.add_item(created.id, "post-1")
        after = repos.collections.find_by_id(created.id)

        assert item.collection_id == created.id
        assert after.item_count == 1
        assert after.updated_at > created.updated_at

    def test_duplicate_item_is_conflict(self, repos):
        created = repos.collections.create("ana", "Favoritos", None, True)
        repos.collections.add_item(created.id, "post-1")

        with pytest.raises(ConflictError):
            repos.collections.add_item(created.id, "post-1")

        assert repos.collections.find_by_id(created.id).item_count == 1

    def test_remove_item(self, repos):
        created = repos.collections.create("ana", "Favoritos", None, True)
        repos.collections.add_item(created.id, "post-1")

        assert repos.collections.remove_item(created.id, "post-1") is True
        assert repos.collections.remove_item(created.id, "post-1") is False
        assert repos.collections.is_item_in_collection(created.id, "post-1") is False

    def test_get_items_newest_first(self, repos):
        created = repos.collections.create("ana", "Favoritos", None, True)
        for content_id in ("a", "b", "c"):
            repos.collections.add_item(created.id, content_id)

        assert [i.content_id for i in repos.collections.get_items(created.id)] == [
            "c",
            "b",
            "a",
        ]

    def test_update_partial_and_clear_description(self, repos):
        created = repos.collections.create("ana", "Favoritos", "desc", True)

        renamed = repos.collections.update(created.id, CollectionChanges(title="Nuevo"))
        cleared = repos.collections.update(
            created.id, CollectionChanges(clear_description=True, is_public=False)
        )

        assert renamed.title == "Nuevo"
        assert renamed.description == "desc"
        assert cleared.description is None
        assert cleared.is_public is False
        assert cleared.title == "Nuevo"

    def test_update_missing_returns_none(self, repos):
        assert repos.collections.update("missing", CollectionChanges(title="x")) is None

    def test_delete_cascades_items(self, repos, file_store):
        keep = repos.collections.create("ana", "Keep", None, True)
        doomed = repos.collections.create("ana", "Doomed", None, True)
        repos.collections.add_item(keep.id, "post-1")
        repos.collections.add_item(doomed.id, "post-1")
        repos.collections.add_item(doomed.id, "post-2")

        assert repos.collections.delete(doomed.id) is True

        assert repos.collections.find_by_id(doomed.id) is None
        assert repos.collections.get_items(doomed.id) == []
        assert file_store.count("collection_items").unwrap() == 1
        assert repos.collections.delete(doomed.id) is False

    def test_find_by_user_orders_by_updated_at(self, repos):
        first = repos.collections.create("ana", "Primera", None, True)
        repos.collections.create("ana", "Segunda", None, False)
        repos.collections.create("bob", "Ajena", None, True)
        repos.collections.add_item(first.id, "post-1")

        listed = repos.collections.find_by_user("ana")

        assert [c.title for c in listed] == ["Primera", "Segunda"]
        assert [c.item_count for c in listed] == [1, 0]
        assert repos.collections.count_by_user("ana") == 2
