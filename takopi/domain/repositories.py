"""
Name: Repository Interfaces (Domain Ports)

Responsibilities:
  - Define persistence contracts for Follow, Like, Pin and Collection
  - Keep use-cases independent of the storage backend (file store / PostgreSQL)
  - Document natural keys and ordering guarantees

Collaborators:
  - domain.entities: Follow, Like, Pin, Collection, CollectionItem
  - infrastructure.repositories.file: JSON file store implementations
  - infrastructure.repositories.postgres: PostgreSQL implementations

Constraints:
  - Pure interfaces (Protocol), no implementation
  - Implementations must be interchangeable (same ordering, same errors)
  - Duplicate natural keys raise ConflictError in every backend
  - Storage failures raise OperationalError subclasses, never empty results

Notes:
  - Every "find_*" returning a list orders newest first unless noted
  - Counts are computed by the store, never by callers
"""

from typing import List, Optional, Protocol

from .entities import Collection, CollectionChanges, CollectionItem, Follow, Like, Pin


class FollowRepository(Protocol):
    """Contract for the directed follow graph. Natural key: (follower_id, following_id)."""

    def create(self, follower_id: str, following_id: str) -> Follow:
        """R: Persist a new edge (ConflictError if it already exists)."""
        ...

    def find_by_id(self, follow_id: str) -> Optional[Follow]:
        """R: Fetch an edge by its surrogate id."""
        ...

    def find_by_users(self, follower_id: str, following_id: str) -> Optional[Follow]:
        """R: Fetch an edge by its natural key."""
        ...

    def find_by_follower(self, follower_id: str) -> List[Follow]:
        """R: Edges where follower_id follows someone (newest first)."""
        ...

    def find_by_following(self, following_id: str) -> List[Follow]:
        """R: Edges pointing at following_id (newest first)."""
        ...

    def delete(self, follow_id: str) -> bool:
        """R: Hard-delete an edge; False if it could not be removed."""
        ...

    def count_by_follower(self, follower_id: str) -> int:
        """R: How many users follower_id follows."""
        ...

    def count_by_following(self, following_id: str) -> int:
        """R: How many followers following_id has."""
        ...


class LikeRepository(Protocol):
    """Contract for likes. Natural key: (user_id, content_id)."""

    def find_by_id(self, like_id: str) -> Optional[Like]:
        """R: Fetch a like by id."""
        ...

    def find_by_user(self, user_id: str) -> List[Like]:
        """R: Likes given by a user."""
        ...

    def find_by_content(self, content_id: str) -> List[Like]:
        """R: Likes received by a content item."""
        ...

    def find_by_user_and_content(self, user_id: str, content_id: str) -> Optional[Like]:
        """R: Fetch a like by its natural key."""
        ...

    def create(self, user_id: str, content_id: str) -> Like:
        """R: Persist a like (ConflictError if it already exists)."""
        ...

    def delete(self, like_id: str) -> bool:
        """R: Hard-delete a like."""
        ...

    def count_by_content(self, content_id: str) -> int:
        """R: Likes received by a content item (store-side count)."""
        ...


class PinRepository(Protocol):
    """Contract for pins. Natural key: (user_id, content_id)."""

    def find_by_user_and_content(self, user_id: str, content_id: str) -> Optional[Pin]:
        """R: Fetch a pin by its natural key."""
        ...

    def count_by_content(self, content_id: str) -> int:
        """R: Pins received by a content item."""
        ...

    def count_by_user(self, user_id: str, *, public_only: bool = False) -> int:
        """R: Pins made by a user (optionally only public ones)."""
        ...

    def create(self, user_id: str, content_id: str, is_public: bool) -> Pin:
        """R: Persist a pin (ConflictError if it already exists)."""
        ...

    def delete(self, user_id: str, content_id: str) -> bool:
        """R: Hard-delete by natural key; False if nothing was removed."""
        ...

    def find_by_user(self, user_id: str, *, public_only: bool = False) -> List[Pin]:
        """R: Pins made by a user (newest first)."""
        ...


class CollectionRepository(Protocol):
    """
    Contract for collections and their items.

    Natural key for items: (collection_id, content_id).
    """

    def create(
        self,
        user_id: str,
        title: str,
        description: Optional[str],
        is_public: bool,
    ) -> Collection:
        """R: Persist a new (empty) collection."""
        ...

    def find_by_id(self, collection_id: str) -> Optional[Collection]:
        """R: Fetch a collection with its derived item_count."""
        ...

    def find_by_user(self, user_id: str) -> List[Collection]:
        """R: Collections owned by user_id (most recently updated first)."""
        ...

    def update(
        self, collection_id: str, changes: CollectionChanges
    ) -> Optional[Collection]:
        """R: Apply partial changes and bump updated_at (None if missing)."""
        ...

    def delete(self, collection_id: str) -> bool:
        """R: Hard-delete a collection and cascade to its items."""
        ...

    def add_item(self, collection_id: str, content_id: str) -> CollectionItem:
        """R: Add a content item (ConflictError if present); bumps updated_at."""
        ...

    def remove_item(self, collection_id: str, content_id: str) -> bool:
        """R: Remove a content item (idempotent); bumps updated_at."""
        ...

    def get_items(self, collection_id: str) -> List[CollectionItem]:
        """R: Items of a collection (most recently added first)."""
        ...

    def is_item_in_collection(self, collection_id: str, content_id: str) -> bool:
        """R: Membership test by natural key."""
        ...

    def count_by_user(self, user_id: str) -> int:
        """R: How many collections user_id owns."""
        ...
