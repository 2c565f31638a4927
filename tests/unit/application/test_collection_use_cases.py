"""
Name: Collection Use Case Tests

Responsibilities:
  - Create / update validation (trim, required title, length limits)
  - Ownership enforcement on every mutation (state unchanged on failure)
  - Duplicate item rejection
  - Visibility of private collections (detail + listings)

Collaborators:
  - File-backed repositories (conftest: repos)
  - unittest.mock for the race between read and write
"""

from unittest.mock import Mock

import pytest

from takopi.application.usecases.collections import (
    AddItemToCollectionUseCase,
    CreateCollectionInput,
    CreateCollectionUseCase,
    DeleteCollectionUseCase,
    GetCollectionUseCase,
    ListUserCollectionsUseCase,
    RemoveItemFromCollectionUseCase,
    UpdateCollectionInput,
    UpdateCollectionUseCase,
    normalize_description,
    normalize_title,
)
from takopi.crosscutting.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from takopi.domain.repositories import CollectionRepository

pytestmark = pytest.mark.unit


def _create(repos, user_id="u1", title="Favoritos", **kwargs):
    return CreateCollectionUseCase(repos.collections).execute(
        CreateCollectionInput(user_id=user_id, title=title, **kwargs)
    )


# ============================================================================
# Validation helpers
# ============================================================================


class TestNormalization:
    def test_title_is_trimmed(self):
        assert normalize_title("  Favoritos  ") == "Favoritos"

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_blank_title_is_rejected(self, raw):
        with pytest.raises(ValidationError, match="El título es obligatorio"):
            normalize_title(raw)

    def test_title_limit_is_measured_after_trim(self):
        assert normalize_title("  " + "x" * 50 + "  ") == "x" * 50

        with pytest.raises(ValidationError, match="50 caracteres"):
            normalize_title("x" * 51)

    def test_custom_title_limit(self):
        with pytest.raises(ValidationError, match="10 caracteres"):
            normalize_title("x" * 11, max_chars=10)

    def test_blank_description_becomes_none(self):
        assert normalize_description("   ") is None
        assert normalize_description(None) is None

    def test_description_limit(self):
        assert normalize_description("d" * 200) == "d" * 200

        with pytest.raises(ValidationError, match="200 caracteres"):
            normalize_description("d" * 201)


# ============================================================================
# Create
# ============================================================================


class TestCreateCollection:
    def test_creates_with_defaults(self, repos):
        collection = _create(repos, title="  Favoritos ", description="  ")

        assert collection.title == "Favoritos"
        assert collection.description is None
        assert collection.is_public is True
        assert collection.item_count == 0
        assert repos.collections.count_by_user("u1") == 1

    def test_invalid_title_persists_nothing(self, repos):
        with pytest.raises(ValidationError):
            _create(repos, title="x" * 51)

        assert repos.collections.count_by_user("u1") == 0

    def test_configured_limits_apply(self, repos):
        use_case = CreateCollectionUseCase(
            repos.collections, title_max_chars=5, description_max_chars=3
        )

        with pytest.raises(ValidationError):
            use_case.execute(CreateCollectionInput(user_id="u1", title="Largo!"))
        with pytest.raises(ValidationError):
            use_case.execute(
                CreateCollectionInput(user_id="u1", title="Ok", description="abcd")
            )

    def test_user_required(self, repos):
        with pytest.raises(ValidationError, match="ID de usuario es requerido"):
            _create(repos, user_id="")


# ============================================================================
# Update
# ============================================================================


class TestUpdateCollection:
    def test_owner_updates_only_given_fields(self, repos):
        created = _create(repos, description="desc")

        updated = UpdateCollectionUseCase(repos.collections).execute(
            created.id, "u1", UpdateCollectionInput(is_public=False)
        )

        assert updated.is_public is False
        assert updated.title == "Favoritos"
        assert updated.description == "desc"
        assert updated.updated_at > created.updated_at

    def test_blank_description_clears_it(self, repos):
        created = _create(repos, description="desc")

        updated = UpdateCollectionUseCase(repos.collections).execute(
            created.id, "u1", UpdateCollectionInput(description="   ")
        )

        assert updated.description is None

    def test_empty_input_returns_current_without_writing(self, repos):
        created = _create(repos)

        same = UpdateCollectionUseCase(repos.collections).execute(
            created.id, "u1", UpdateCollectionInput()
        )

        assert same == created

    @pytest.mark.parametrize("intruder", ["u2", "", None])
    def test_non_owner_is_forbidden_and_nothing_changes(self, repos, intruder):
        created = _create(repos, description="desc", is_public=True)

        with pytest.raises(ForbiddenError, match="No tienes permiso para editar"):
            UpdateCollectionUseCase(repos.collections).execute(
                created.id,
                intruder,
                UpdateCollectionInput(title="Hack", description="", is_public=False),
            )

        current = repos.collections.find_by_id(created.id)
        assert (current.title, current.description, current.is_public) == (
            "Favoritos",
            "desc",
            True,
        )

    def test_missing_collection_is_not_found(self, repos):
        with pytest.raises(NotFoundError, match="Colección no encontrada"):
            UpdateCollectionUseCase(repos.collections).execute(
                "missing", "u1", UpdateCollectionInput(title="x")
            )

    def test_invalid_title_is_validation_error(self, repos):
        created = _create(repos)

        with pytest.raises(ValidationError):
            UpdateCollectionUseCase(repos.collections).execute(
                created.id, "u1", UpdateCollectionInput(title="  ")
            )

    def test_deleted_between_read_and_write_is_not_found(self, repos):
        created = _create(repos)
        repo = Mock(spec=CollectionRepository)
        repo.find_by_id.return_value = created
        repo.update.return_value = None

        with pytest.raises(NotFoundError):
            UpdateCollectionUseCase(repo).execute(
                created.id, "u1", UpdateCollectionInput(title="Nuevo")
            )


# ============================================================================
# Delete
# ============================================================================


class TestDeleteCollection:
    def test_owner_deletes_with_items(self, repos):
        created = _create(repos)
        repos.collections.add_item(created.id, "content-1")

        DeleteCollectionUseCase(repos.collections).execute(created.id, "u1")

        assert repos.collections.find_by_id(created.id) is None
        assert repos.collections.get_items(created.id) == []

    def test_non_owner_is_forbidden_and_collection_survives(self, repos):
        created = _create(repos)

        with pytest.raises(ForbiddenError, match="No tienes permiso para eliminar"):
            DeleteCollectionUseCase(repos.collections).execute(created.id, "u2")

        assert repos.collections.find_by_id(created.id) is not None

    def test_missing_is_not_found(self, repos):
        with pytest.raises(NotFoundError):
            DeleteCollectionUseCase(repos.collections).execute("missing", "u1")


# ============================================================================
# Items
# ============================================================================


class TestCollectionItems:
    def test_duplicate_item_is_rejected(self, repos):
        created = _create(repos, is_public=False)
        use_case = AddItemToCollectionUseCase(repos.collections)

        use_case.execute(created.id, "content-42", "u1")
        with pytest.raises(ConflictError, match="Este producto ya está en la colección"):
            use_case.execute(created.id, "content-42", "u1")

        items = repos.collections.get_items(created.id)
        assert [i.content_id for i in items] == ["content-42"]

    def test_add_item_requires_ownership(self, repos):
        created = _create(repos)

        with pytest.raises(ForbiddenError, match="No tienes permiso para modificar"):
            AddItemToCollectionUseCase(repos.collections).execute(
                created.id, "content-1", "u2"
            )

        assert repos.collections.get_items(created.id) == []

    def test_add_item_to_missing_collection(self, repos):
        with pytest.raises(NotFoundError):
            AddItemToCollectionUseCase(repos.collections).execute(
                "missing", "content-1", "u1"
            )

    def test_add_item_requires_content(self, repos):
        created = _create(repos)

        with pytest.raises(ValidationError, match="El contenido es obligatorio"):
            AddItemToCollectionUseCase(repos.collections).execute(created.id, "", "u1")

    def test_remove_item(self, repos):
        created = _create(repos)
        AddItemToCollectionUseCase(repos.collections).execute(created.id, "c-1", "u1")

        RemoveItemFromCollectionUseCase(repos.collections).execute(created.id, "c-1", "u1")

        assert repos.collections.find_by_id(created.id).item_count == 0

    def test_remove_absent_item_is_silent(self, repos):
        created = _create(repos)

        RemoveItemFromCollectionUseCase(repos.collections).execute(created.id, "c-9", "u1")

        assert repos.collections.find_by_id(created.id).item_count == 0

    def test_remove_item_requires_ownership(self, repos):
        created = _create(repos)
        AddItemToCollectionUseCase(repos.collections).execute(created.id, "c-1", "u1")

        with pytest.raises(ForbiddenError):
            RemoveItemFromCollectionUseCase(repos.collections).execute(
                created.id, "c-1", "u2"
            )

        assert repos.collections.is_item_in_collection(created.id, "c-1") is True


# ============================================================================
# Queries
# ============================================================================


class TestGetCollection:
    def test_public_detail_for_anonymous(self, repos):
        created = _create(repos)
        AddItemToCollectionUseCase(repos.collections).execute(created.id, "c-1", "u1")

        detail = GetCollectionUseCase(repos.collections).execute(created.id)

        assert detail.collection.item_count == 1
        assert [i.content_id for i in detail.items] == ["c-1"]

    @pytest.mark.parametrize("viewer", ["u2", None])
    def test_private_detail_is_forbidden_for_others(self, repos, viewer):
        created = _create(repos, is_public=False)

        with pytest.raises(ForbiddenError, match="No tienes permiso para ver"):
            GetCollectionUseCase(repos.collections).execute(created.id, viewer)

    def test_private_detail_for_owner(self, repos):
        created = _create(repos, is_public=False)

        detail = GetCollectionUseCase(repos.collections).execute(created.id, "u1")

        assert detail.collection.id == created.id

    def test_missing_is_not_found(self, repos):
        with pytest.raises(NotFoundError):
            GetCollectionUseCase(repos.collections).execute("missing", "u1")


class TestListUserCollections:
    def test_owner_sees_private_collections(self, repos):
        _create(repos, title="Publica")
        _create(repos, title="Privada", is_public=False)

        listed = ListUserCollectionsUseCase(repos.collections).execute("u1", "u1")

        assert [c.title for c in listed] == ["Privada", "Publica"]

    @pytest.mark.parametrize("viewer", ["u2", None])
    def test_others_see_only_public(self, repos, viewer):
        _create(repos, title="Publica")
        _create(repos, title="Privada", is_public=False)

        listed = ListUserCollectionsUseCase(repos.collections).execute("u1", viewer)

        assert [c.title for c in listed] == ["Publica"]

    def test_owner_required(self, repos):
        with pytest.raises(ValidationError):
            ListUserCollectionsUseCase(repos.collections).execute("")
