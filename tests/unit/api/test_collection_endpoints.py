"""
Name: Collection Endpoint Tests

Responsibilities:
  - CRUD on /v1/collections with ownership (403) and visibility rules
  - Items sub-resource (201 / 409 duplicate / 204 remove)
  - Public profile listing hides private collections
  - Validation errors are RFC 7807 422 with the business message
"""

import pytest
from fastapi.testclient import TestClient

from takopi.container import reset_container
from takopi.crosscutting.config import get_settings

pytestmark = pytest.mark.unit


@pytest.fixture
def client(tmp_path, monkeypatch):
    """R: TestClient over a fresh app wired to a tmp local store."""
    monkeypatch.setenv("STORAGE_MODE", "local")
    monkeypatch.setenv("STORAGE_PATH", str(tmp_path / "storage"))
    monkeypatch.setenv("COLLECTION_TITLE_MAX_CHARS", "20")
    get_settings.cache_clear()
    reset_container()

    from takopi.api.main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client

    get_settings.cache_clear()
    reset_container()


@pytest.fixture
def owner(auth_headers):
    return auth_headers("owner")


@pytest.fixture
def stranger(auth_headers):
    return auth_headers("stranger")


def _create(client, headers, **payload):
    body = {"title": "Favoritos", **payload}
    response = client.post("/v1/collections", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_returns_201_with_defaults(client, owner):
    created = _create(client, owner, title="  Favoritos  ")

    assert created["title"] == "Favoritos"
    assert created["user_id"] == "owner"
    assert created["is_public"] is True
    assert created["item_count"] == 0
    assert created["description"] is None


def test_create_requires_auth(client):
    response = client.post("/v1/collections", json={"title": "x"})

    assert response.status_code == 401


def test_title_limit_comes_from_settings(client, owner):
    response = client.post("/v1/collections", json={"title": "x" * 21}, headers=owner)

    assert response.status_code == 422
    assert response.json()["detail"] == "El título no puede tener más de 20 caracteres"


def test_list_my_collections_includes_private(client, owner):
    _create(client, owner, title="Publica")
    _create(client, owner, title="Privada", is_public=False)

    response = client.get("/v1/collections", headers=owner)

    body = response.json()
    assert body["total"] == 2
    assert [c["title"] for c in body["collections"]] == ["Privada", "Publica"]


def test_public_profile_hides_private(client, owner, stranger):
    _create(client, owner, title="Publica")
    _create(client, owner, title="Privada", is_public=False)

    anonymous = client.get("/v1/users/owner/collections")
    as_stranger = client.get("/v1/users/owner/collections", headers=stranger)
    as_owner = client.get("/v1/users/owner/collections", headers=owner)

    assert [c["title"] for c in anonymous.json()["collections"]] == ["Publica"]
    assert as_stranger.json()["total"] == 1
    assert as_owner.json()["total"] == 2


def test_private_detail_is_forbidden_for_others(client, owner, stranger):
    created = _create(client, owner, is_public=False)

    anonymous = client.get(f"/v1/collections/{created['id']}")
    as_stranger = client.get(f"/v1/collections/{created['id']}", headers=stranger)
    as_owner = client.get(f"/v1/collections/{created['id']}", headers=owner)

    assert anonymous.status_code == 403
    assert as_stranger.status_code == 403
    assert as_stranger.json()["code"] == "FORBIDDEN"
    assert as_owner.status_code == 200
    assert as_owner.json()["items"] == []


def test_unknown_collection_is_404(client):
    response = client.get("/v1/collections/does-not-exist")

    assert response.status_code == 404
    assert response.json()["detail"] == "Colección no encontrada"


def test_patch_by_owner(client, owner):
    created = _create(client, owner, description="desc")

    response = client.patch(
        f"/v1/collections/{created['id']}",
        json={"description": "", "is_public": False},
        headers=owner,
    )

    body = response.json()
    assert response.status_code == 200
    assert body["description"] is None
    assert body["is_public"] is False
    assert body["title"] == "Favoritos"


def test_patch_by_stranger_is_403_and_unchanged(client, owner, stranger):
    created = _create(client, owner)

    response = client.patch(
        f"/v1/collections/{created['id']}", json={"title": "Hack"}, headers=stranger
    )
    current = client.get(f"/v1/collections/{created['id']}")

    assert response.status_code == 403
    assert response.json()["detail"] == "No tienes permiso para editar esta colección"
    assert current.json()["title"] == "Favoritos"


def test_items_lifecycle(client, owner):
    created = _create(client, owner)
    items_url = f"/v1/collections/{created['id']}/items"

    added = client.post(items_url, json={"content_id": "content-42"}, headers=owner)
    duplicate = client.post(items_url, json={"content_id": "content-42"}, headers=owner)
    listed = client.get(items_url)

    assert added.status_code == 201
    assert added.json()["content_id"] == "content-42"
    assert duplicate.status_code == 409
    assert duplicate.json()["detail"] == "Este producto ya está en la colección"
    assert listed.json()["total"] == 1
    assert listed.json()["collection_id"] == created["id"]

    removed = client.delete(f"{items_url}/content-42", headers=owner)
    detail = client.get(f"/v1/collections/{created['id']}")

    assert removed.status_code == 204
    assert detail.json()["item_count"] == 0


def test_add_item_by_stranger_is_403(client, owner, stranger):
    created = _create(client, owner)

    response = client.post(
        f"/v1/collections/{created['id']}/items",
        json={"content_id": "content-1"},
        headers=stranger,
    )

    assert response.status_code == 403


def test_delete_by_stranger_keeps_collection(client, owner, stranger):
    created = _create(client, owner)

    response = client.delete(f"/v1/collections/{created['id']}", headers=stranger)

    assert response.status_code == 403
    assert client.get(f"/v1/collections/{created['id']}").status_code == 200


def test_delete_by_owner(client, owner):
    created = _create(client, owner)

    response = client.delete(f"/v1/collections/{created['id']}", headers=owner)

    assert response.status_code == 204
    assert client.get(f"/v1/collections/{created['id']}").status_code == 404


def test_missing_title_field_is_request_validation(client, owner):
    response = client.post("/v1/collections", json={}, headers=owner)

    assert response.status_code == 422
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert any("title" in e.get("loc", []) for e in body["errors"])
