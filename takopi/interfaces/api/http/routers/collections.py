"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/collections.py
===============================================================================

Class/Module:
    Collections Router

Responsibilities:
    - Exponer endpoints HTTP de colecciones e items.
    - Convertir requests HTTP -> inputs de casos de uso.
    - Mapear entidades de dominio -> DTOs HTTP.

Collaborators:
    - takopi.application.usecases.collections
    - takopi.container (factories DI)
    - takopi.identity.auth
    - schemas.collections (DTOs Pydantic)

Patterns:
    - Controller / Router
    - Adapter (HTTP -> UseCase)
===============================================================================
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from .....application.usecases.collections import (
    AddItemToCollectionUseCase,
    CreateCollectionInput,
    CreateCollectionUseCase,
    DeleteCollectionUseCase,
    GetCollectionUseCase,
    ListUserCollectionsUseCase,
    RemoveItemFromCollectionUseCase,
    UpdateCollectionInput,
    UpdateCollectionUseCase,
)
from .....container import (
    get_add_item_use_case,
    get_create_collection_use_case,
    get_delete_collection_use_case,
    get_get_collection_use_case,
    get_list_user_collections_use_case,
    get_remove_item_use_case,
    get_update_collection_use_case,
)
from .....domain.entities import Collection, CollectionItem
from .....identity.auth import optional_user_id, require_user_id
from ..schemas.collections import (
    AddItemReq,
    CollectionDetailRes,
    CollectionItemRes,
    CollectionItemsRes,
    CollectionRes,
    CollectionsListRes,
    CreateCollectionReq,
    UpdateCollectionReq,
)

router = APIRouter()


# =============================================================================
# Helpers internos (puros / sin IO)
# =============================================================================


def _to_collection_res(c: Collection) -> CollectionRes:
    return CollectionRes(
        id=c.id,
        user_id=c.user_id,
        title=c.title,
        description=c.description,
        is_public=c.is_public,
        item_count=c.item_count,
        created_at=c.created_at,
        updated_at=c.updated_at,
    )


def _to_item_res(item: CollectionItem) -> CollectionItemRes:
    return CollectionItemRes(
        id=item.id,
        collection_id=item.collection_id,
        content_id=item.content_id,
        added_at=item.added_at,
    )


def _to_list_res(collections: list[Collection]) -> CollectionsListRes:
    return CollectionsListRes(
        collections=[_to_collection_res(c) for c in collections],
        total=len(collections),
    )


# =============================================================================
# Collections
# =============================================================================


@router.get("/collections", response_model=CollectionsListRes, tags=["collections"])
def list_my_collections(
    user_id: str = Depends(require_user_id),
    use_case: ListUserCollectionsUseCase = Depends(get_list_user_collections_use_case),
) -> CollectionsListRes:
    return _to_list_res(use_case.execute(user_id, user_id))


@router.post(
    "/collections",
    response_model=CollectionRes,
    status_code=status.HTTP_201_CREATED,
    tags=["collections"],
)
def create_collection(
    req: CreateCollectionReq,
    user_id: str = Depends(require_user_id),
    use_case: CreateCollectionUseCase = Depends(get_create_collection_use_case),
) -> CollectionRes:
    created = use_case.execute(
        CreateCollectionInput(
            user_id=user_id,
            title=req.title,
            description=req.description,
            is_public=req.is_public,
        )
    )
    return _to_collection_res(created)


@router.get(
    "/collections/{collection_id}",
    response_model=CollectionDetailRes,
    tags=["collections"],
)
def get_collection(
    collection_id: str,
    viewer_id: Optional[str] = Depends(optional_user_id),
    use_case: GetCollectionUseCase = Depends(get_get_collection_use_case),
) -> CollectionDetailRes:
    detail = use_case.execute(collection_id, viewer_id)
    return CollectionDetailRes(
        **_to_collection_res(detail.collection).model_dump(),
        items=[_to_item_res(i) for i in detail.items],
    )


@router.patch(
    "/collections/{collection_id}",
    response_model=CollectionRes,
    tags=["collections"],
)
def update_collection(
    collection_id: str,
    req: UpdateCollectionReq,
    user_id: str = Depends(require_user_id),
    use_case: UpdateCollectionUseCase = Depends(get_update_collection_use_case),
) -> CollectionRes:
    updated = use_case.execute(
        collection_id,
        user_id,
        UpdateCollectionInput(
            title=req.title,
            description=req.description,
            is_public=req.is_public,
        ),
    )
    return _to_collection_res(updated)


@router.delete(
    "/collections/{collection_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["collections"],
)
def delete_collection(
    collection_id: str,
    user_id: str = Depends(require_user_id),
    use_case: DeleteCollectionUseCase = Depends(get_delete_collection_use_case),
) -> Response:
    use_case.execute(collection_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =============================================================================
# Items
# =============================================================================


@router.get(
    "/collections/{collection_id}/items",
    response_model=CollectionItemsRes,
    tags=["collections"],
)
def list_collection_items(
    collection_id: str,
    viewer_id: Optional[str] = Depends(optional_user_id),
    use_case: GetCollectionUseCase = Depends(get_get_collection_use_case),
) -> CollectionItemsRes:
    detail = use_case.execute(collection_id, viewer_id)
    return CollectionItemsRes(
        collection_id=detail.collection.id,
        items=[_to_item_res(i) for i in detail.items],
        total=len(detail.items),
    )


@router.post(
    "/collections/{collection_id}/items",
    response_model=CollectionItemRes,
    status_code=status.HTTP_201_CREATED,
    tags=["collections"],
)
def add_collection_item(
    collection_id: str,
    req: AddItemReq,
    user_id: str = Depends(require_user_id),
    use_case: AddItemToCollectionUseCase = Depends(get_add_item_use_case),
) -> CollectionItemRes:
    item = use_case.execute(collection_id, req.content_id.strip(), user_id)
    return _to_item_res(item)


@router.delete(
    "/collections/{collection_id}/items/{content_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["collections"],
)
def remove_collection_item(
    collection_id: str,
    content_id: str,
    user_id: str = Depends(require_user_id),
    use_case: RemoveItemFromCollectionUseCase = Depends(get_remove_item_use_case),
) -> Response:
    use_case.execute(collection_id, content_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =============================================================================
# Perfil público
# =============================================================================


@router.get(
    "/users/{user_id}/collections",
    response_model=CollectionsListRes,
    tags=["collections"],
)
def list_user_collections(
    user_id: str,
    viewer_id: Optional[str] = Depends(optional_user_id),
    use_case: ListUserCollectionsUseCase = Depends(get_list_user_collections_use_case),
) -> CollectionsListRes:
    return _to_list_res(use_case.execute(user_id, viewer_id))
