"""Casos de uso de Takopi (social + colecciones)."""

from .collections import (
    AddItemToCollectionUseCase,
    CollectionDetail,
    CreateCollectionInput,
    CreateCollectionUseCase,
    DeleteCollectionUseCase,
    GetCollectionUseCase,
    ListUserCollectionsUseCase,
    RemoveItemFromCollectionUseCase,
    UpdateCollectionInput,
    UpdateCollectionUseCase,
)
from .social import (
    FollowListEntry,
    FollowListKind,
    FollowStatus,
    GetFollowStatusUseCase,
    GetLikeStatusUseCase,
    GetPinStatusUseCase,
    LikeStatus,
    ListContentLikesUseCase,
    ListFollowsUseCase,
    ListUserLikesUseCase,
    ListUserPinsUseCase,
    PinStatus,
    ToggleFollowResult,
    ToggleFollowUseCase,
    ToggleLikeResult,
    ToggleLikeUseCase,
    TogglePinResult,
    TogglePinUseCase,
    UserPins,
)

__all__ = [
    "ToggleFollowUseCase",
    "GetFollowStatusUseCase",
    "ListFollowsUseCase",
    "ToggleLikeUseCase",
    "GetLikeStatusUseCase",
    "ListUserLikesUseCase",
    "ListContentLikesUseCase",
    "TogglePinUseCase",
    "GetPinStatusUseCase",
    "ListUserPinsUseCase",
    "ToggleFollowResult",
    "ToggleLikeResult",
    "TogglePinResult",
    "FollowStatus",
    "FollowListKind",
    "FollowListEntry",
    "LikeStatus",
    "PinStatus",
    "UserPins",
    "CreateCollectionInput",
    "CreateCollectionUseCase",
    "UpdateCollectionInput",
    "UpdateCollectionUseCase",
    "DeleteCollectionUseCase",
    "AddItemToCollectionUseCase",
    "RemoveItemFromCollectionUseCase",
    "GetCollectionUseCase",
    "ListUserCollectionsUseCase",
    "CollectionDetail",
]
