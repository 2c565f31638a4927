"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/social.py
===============================================================================

Class/Module:
    Social Router (follows / likes / pins)

Responsibilities:
    - Exponer endpoints HTTP de follows, likes y pins (toggles, estados y
      listados de perfil).
    - Convertir requests HTTP -> inputs de casos de uso.
    - Enforce de autenticación en el borde (require_user_id / optional_user_id).

Collaborators:
    - takopi.application.usecases.social
    - takopi.container (factories DI)
    - takopi.identity.auth
    - schemas.social (DTOs Pydantic)

Notes:
    - Las excepciones tipadas de los casos de uso las traduce
      api/exception_handlers.py (RFC 7807); acá no hay try/except.
===============================================================================
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from .....application.usecases.social import (
    FollowListKind,
    GetFollowStatusUseCase,
    GetLikeStatusUseCase,
    GetPinStatusUseCase,
    ListContentLikesUseCase,
    ListFollowsUseCase,
    ListUserLikesUseCase,
    ListUserPinsUseCase,
    ToggleFollowUseCase,
    ToggleLikeUseCase,
    TogglePinUseCase,
)
from .....container import (
    get_follow_status_use_case,
    get_like_status_use_case,
    get_list_content_likes_use_case,
    get_list_follows_use_case,
    get_list_user_likes_use_case,
    get_list_user_pins_use_case,
    get_pin_status_use_case,
    get_toggle_follow_use_case,
    get_toggle_like_use_case,
    get_toggle_pin_use_case,
)
from .....domain.entities import Like
from .....identity.auth import optional_user_id, require_user_id
from ..schemas.social import (
    FollowEntryRes,
    FollowListRes,
    FollowStatusRes,
    LikeEntryRes,
    LikeListRes,
    LikeStatusRes,
    PinEntryRes,
    PinStatusListRes,
    PinStatusRes,
    ToggleFollowReq,
    ToggleFollowRes,
    ToggleLikeReq,
    ToggleLikeRes,
    TogglePinReq,
    TogglePinRes,
    UserPinsRes,
)

router = APIRouter()


# =============================================================================
# Follows
# =============================================================================


@router.post("/follows/toggle", response_model=ToggleFollowRes, tags=["social"])
def toggle_follow(
    req: ToggleFollowReq,
    user_id: str = Depends(require_user_id),
    use_case: ToggleFollowUseCase = Depends(get_toggle_follow_use_case),
) -> ToggleFollowRes:
    result = use_case.execute(user_id, req.following_id)
    return ToggleFollowRes(
        is_following=result.is_following,
        follow_id=result.follow.id if result.follow else None,
    )


@router.get("/follows/status", response_model=FollowStatusRes, tags=["social"])
def follow_status(
    following_id: str = Query(..., description="Usuario consultado"),
    user_id: str = Depends(require_user_id),
    use_case: GetFollowStatusUseCase = Depends(get_follow_status_use_case),
) -> FollowStatusRes:
    status = use_case.execute(user_id, following_id.strip())
    return FollowStatusRes(
        is_following=status.is_following,
        followers_count=status.followers_count,
        following_count=status.following_count,
    )


@router.get("/follows", response_model=FollowListRes, tags=["social"])
def list_follows(
    user_id: str = Query(..., description="Dueño del listado"),
    kind: FollowListKind = Query(..., alias="type"),
    viewer_id: Optional[str] = Depends(optional_user_id),
    use_case: ListFollowsUseCase = Depends(get_list_follows_use_case),
) -> FollowListRes:
    entries = use_case.execute(user_id.strip(), kind, viewer_id)
    return FollowListRes(
        user_id=user_id.strip(),
        type=kind,
        items=[
            FollowEntryRes(
                user_id=e.user_id,
                followed_at=e.followed_at,
                is_following=e.is_following,
                is_me=e.is_me,
            )
            for e in entries
        ],
        total=len(entries),
    )


# =============================================================================
# Likes
# =============================================================================


@router.post("/likes/toggle", response_model=ToggleLikeRes, tags=["social"])
def toggle_like(
    req: ToggleLikeReq,
    user_id: str = Depends(require_user_id),
    use_case: ToggleLikeUseCase = Depends(get_toggle_like_use_case),
) -> ToggleLikeRes:
    result = use_case.execute(user_id, req.content_id)
    return ToggleLikeRes(liked=result.liked, likes_count=result.likes_count)


@router.get("/likes", response_model=LikeStatusRes, tags=["social"])
def like_status(
    content_id: str = Query(..., description="Contenido consultado"),
    user_id: Optional[str] = Depends(optional_user_id),
    use_case: GetLikeStatusUseCase = Depends(get_like_status_use_case),
) -> LikeStatusRes:
    status = use_case.execute(content_id.strip(), user_id)
    return LikeStatusRes(
        content_id=content_id.strip(),
        likes_count=status.likes_count,
        is_liked=status.is_liked,
    )


def _to_like_list_res(likes: List[Like]) -> LikeListRes:
    return LikeListRes(
        items=[
            LikeEntryRes(
                user_id=like.user_id,
                content_id=like.content_id,
                liked_at=like.created_at,
            )
            for like in likes
        ],
        total=len(likes),
    )


@router.get("/users/{user_id}/likes", response_model=LikeListRes, tags=["social"])
def list_user_likes(
    user_id: str,
    use_case: ListUserLikesUseCase = Depends(get_list_user_likes_use_case),
) -> LikeListRes:
    return _to_like_list_res(use_case.execute(user_id.strip()))


@router.get(
    "/contents/{content_id}/likes", response_model=LikeListRes, tags=["social"]
)
def list_content_likes(
    content_id: str,
    use_case: ListContentLikesUseCase = Depends(get_list_content_likes_use_case),
) -> LikeListRes:
    return _to_like_list_res(use_case.execute(content_id.strip()))


# =============================================================================
# Pins
# =============================================================================


@router.post("/pins/toggle", response_model=TogglePinRes, tags=["social"])
def toggle_pin(
    req: TogglePinReq,
    user_id: str = Depends(require_user_id),
    use_case: TogglePinUseCase = Depends(get_toggle_pin_use_case),
) -> TogglePinRes:
    result = use_case.execute(user_id, req.content_id, req.is_public)
    return TogglePinRes(pinned=result.pinned, pins_count=result.pins_count)


@router.get("/pins", response_model=PinStatusListRes, tags=["social"])
def pin_status(
    content_ids: str = Query(..., description="Ids separados por coma"),
    user_id: Optional[str] = Depends(optional_user_id),
    use_case: GetPinStatusUseCase = Depends(get_pin_status_use_case),
) -> PinStatusListRes:
    ids = [cid.strip() for cid in content_ids.split(",")]
    statuses = use_case.execute(ids, user_id)
    return PinStatusListRes(
        items=[
            PinStatusRes(
                content_id=s.content_id,
                pins_count=s.pins_count,
                is_pinned=s.is_pinned,
            )
            for s in statuses
        ]
    )


@router.get("/users/{user_id}/pins", response_model=UserPinsRes, tags=["social"])
def list_user_pins(
    user_id: str,
    viewer_id: Optional[str] = Depends(optional_user_id),
    use_case: ListUserPinsUseCase = Depends(get_list_user_pins_use_case),
) -> UserPinsRes:
    result = use_case.execute(user_id.strip(), viewer_id)
    return UserPinsRes(
        user_id=user_id.strip(),
        items=[
            PinEntryRes(
                content_id=p.content_id,
                is_public=p.is_public,
                pinned_at=p.created_at,
            )
            for p in result.pins
        ],
        total=result.total,
    )
