"""
===============================================================================
SOCIAL USE CASES PACKAGE (Public API / Exports)
===============================================================================

Component:
    social usecases package (__init__.py)

Responsibilities:
    - Re-exportar casos de uso de follows, likes y pins.
    - Re-exportar sus modelos de resultado.
===============================================================================
"""

from __future__ import annotations

# -----------------------------------------------------------------------------
# Use Cases
# -----------------------------------------------------------------------------
from .get_follow_status import GetFollowStatusUseCase
from .get_like_status import GetLikeStatusUseCase
from .get_pin_status import GetPinStatusUseCase
from .list_content_likes import ListContentLikesUseCase
from .list_follows import ListFollowsUseCase
from .list_user_likes import ListUserLikesUseCase
from .list_user_pins import ListUserPinsUseCase
from .toggle_follow import ToggleFollowUseCase
from .toggle_like import ToggleLikeUseCase
from .toggle_pin import TogglePinUseCase

# -----------------------------------------------------------------------------
# Result models
# -----------------------------------------------------------------------------
from .social_results import (
    FollowListEntry,
    FollowListKind,
    FollowStatus,
    LikeStatus,
    PinStatus,
    ToggleFollowResult,
    ToggleLikeResult,
    TogglePinResult,
    UserPins,
)

__all__ = [
    # Use Cases
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
    # Result models
    "ToggleFollowResult",
    "ToggleLikeResult",
    "TogglePinResult",
    "FollowStatus",
    "FollowListKind",
    "FollowListEntry",
    "LikeStatus",
    "PinStatus",
    "UserPins",
]
