"""
===============================================================================
SOCIAL USE CASE RESULTS (Shared Result Models)
===============================================================================

Name:
    Social Use Case Results

Business Goal:
    Modelos de salida estables para follows, likes y pins, independientes del
    backend de storage y de la capa HTTP.

Why (Context / Intención):
    - Los errores se comunican con excepciones tipadas (crosscutting.exceptions);
      acá solo viven los valores de éxito.
    - Los conteos viajan junto al estado para que el cliente no tenga que
      re-consultar después de un toggle.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    social_results models (module)

Responsibilities:
    - ToggleFollowResult / ToggleLikeResult / TogglePinResult (comandos).
    - FollowStatus / LikeStatus / PinStatus (consultas de estado).
    - FollowListKind + FollowListEntry (listados de seguidores/seguidos).
    - UserPins (pins del perfil).

Collaborators:
    - domain.entities.Follow, Pin
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, Optional

from ....domain.entities import Follow, Pin


@dataclass(frozen=True)
class ToggleFollowResult:
    """is_following refleja el estado DESPUÉS del toggle."""

    is_following: bool
    follow: Optional[Follow] = None


@dataclass(frozen=True)
class ToggleLikeResult:
    liked: bool
    likes_count: int


@dataclass(frozen=True)
class TogglePinResult:
    pinned: bool
    pins_count: int


@dataclass(frozen=True)
class FollowStatus:
    is_following: bool
    followers_count: int
    following_count: int


class FollowListKind(str, Enum):
    """
    Qué lado del grafo listar.

      - FOLLOWERS: quienes siguen a user_id
      - FOLLOWING: a quienes sigue user_id
    """

    FOLLOWERS = "followers"
    FOLLOWING = "following"


@dataclass(frozen=True)
class FollowListEntry:
    user_id: str
    followed_at: datetime
    is_following: bool
    is_me: bool


@dataclass(frozen=True)
class LikeStatus:
    likes_count: int
    is_liked: bool


@dataclass(frozen=True)
class PinStatus:
    content_id: str
    pins_count: int
    is_pinned: bool


@dataclass(frozen=True)
class UserPins:
    """public_only indica si el listado se filtró para un viewer ajeno."""

    pins: List[Pin]
    total: int
    public_only: bool
