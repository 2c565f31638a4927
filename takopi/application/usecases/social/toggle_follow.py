"""
===============================================================================
USE CASE: Toggle Follow
===============================================================================

Name:
    Toggle Follow Use Case

Business Goal:
    Seguir a un usuario si todavía no se lo sigue, o dejar de seguirlo si ya
    se lo sigue, con una sola operación idempotente-por-pares desde la UI.

Why (Context / Intención):
    - El botón "Seguir" de la UI es un toggle: el cliente no necesita saber el
      estado actual para enviar la acción.
    - Invariantes:
        * follower_id y following_id no vacíos
        * un usuario nunca puede seguirse a sí mismo (sin importar el storage)
        * a lo sumo una arista por (follower_id, following_id)

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    ToggleFollowUseCase

Responsibilities:
    - Validar ids y auto-follow ANTES de tocar el storage.
    - Buscar la arista por clave natural.
    - Borrarla (unfollow) o crearla (follow).
    - Loguear el cambio de estado.

Collaborators:
    - FollowRepository:
        find_by_users(follower_id, following_id) -> Follow | None
        create(follower_id, following_id) -> Follow
        delete(follow_id) -> bool

-------------------------------------------------------------------------------
INPUTS / OUTPUTS
-------------------------------------------------------------------------------
Inputs:
    follower_id: str, following_id: str

Outputs:
    ToggleFollowResult(is_following, follow)

Errors:
    - ValidationError: ids vacíos
    - SelfFollowError: follower_id == following_id
    - OperationalError: el borrado no pudo aplicarse
    - ConflictError: un toggle concurrente ganó la carrera (lo lanza el storage)
===============================================================================
"""

from __future__ import annotations

import logging

from ....crosscutting.exceptions import OperationalError, SelfFollowError, ValidationError
from ....domain.repositories import FollowRepository
from .social_results import ToggleFollowResult

logger = logging.getLogger(__name__)


class ToggleFollowUseCase:
    """Use Case (Command): follow/unfollow por clave natural."""

    def __init__(self, follow_repository: FollowRepository) -> None:
        self._follows = follow_repository

    def execute(self, follower_id: str, following_id: str) -> ToggleFollowResult:
        # ---------------------------------------------------------------------
        # 1) Validar input (nada se persiste si falla).
        # ---------------------------------------------------------------------
        if not follower_id:
            raise ValidationError("ID del seguidor es requerido")
        if not following_id:
            raise ValidationError("ID del usuario a seguir es requerido")
        if follower_id == following_id:
            raise SelfFollowError("No puedes seguirte a ti mismo")

        # ---------------------------------------------------------------------
        # 2) Estado actual.
        # ---------------------------------------------------------------------
        existing = self._follows.find_by_users(follower_id, following_id)

        # ---------------------------------------------------------------------
        # 3) Unfollow.
        # ---------------------------------------------------------------------
        if existing is not None:
            if not self._follows.delete(existing.id):
                raise OperationalError("Error al dejar de seguir")
            logger.info(
                "Unfollow",
                extra={"follower_id": follower_id, "following_id": following_id},
            )
            return ToggleFollowResult(is_following=False)

        # ---------------------------------------------------------------------
        # 4) Follow.
        # ---------------------------------------------------------------------
        follow = self._follows.create(follower_id, following_id)
        logger.info(
            "Follow",
            extra={
                "follower_id": follower_id,
                "following_id": following_id,
                "follow_id": follow.id,
            },
        )
        return ToggleFollowResult(is_following=True, follow=follow)
