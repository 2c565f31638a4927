"""
===============================================================================
USE CASE: List Follows (followers / following)
===============================================================================

Name:
    List Follows Use Case

Business Goal:
    Listar los seguidores o los seguidos de un usuario, enriquecidos con el
    punto de vista del viewer (¿lo sigo? ¿soy yo?).

Why (Context / Intención):
    - La UI pinta el botón "Seguir" en cada fila sin una consulta extra por
      fila: el set de seguidos del viewer se carga una sola vez.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    ListFollowsUseCase

Responsibilities:
    - Elegir el lado del grafo según FollowListKind.
    - Proyectar cada arista al "otro" usuario de la relación.
    - Marcar is_following / is_me respecto del viewer (anónimo => False).

Collaborators:
    - FollowRepository: find_by_following, find_by_follower
===============================================================================
"""

from __future__ import annotations

from typing import List, Optional

from ....crosscutting.exceptions import ValidationError
from ....domain.repositories import FollowRepository
from .social_results import FollowListEntry, FollowListKind


class ListFollowsUseCase:
    """Use Case (Query): listado de follows desde el punto de vista del viewer."""

    def __init__(self, follow_repository: FollowRepository) -> None:
        self._follows = follow_repository

    def execute(
        self,
        user_id: str,
        kind: FollowListKind,
        viewer_id: Optional[str] = None,
    ) -> List[FollowListEntry]:
        # ---------------------------------------------------------------------
        # 1) Validar input.
        # ---------------------------------------------------------------------
        if not user_id:
            raise ValidationError("ID de usuario es requerido")
        try:
            kind = FollowListKind(kind)
        except ValueError as exc:
            raise ValidationError(
                "Tipo de listado inválido (followers | following)"
            ) from exc

        # ---------------------------------------------------------------------
        # 2) Aristas del lado pedido (ya vienen newest first).
        # ---------------------------------------------------------------------
        if kind is FollowListKind.FOLLOWERS:
            edges = self._follows.find_by_following(user_id)
            other_ids = [(f.follower_id, f.created_at) for f in edges]
        else:
            edges = self._follows.find_by_follower(user_id)
            other_ids = [(f.following_id, f.created_at) for f in edges]

        # ---------------------------------------------------------------------
        # 3) Punto de vista del viewer.
        # ---------------------------------------------------------------------
        viewer_following: set[str] = set()
        if viewer_id:
            viewer_following = {
                f.following_id for f in self._follows.find_by_follower(viewer_id)
            }

        return [
            FollowListEntry(
                user_id=other_id,
                followed_at=followed_at,
                is_following=other_id in viewer_following,
                is_me=viewer_id is not None and other_id == viewer_id,
            )
            for other_id, followed_at in other_ids
        ]
