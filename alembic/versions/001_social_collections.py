"""
============================================================
TARJETA CRC (Class / Responsibilities / Collaborators)
============================================================
Class: 001_social_collections (Alembic Migration)

Responsibilities:
  - Crear el esquema social (follows, likes, pins) y de colecciones
    (collections, collection_items).
  - Delegar a la DB las claves naturales (unique constraints) para que dos
    toggles concurrentes nunca dupliquen una relación.

Collaborators:
  - PostgreSQL 16+
  - infrastructure/repositories/postgres/* (usan este esquema como contrato)

Policy:
  - Convención de nombres (constraints / indexes):
      pk_<tabla>                         - Primary keys
      uq_<tabla>_<cols>                  - Unique constraints
      ix_<tabla>_<col>                   - Indexes
      fk_<tabla>_<col>__<ref_tabla>      - Foreign keys
      ck_<tabla>_<regla>                 - Check constraints
  - Ids como texto: el backend local genera ids no-UUID y ambos backends
    exponen el mismo tipo.
============================================================
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001_social_collections"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at(name: str = "created_at") -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.text("now()"),
    )


def upgrade() -> None:
    """
    Orden:
      1) Follows
      2) Likes / Pins
      3) Collections / Items
    """

    # =========================================================
    # 1) FOLLOWS
    # =========================================================
    op.create_table(
        "follows",
        sa.Column("id", sa.Text, nullable=False),
        sa.Column("follower_id", sa.Text, nullable=False),
        sa.Column("following_id", sa.Text, nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name="pk_follows"),
        sa.UniqueConstraint(
            "follower_id",
            "following_id",
            name="uq_follows_follower_id_following_id",
        ),
        sa.CheckConstraint(
            # op.f: nombre final (no re-aplicar la naming convention de ck).
            "follower_id <> following_id", name=op.f("ck_follows_no_self_follow")
        ),
    )
    op.create_index("ix_follows_following_id", "follows", ["following_id"])
    op.create_index("ix_follows_created_at", "follows", ["created_at"])

    # =========================================================
    # 2) LIKES / PINS
    # =========================================================
    op.create_table(
        "likes",
        sa.Column("id", sa.Text, nullable=False),
        sa.Column("user_id", sa.Text, nullable=False),
        sa.Column("content_id", sa.Text, nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name="pk_likes"),
        sa.UniqueConstraint(
            "content_id", "user_id", name="uq_likes_content_id_user_id"
        ),
    )
    op.create_index("ix_likes_user_id", "likes", ["user_id"])

    op.create_table(
        "pins",
        sa.Column("id", sa.Text, nullable=False),
        sa.Column("user_id", sa.Text, nullable=False),
        sa.Column("content_id", sa.Text, nullable=False),
        sa.Column(
            "is_public",
            sa.Boolean,
            nullable=False,
            server_default=sa.text("true"),
        ),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name="pk_pins"),
        sa.UniqueConstraint("user_id", "content_id", name="uq_pins_user_id_content_id"),
    )
    op.create_index("ix_pins_content_id", "pins", ["content_id"])

    # =========================================================
    # 3) COLLECTIONS / ITEMS
    # =========================================================
    op.create_table(
        "collections",
        sa.Column("id", sa.Text, nullable=False),
        sa.Column("user_id", sa.Text, nullable=False),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column(
            "is_public",
            sa.Boolean,
            nullable=False,
            server_default=sa.text("true"),
        ),
        _created_at(),
        _created_at("updated_at"),
        sa.PrimaryKeyConstraint("id", name="pk_collections"),
    )
    op.create_index("ix_collections_user_id", "collections", ["user_id"])
    op.create_index("ix_collections_updated_at", "collections", ["updated_at"])

    op.create_table(
        "collection_items",
        sa.Column("id", sa.Text, nullable=False),
        sa.Column("collection_id", sa.Text, nullable=False),
        sa.Column("content_id", sa.Text, nullable=False),
        _created_at("added_at"),
        sa.PrimaryKeyConstraint("id", name="pk_collection_items"),
        sa.ForeignKeyConstraint(
            ["collection_id"],
            ["collections.id"],
            name="fk_collection_items_collection_id__collections",
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint(
            "collection_id",
            "content_id",
            name="uq_collection_items_collection_id_content_id",
        ),
    )
    op.create_index(
        "ix_collection_items_content_id", "collection_items", ["content_id"]
    )


def downgrade() -> None:
    # Orden inverso por FKs.
    op.drop_table("collection_items")
    op.drop_table("collections")
    op.drop_table("pins")
    op.drop_table("likes")
    op.drop_table("follows")
