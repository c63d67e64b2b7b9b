"""Initial demo data schema.

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-18 00:00:00
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import sqlalchemy as sa
from alembic import op

if TYPE_CHECKING:
    from collections.abc import Sequence

revision: str = "0001_initial_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

UUID_LENGTH = 38


def _identity() -> list[sa.Column[object]]:
    return [
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(UUID_LENGTH), nullable=False, unique=True),
    ]


def upgrade() -> None:
    op.create_table(
        "person",
        *_identity(),
        sa.Column("gender", sa.String(50), nullable=True),
        sa.Column("voided", sa.Boolean(), nullable=False),
    )
    op.create_table(
        "person_name",
        *_identity(),
        sa.Column(
            "person_id",
            sa.Integer(),
            sa.ForeignKey("person.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("given_name", sa.String(50), nullable=True),
        sa.Column("family_name", sa.String(50), nullable=True),
        sa.Column("preferred", sa.Boolean(), nullable=False),
        sa.Column("voided", sa.Boolean(), nullable=False),
    )
    op.create_index("ix_person_name_person", "person_name", ["person_id"])

    op.create_table(
        "role",
        *_identity(),
        sa.Column("name", sa.String(50), nullable=False, unique=True),
        sa.Column("description", sa.String(255), nullable=True),
    )
    op.create_table(
        "role_role",
        sa.Column(
            "child_role_id",
            sa.Integer(),
            sa.ForeignKey("role.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "parent_role_id",
            sa.Integer(),
            sa.ForeignKey("role.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )
    op.create_table(
        "users",
        *_identity(),
        sa.Column("username", sa.String(50), nullable=True, unique=True),
        sa.Column("person_id", sa.Integer(), sa.ForeignKey("person.id"), nullable=True),
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column("retired", sa.Boolean(), nullable=False),
    )
    op.create_table(
        "user_role",
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "role_id",
            sa.Integer(),
            sa.ForeignKey("role.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )

    op.create_table(
        "provider_role",
        *_identity(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("retired", sa.Boolean(), nullable=False),
    )
    op.create_table(
        "provider",
        *_identity(),
        sa.Column("identifier", sa.String(255), nullable=True),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("person_id", sa.Integer(), sa.ForeignKey("person.id"), nullable=True),
        sa.Column(
            "provider_role_id",
            sa.Integer(),
            sa.ForeignKey("provider_role.id"),
            nullable=True,
        ),
        sa.Column("retired", sa.Boolean(), nullable=False),
    )
    op.create_index("ix_provider_person", "provider", ["person_id"])

    op.create_table(
        "concept_source",
        *_identity(),
        sa.Column("name", sa.String(50), nullable=False, unique=True),
        sa.Column("description", sa.String(1024), nullable=True),
        sa.Column("hl7_code", sa.String(50), nullable=True),
        sa.Column("retired", sa.Boolean(), nullable=False),
    )
    op.create_table(
        "concept_map_type",
        *_identity(),
        sa.Column("name", sa.String(255), nullable=False, unique=True),
        sa.Column("is_hidden", sa.Boolean(), nullable=False),
        sa.Column("retired", sa.Boolean(), nullable=False),
    )
    op.create_table(
        "concept_reference_term",
        *_identity(),
        sa.Column(
            "source_id",
            sa.Integer(),
            sa.ForeignKey("concept_source.id"),
            nullable=False,
        ),
        sa.Column("code", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("retired", sa.Boolean(), nullable=False),
        sa.UniqueConstraint("source_id", "code", name="uq_concept_reference_term_source_code"),
    )
    op.create_table(
        "concept",
        *_identity(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("is_set", sa.Boolean(), nullable=False),
        sa.Column("retired", sa.Boolean(), nullable=False),
    )
    op.create_table(
        "concept_set",
        sa.Column(
            "concept_set_id",
            sa.Integer(),
            sa.ForeignKey("concept.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "concept_id",
            sa.Integer(),
            sa.ForeignKey("concept.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )
    op.create_table(
        "concept_map",
        *_identity(),
        sa.Column(
            "concept_id",
            sa.Integer(),
            sa.ForeignKey("concept.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "term_id",
            sa.Integer(),
            sa.ForeignKey("concept_reference_term.id"),
            nullable=False,
        ),
        sa.Column(
            "map_type_id",
            sa.Integer(),
            sa.ForeignKey("concept_map_type.id"),
            nullable=True,
        ),
    )
    op.create_index("ix_concept_map_concept", "concept_map", ["concept_id"])

    op.create_table(
        "global_property",
        *_identity(),
        sa.Column("name", sa.String(255), nullable=False, unique=True),
        sa.Column("value", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
    )


def downgrade() -> None:
    op.drop_table("global_property")
    op.drop_index("ix_concept_map_concept", table_name="concept_map")
    op.drop_table("concept_map")
    op.drop_table("concept_set")
    op.drop_table("concept")
    op.drop_table("concept_reference_term")
    op.drop_table("concept_map_type")
    op.drop_table("concept_source")
    op.drop_index("ix_provider_person", table_name="provider")
    op.drop_table("provider")
    op.drop_table("provider_role")
    op.drop_table("user_role")
    op.drop_table("users")
    op.drop_table("role_role")
    op.drop_table("role")
    op.drop_index("ix_person_name_person", table_name="person_name")
    op.drop_table("person_name")
    op.drop_table("person")
