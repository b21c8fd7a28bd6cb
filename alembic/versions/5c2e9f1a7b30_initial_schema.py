"""initial schema: users, thoughts, thought_likes

Revision ID: 5c2e9f1a7b30
Revises:
Create Date: 2026-10-19 09:12:04.118220

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5c2e9f1a7b30"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(op.f("ix_users_created_at"), "users", ["created_at"], unique=False)

    op.create_table(
        "thoughts",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("message", sa.String(length=140), nullable=False),
        sa.Column("category", sa.String(length=20), nullable=False),
        sa.Column("hearts", sa.Integer(), nullable=False),
        sa.Column("owner_id", sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("hearts >= 0", name="ck_thoughts_hearts_non_negative"),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_thoughts_category"), "thoughts", ["category"], unique=False)
    op.create_index(op.f("ix_thoughts_hearts"), "thoughts", ["hearts"], unique=False)
    op.create_index(op.f("ix_thoughts_owner_id"), "thoughts", ["owner_id"], unique=False)
    op.create_index(op.f("ix_thoughts_created_at"), "thoughts", ["created_at"], unique=False)

    op.create_table(
        "thought_likes",
        sa.Column("thought_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["thought_id"], ["thoughts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("thought_id", "user_id"),
    )
    op.create_index(
        op.f("ix_thought_likes_thought_id"), "thought_likes", ["thought_id"], unique=False
    )
    op.create_index(op.f("ix_thought_likes_user_id"), "thought_likes", ["user_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_thought_likes_user_id"), table_name="thought_likes")
    op.drop_index(op.f("ix_thought_likes_thought_id"), table_name="thought_likes")
    op.drop_table("thought_likes")

    op.drop_index(op.f("ix_thoughts_created_at"), table_name="thoughts")
    op.drop_index(op.f("ix_thoughts_owner_id"), table_name="thoughts")
    op.drop_index(op.f("ix_thoughts_hearts"), table_name="thoughts")
    op.drop_index(op.f("ix_thoughts_category"), table_name="thoughts")
    op.drop_table("thoughts")

    op.drop_index(op.f("ix_users_created_at"), table_name="users")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")
