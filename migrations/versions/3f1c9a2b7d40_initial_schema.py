"""initial_schema

Create the schema for threaded comments:
- Comments (one thread per page/field pair, parent_id 0 for top level)
- Votes (up/down, one per identity and comment within the cooldown)
- Notification queue (pending reply notifications)

Revision ID: 3f1c9a2b7d40
Revises:
Create Date: 2026-10-18 10:12:44.513027

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f1c9a2b7d40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("parent_id", sa.Integer(), server_default="0", nullable=False),
        sa.Column("page_id", sa.Integer(), nullable=False),
        sa.Column("field_id", sa.Integer(), nullable=False),
        sa.Column("author", sa.String(length=128), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("website", sa.String(length=255), nullable=True),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("stars", sa.SmallInteger(), nullable=True),
        sa.Column("status", sa.SmallInteger(), server_default="0", nullable=False),
        sa.Column("upvotes", sa.Integer(), server_default="0", nullable=False),
        sa.Column("downvotes", sa.Integer(), server_default="0", nullable=False),
        sa.Column(
            "notification", sa.SmallInteger(), server_default="0", nullable=False
        ),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column("sort_index", sa.Integer(), server_default="0", nullable=False),
        sa.Column(
            "remote_change_used",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
        sa.Column("code", sa.String(length=255), nullable=False),
        sa.Column("user_id", sa.Integer(), server_default="0", nullable=False),
        sa.Column("ip", sa.String(length=45), server_default="", nullable=False),
        sa.Column("user_agent", sa.Text(), server_default="", nullable=False),
        sa.Column(
            "spam_marked_at", postgresql.TIMESTAMP(timezone=True), nullable=True
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code", name="uq_comments_code"),
        sa.CheckConstraint("status IN (0, 1, 2, 3)", name="check_comment_status"),
        sa.CheckConstraint(
            "notification IN (0, 1, 2)", name="check_comment_notification"
        ),
        sa.CheckConstraint(
            "stars IS NULL OR (stars >= 1 AND stars <= 5)",
            name="check_comment_stars",
        ),
    )
    op.create_index("idx_comments_thread", "comments", ["page_id", "field_id"])
    op.create_index("idx_comments_parent_id", "comments", ["parent_id"])

    # ========================================================================
    # VOTES table
    # ========================================================================
    op.create_table(
        "votes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("comment_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), server_default="0", nullable=False),
        sa.Column("ip", sa.String(length=45), server_default="", nullable=False),
        sa.Column("user_agent", sa.Text(), server_default="", nullable=False),
        sa.Column("direction", sa.SmallInteger(), nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["comment_id"], ["comments.id"], ondelete="CASCADE"),
        sa.CheckConstraint("direction IN (-1, 1)", name="check_vote_direction"),
    )
    op.create_index(
        "idx_votes_identity",
        "votes",
        ["comment_id", "user_id", "ip", "user_agent"],
    )

    # ========================================================================
    # NOTIFICATION QUEUE table
    # ========================================================================
    op.create_table(
        "notification_queue",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("parent_comment_id", sa.Integer(), nullable=False),
        sa.Column("triggering_comment_id", sa.Integer(), nullable=False),
        sa.Column("recipient_email", sa.String(length=255), nullable=False),
        sa.Column("page_id", sa.Integer(), nullable=False),
        sa.Column("field_id", sa.Integer(), nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["triggering_comment_id"], ["comments.id"], ondelete="CASCADE"
        ),
        sa.UniqueConstraint(
            "triggering_comment_id", "recipient_email", name="uq_queue_recipient"
        ),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("notification_queue")
    op.drop_index("idx_votes_identity", table_name="votes")
    op.drop_table("votes")
    op.drop_index("idx_comments_parent_id", table_name="comments")
    op.drop_index("idx_comments_thread", table_name="comments")
    op.drop_table("comments")
