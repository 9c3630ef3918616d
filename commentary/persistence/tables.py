"""SQLAlchemy table definitions for Commentary.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    SmallInteger,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    # 0 for top-level comments, so no foreign key
    Column("parent_id", Integer, nullable=False, server_default="0"),
    Column("page_id", Integer, nullable=False),
    Column("field_id", Integer, nullable=False),
    Column("author", String(128), nullable=False),
    Column("email", String(255), nullable=False),
    Column("website", String(255), nullable=True),
    Column("text", Text, nullable=False),
    Column("stars", SmallInteger, nullable=True),
    # 0 pending, 1 approved, 2 spam, 3 spam with replies
    Column("status", SmallInteger, nullable=False, server_default="0"),
    Column("upvotes", Integer, nullable=False, server_default="0"),
    Column("downvotes", Integer, nullable=False, server_default="0"),
    # 0 none, 1 replies, 2 all
    Column("notification", SmallInteger, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("sort_index", Integer, nullable=False, server_default="0"),
    Column("remote_change_used", Boolean, nullable=False, server_default="false"),
    Column("code", String(255), nullable=False),
    Column("user_id", Integer, nullable=False, server_default="0"),
    Column("ip", String(45), nullable=False, server_default=""),
    Column("user_agent", Text, nullable=False, server_default=""),
    Column("spam_marked_at", TIMESTAMP(timezone=True), nullable=True),
    UniqueConstraint("code", name="uq_comments_code"),
    CheckConstraint("status IN (0, 1, 2, 3)", name="check_comment_status"),
    CheckConstraint("notification IN (0, 1, 2)", name="check_comment_notification"),
    CheckConstraint(
        "stars IS NULL OR (stars >= 1 AND stars <= 5)", name="check_comment_stars"
    ),
)

Index("idx_comments_thread", comments_table.c.page_id, comments_table.c.field_id)
Index("idx_comments_parent_id", comments_table.c.parent_id)

# ============================================================================
# VOTES TABLE
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "comment_id",
        Integer,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", Integer, nullable=False, server_default="0"),
    Column("ip", String(45), nullable=False, server_default=""),
    Column("user_agent", Text, nullable=False, server_default=""),
    Column("direction", SmallInteger, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("direction IN (-1, 1)", name="check_vote_direction"),
)

# Lookup key of the cooldown check
Index(
    "idx_votes_identity",
    votes_table.c.comment_id,
    votes_table.c.user_id,
    votes_table.c.ip,
    votes_table.c.user_agent,
)

# ============================================================================
# NOTIFICATION QUEUE TABLE
# ============================================================================
notification_queue_table = Table(
    "notification_queue",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("parent_comment_id", Integer, nullable=False),
    Column(
        "triggering_comment_id",
        Integer,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("recipient_email", String(255), nullable=False),
    Column("page_id", Integer, nullable=False),
    Column("field_id", Integer, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint(
        "triggering_comment_id", "recipient_email", name="uq_queue_recipient"
    ),
)
