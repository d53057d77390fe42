"""SQLAlchemy table definitions for hublink.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("username", String(255), nullable=False, unique=True),
    Column("email", String(255), nullable=False),
    Column("email_confirmed", Boolean, nullable=False, server_default="false"),
    Column("fullname", String(255), nullable=True),
    Column("picture", Text, nullable=True),
    Column("uploaded_picture", Text, nullable=True),
    Column("external_id", String(255), nullable=True),  # Mirrors identity_index
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# Emails are unique regardless of case
Index("users_email_lower_key", func.lower(users_table.c.email), unique=True)

# ============================================================================
# IDENTITY INDEX TABLE (external ID -> user ID)
# ============================================================================
identity_index_table = Table(
    "identity_index",
    metadata,
    Column("external_id", String(255), primary_key=True),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_identity_index_user_id", identity_index_table.c.user_id)

# ============================================================================
# PENDING VALIDATIONS TABLE (accounts with unconfirmed email)
# ============================================================================
pending_validations_table = Table(
    "pending_validations",
    metadata,
    Column(
        "user_id",
        UUID,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("confirmation_token", String(255), nullable=True),
    Column("confirmation_sent_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# ADMIN SETTINGS TABLE (namespaced key/value)
# ============================================================================
admin_settings_table = Table(
    "admin_settings",
    metadata,
    Column("namespace", String(100), primary_key=True),
    Column("key", String(100), primary_key=True),
    Column("value", Text, nullable=True),
)
