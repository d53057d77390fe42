"""case_insensitive_email

Make user emails unique regardless of case, so Alice@Example.com and
alice@example.com cannot belong to two accounts. Existing rows that
differ only by case must be merged by hand before upgrading.

Revision ID: 8e4b2d61a9f3
Revises: 3c1f9a7d2b64
Create Date: 2026-10-18 16:40:02.571934

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "8e4b2d61a9f3"
down_revision: Union[str, Sequence[str], None] = "3c1f9a7d2b64"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.drop_constraint("users_email_key", "users", type_="unique")
    op.create_index(
        "users_email_lower_key",
        "users",
        [sa.text("lower(email)")],
        unique=True,
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("users_email_lower_key", table_name="users")
    op.create_unique_constraint("users_email_key", "users", ["email"])
