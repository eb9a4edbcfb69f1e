"""create_users_and_password_reset_tokens

Revision ID: 5b1f0c9e7a21
Revises:
Create Date: 2026-03-02 14:15:08.219304+00:00

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "5b1f0c9e7a21"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users and password_reset_tokens tables."""
    op.create_table(
        "users",
        # Primary key and timestamps from BaseMutableModel
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column("username", sa.String(length=100), nullable=False, comment="Login name"),
        sa.Column(
            "email",
            sa.String(length=255),
            nullable=False,
            comment="User email address (unique)",
        ),
        sa.Column(
            "password_hash",
            sa.String(length=255),
            nullable=False,
            comment="Bcrypt hashed password",
        ),
        # Account state cleared by a reset
        sa.Column("is_active", sa.Boolean(), nullable=False, comment="Account active status"),
        sa.Column(
            "account_non_locked",
            sa.Boolean(),
            nullable=False,
            comment="False while the account is locked",
        ),
        sa.Column(
            "failed_login_attempts",
            sa.Integer(),
            nullable=False,
            comment="Counter for failed login attempts",
        ),
        sa.Column(
            "must_change_password",
            sa.Boolean(),
            nullable=False,
            comment="Force a password change at next sign-in",
        ),
        sa.Column(
            "email_verified",
            sa.Boolean(),
            nullable=False,
            comment="Email verification status",
        ),
        sa.Column(
            "last_password_change",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="When the password was last set",
        ),
        sa.Column(
            "password_expires_at",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="When the current password expires",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "password_reset_tokens",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "user_id",
            sa.Uuid(),
            nullable=False,
            comment="User who requested the reset",
        ),
        sa.Column(
            "token_hash",
            sa.String(length=64),
            nullable=False,
            comment="SHA-256 hex digest of the reset token",
        ),
        sa.Column(
            "expires_at",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="Timestamp when token expires",
        ),
        sa.Column(
            "used_at",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="Timestamp when token was used or invalidated",
        ),
        sa.Column(
            "request_ip",
            sa.String(length=45),
            nullable=True,
            comment="IP address of requester",
        ),
        sa.Column(
            "request_agent",
            sa.String(length=255),
            nullable=True,
            comment="User agent of requester",
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_password_reset_tokens_user_id",
        "password_reset_tokens",
        ["user_id"],
    )
    op.create_index(
        "ix_password_reset_tokens_token_hash",
        "password_reset_tokens",
        ["token_hash"],
        unique=True,
    )
    op.create_index(
        "idx_password_reset_cleanup",
        "password_reset_tokens",
        ["expires_at", "used_at"],
    )


def downgrade() -> None:
    """Drop password_reset_tokens and users tables."""
    op.drop_index("idx_password_reset_cleanup", table_name="password_reset_tokens")
    op.drop_index(
        "ix_password_reset_tokens_token_hash", table_name="password_reset_tokens"
    )
    op.drop_index("ix_password_reset_tokens_user_id", table_name="password_reset_tokens")
    op.drop_table("password_reset_tokens")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
