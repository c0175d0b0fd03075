"""Initial schema - profile, project, project_member, module, phase, comment.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # Identity subjects come from the OIDC provider, so user ids are strings.
    op.create_table(
        "profile",
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("avatar_url", sa.Text(), nullable=True),
    )

    op.create_table(
        "project",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("owner_id", sa.String(255), nullable=False),
        sa.Column("is_team", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_project_owner_id", "project", ["owner_id"])

    op.create_table(
        "project_member",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "project_id",
            sa.UUID(),
            sa.ForeignKey("project.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("invited_email", sa.String(320), nullable=False),
        sa.Column("user_id", sa.String(255), nullable=True),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("invited_by", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("role IN ('owner', 'editor')", name="ck_project_member_role"),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'rejected')", name="ck_project_member_status"
        ),
    )
    op.create_index("ix_project_member_project_id", "project_member", ["project_id"])
    op.create_index(
        "ix_project_member_email_status", "project_member", ["invited_email", "status"]
    )
    op.create_index("ix_project_member_user_id", "project_member", ["user_id"])

    op.create_table(
        "module",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "project_id",
            sa.UUID(),
            sa.ForeignKey("project.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_module_project_id", "module", ["project_id", "created_at"])

    op.create_table(
        "phase",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "module_id",
            sa.UUID(),
            sa.ForeignKey("module.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("assigned_to", sa.String(255), nullable=True),
        sa.Column("content", sa.Text(), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_phase_module_id", "phase", ["module_id", "created_at"])

    op.create_table(
        "comment",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "phase_id",
            sa.UUID(),
            sa.ForeignKey("phase.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "parent_id",
            sa.UUID(),
            sa.ForeignKey("comment.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("resolved", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_comment_phase_id", "comment", ["phase_id", "created_at"])
    op.create_index("ix_comment_parent_id", "comment", ["parent_id"])


def downgrade() -> None:
    op.drop_table("comment")
    op.drop_table("phase")
    op.drop_table("module")
    op.drop_table("project_member")
    op.drop_table("project")
    op.drop_table("profile")
