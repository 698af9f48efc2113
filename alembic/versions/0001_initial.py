"""Baseline schema: staff, jobs, applicants, reviews, comments, notifications, audit log

Revision ID: 0001_initial
Revises: None
Create Date: 2026-10-19 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime, server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", sa.String(50), nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_users_role", "users", ["role"])

    op.create_table(
        "jobs",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("created_by", sa.Integer),
        *_timestamps(),
    )

    op.create_table(
        "applicants",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("job_id", sa.Integer, sa.ForeignKey("jobs.id")),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("email", sa.String(254)),
        sa.Column("status", sa.String(30), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_applicants_job_id", "applicants", ["job_id"])
    op.create_index("ix_applicants_email", "applicants", ["email"])
    op.create_index("ix_applicants_status", "applicants", ["status"])

    # reviewer_id / author_id / recipient_id are soft references: users can be
    # deleted without touching what they wrote
    op.create_table(
        "reviews",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("applicant_id", sa.Integer, sa.ForeignKey("applicants.id"), nullable=False),
        sa.Column("job_id", sa.Integer, nullable=False),
        sa.Column("reviewer_id", sa.Integer, nullable=False),
        sa.Column("rating", sa.Integer, nullable=False),
        sa.Column("decision", sa.String(20), nullable=False),
        sa.Column("pros", sa.JSON, nullable=False),
        sa.Column("cons", sa.JSON, nullable=False),
        sa.Column("private_notes", sa.Text),
        sa.Column("summary", sa.Text),
        sa.Column("skill_ratings", sa.JSON),
        *_timestamps(),
        sa.UniqueConstraint("applicant_id", "reviewer_id", name="uq_reviews_applicant_reviewer"),
    )
    op.create_index("ix_reviews_job_id", "reviews", ["job_id"])
    op.create_index("ix_reviews_applicant_created", "reviews", ["applicant_id", "created_at"])
    op.create_index("ix_reviews_reviewer_created", "reviews", ["reviewer_id", "created_at"])

    op.create_table(
        "comments",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("applicant_id", sa.Integer, sa.ForeignKey("applicants.id"), nullable=False),
        sa.Column("author_id", sa.Integer, nullable=False),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("mentions", sa.JSON),
        sa.Column("is_private", sa.Boolean, nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_comments_applicant_created", "comments", ["applicant_id", "created_at"])
    op.create_index("ix_comments_author_created", "comments", ["author_id", "created_at"])

    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("recipient_id", sa.Integer, nullable=False),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("priority", sa.String(20), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("message", sa.Text, nullable=False),
        sa.Column("action_url", sa.String(500)),
        sa.Column("related_id", sa.Integer),
        sa.Column("is_read", sa.Boolean, nullable=False),
        sa.Column("read_at", sa.DateTime),
        *_timestamps(),
    )
    op.create_index("ix_notifications_recipient_id", "notifications", ["recipient_id"])
    op.create_index("ix_notifications_recipient_read_created", "notifications",
                    ["recipient_id", "is_read", "created_at"])

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.Integer),
        sa.Column("user_email", sa.String(255)),
        sa.Column("user_name", sa.String(120)),
        sa.Column("user_role", sa.String(50)),
        sa.Column("action", sa.String(80), nullable=False),
        sa.Column("resource", sa.String(50), nullable=False),
        sa.Column("resource_id", sa.String(64)),
        sa.Column("description", sa.Text),
        sa.Column("metadata", sa.JSON),
        sa.Column("severity", sa.String(20), nullable=False),
        sa.Column("ip_address", sa.String(64)),
        sa.Column("user_agent", sa.String(255)),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_audit_logs_user_id", "audit_logs", ["user_id"])
    op.create_index("ix_audit_logs_action", "audit_logs", ["action"])
    op.create_index("ix_audit_logs_created_at", "audit_logs", ["created_at"])


def downgrade() -> None:
    for t in ("audit_logs", "notifications", "comments", "reviews", "applicants", "jobs", "users"):
        op.drop_table(t)
