from ..extensions import db
from .base import TimestampMixin

class Comment(db.Model, TimestampMixin):
    __tablename__ = "comments"
    __table_args__ = (
        db.Index("ix_comments_applicant_created", "applicant_id", "created_at"),
        db.Index("ix_comments_author_created", "author_id", "created_at"),
    )

    id = db.Column(db.Integer, primary_key=True)
    applicant_id = db.Column(db.Integer, db.ForeignKey("applicants.id"), nullable=False)
    author_id = db.Column(db.Integer, nullable=False)  # user id, soft reference
    content = db.Column(db.Text, nullable=False)
    mentions = db.Column(db.JSON)  # [user_id, ...]
    is_private = db.Column(db.Boolean, default=False, nullable=False)
