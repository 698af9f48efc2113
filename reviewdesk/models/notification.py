from ..extensions import db
from .base import TimestampMixin

NOTIFICATION_TYPES = (
    "new_applicant", "review_assigned", "review_completed", "comment_added",
    "applicant_hired", "job_expired", "system_alert",
)
PRIORITIES = ("low", "medium", "high", "urgent")


class Notification(db.Model, TimestampMixin):
    __tablename__ = "notifications"
    __table_args__ = (
        db.Index("ix_notifications_recipient_read_created", "recipient_id", "is_read", "created_at"),
    )

    id = db.Column(db.Integer, primary_key=True)
    recipient_id = db.Column(db.Integer, nullable=False, index=True)  # user id
    type = db.Column(db.String(50), nullable=False)
    priority = db.Column(db.String(20), default="medium", nullable=False)
    title = db.Column(db.String(255), nullable=False)
    message = db.Column(db.Text, nullable=False)
    action_url = db.Column(db.String(500))
    related_id = db.Column(db.Integer)  # applicant id
    is_read = db.Column(db.Boolean, default=False, nullable=False)
    read_at = db.Column(db.DateTime)
