"""Broadcast one event to every active staff member as notification rows.

Shared by review submissions and team notes. The recipient roster is read
fresh on every call. Callers run this outside the primary write and must
treat any exception as non-fatal.
"""
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from ..extensions import db
from ..errors import UpstreamError
from ..models.notification import Notification
from ..models.user import User, STAFF_ROLES


def staff_recipients(exclude_user_id):
    rows = (
        User.query.with_entities(User.id)
        .filter(User.role.in_(STAFF_ROLES))
        .filter(User.is_active.is_(True))
        .filter(User.id != exclude_user_id)
        .order_by(User.id)
        .all()
    )
    return [r.id for r in rows]


def bulk_insert_notifications(rows):
    db.session.add_all([Notification(**row) for row in rows])
    db.session.commit()
    return len(rows)


def action_url(applicant_id, tab):
    base = current_app.config.get("APP_BASE_PATH", "/dashboard/applicants")
    return f"{base}?open={applicant_id}&tab={tab}"


def broadcast(sender_id, related_id, kind, priority, title, message, url):
    recipients = staff_recipients(sender_id)
    if not recipients:
        current_app.logger.warning('No recipients for %s on applicant %s; nothing sent', kind, related_id)
        return 0

    rows = [
        dict(recipient_id=rid, type=kind, priority=priority, title=title,
             message=message, action_url=url, related_id=related_id)
        for rid in recipients
    ]
    try:
        count = bulk_insert_notifications(rows)
    except SQLAlchemyError as e:
        db.session.rollback()
        raise UpstreamError(f"Notification insert failed for {kind}") from e
    current_app.logger.info('Sent %d %s notification(s) for applicant %s', count, kind, related_id)
    return count


def broadcast_review_submitted(applicant, job, reviewer, rating) -> int:
    applicant_name = applicant.name or "Unknown Candidate"
    job_title = (job.title if job else None) or "Unknown Position"
    return broadcast(
        sender_id=reviewer.id,
        related_id=applicant.id,
        kind="review_completed",
        priority="high",
        title="New Review Submitted",
        message=f"{reviewer.name} has evaluated {applicant_name} for {job_title}. Rating: {rating}/5",
        url=action_url(applicant.id, "reviews"),
    )


def broadcast_comment_added(applicant, author) -> int:
    applicant_name = applicant.name or "Unknown Candidate"
    return broadcast(
        sender_id=author.id,
        related_id=applicant.id,
        kind="comment_added",
        priority="medium",
        title="New Team Note",
        message=f"{author.name} added a note for {applicant_name}",
        url=action_url(applicant.id, "notes"),
    )
