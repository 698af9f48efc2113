"""Review submission workflow.

upsert -> status transition (first submission only) -> fan-out (first
submission only, best-effort) -> audit (best-effort). Only the first two can
fail the request; by the time the side effects run the review is committed.
"""
from flask import current_app
from ..extensions import db, rq
from ..models.applicant import Applicant
from ..models.comment import Comment
from ..jobs.notify import notify_review_submitted, notify_comment_added
from . import audit, gatekeeper, review_store


def apply_status_transition(actor, applicant, is_new_review):
    """Run the gatekeeper for this submission and apply its verdict."""
    current = applicant.status
    decision = gatekeeper.next_status(getattr(actor, "role", None), current, is_new_review)

    if decision.reason == gatekeeper.ADVANCED_STAGE:
        current_app.logger.warning('Reviewer %s cannot change applicant %s in advanced stage %r',
                                   actor.id, applicant.id, current)
    elif decision.reason == gatekeeper.UNKNOWN_ROLE:
        current_app.logger.warning('Unknown role %r for user %s; applicant %s status left unchanged',
                                   getattr(actor, "role", None), getattr(actor, "id", None), applicant.id)
    elif decision.reason == gatekeeper.OVERSIGHT:
        current_app.logger.info('%s review of applicant %s does not change status',
                                actor.role, applicant.id)

    if decision.status is None:
        return None

    # conditional write: a concurrent first review that already moved the
    # applicant makes this a no-op
    updated = (
        Applicant.query.filter_by(id=applicant.id, status=current)
        .update({"status": decision.status}, synchronize_session=False)
    )
    db.session.commit()
    if updated:
        current_app.logger.info('Updated applicant %s status: %s -> %s', applicant.id, current, decision.status)
        return decision.status
    return None


def enqueue_fanout(func, *args):
    try:
        return rq.enqueue(func, *args)
    except Exception:
        db.session.rollback()
        current_app.logger.exception('Notification fan-out failed for %s%s; primary write kept',
                                     func.__name__, args)
        return None


def submit_review(actor, applicant, job_id, data):
    result = review_store.upsert_review(applicant.id, job_id, actor.id, data)
    review, is_new = result
    current_app.logger.info('Review %s saved for applicant %s by user %s (%s)',
                            review.id, applicant.id, actor.id, 'new' if is_new else 'update')

    if is_new:
        apply_status_transition(actor, applicant, is_new)
        enqueue_fanout(notify_review_submitted, applicant.id, actor.id, review.rating)
    else:
        current_app.logger.info('Skipping side effects for review %s (update)', review.id)

    audit.record(
        actor, 'review.submitted', 'Review', review.id,
        f"{'Submitted' if is_new else 'Updated'} review for applicant {applicant.id} with rating {review.rating}/5",
        metadata={
            "applicantId": applicant.id,
            "jobId": job_id,
            "rating": review.rating,
            "decision": review.decision,
            "isNewReview": is_new,
        },
    )
    return result


def create_comment(actor, applicant, content, is_private, mentions=None):
    comment = Comment(applicant_id=applicant.id, author_id=actor.id, content=content,
                      is_private=bool(is_private), mentions=mentions or None)
    db.session.add(comment)
    db.session.commit()
    current_app.logger.info('Comment %s saved for applicant %s by user %s', comment.id, applicant.id, actor.id)

    enqueue_fanout(notify_comment_added, applicant.id, actor.id)
    audit.record(
        actor, 'comment.created', 'Comment', comment.id,
        f"Added comment on applicant {applicant.id}",
        metadata={"applicantId": applicant.id, "isPrivate": comment.is_private},
    )
    return comment
