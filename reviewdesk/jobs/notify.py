from flask import current_app, has_app_context
from ..models.applicant import Applicant
from ..models.job import Job
from ..models.user import User
from ..services.fanout import broadcast_review_submitted, broadcast_comment_added


def _run_notify_review(applicant_id: int, reviewer_id: int, rating: int):
    applicant = Applicant.query.filter_by(id=applicant_id).first()
    reviewer = User.query.filter_by(id=reviewer_id).first()
    if not applicant or not reviewer:
        current_app.logger.warning('Review notification skipped: applicant=%s reviewer=%s not found',
                                   applicant_id, reviewer_id)
        return 0
    job = Job.query.filter_by(id=applicant.job_id).first() if applicant.job_id else None
    return broadcast_review_submitted(applicant, job, reviewer, rating)


def _run_notify_comment(applicant_id: int, author_id: int):
    applicant = Applicant.query.filter_by(id=applicant_id).first()
    author = User.query.filter_by(id=author_id).first()
    if not applicant or not author:
        current_app.logger.warning('Comment notification skipped: applicant=%s author=%s not found',
                                   applicant_id, author_id)
        return 0
    return broadcast_comment_added(applicant, author)


def _in_app_context(func, *args):
    # inline (no queue) runs inherit the request's app; RQ workers build one
    if has_app_context():
        return func(*args)
    from reviewdesk import create_app
    app = create_app()
    with app.app_context():
        return func(*args)


def notify_review_submitted(applicant_id: int, reviewer_id: int, rating: int):
    """Job entrypoint: broadcast a first-time review to the rest of the staff."""
    return _in_app_context(_run_notify_review, applicant_id, reviewer_id, rating)


def notify_comment_added(applicant_id: int, author_id: int):
    """Job entrypoint: broadcast a new team note to the rest of the staff."""
    return _in_app_context(_run_notify_comment, applicant_id, author_id)
