"""Persistence for Review rows.

One review per (applicant, reviewer): resubmission updates the existing row.
``upsert_review`` reports whether the row was created by checking for it
before writing. Under a true double submission both requests may see "new";
the unique constraint still keeps a single row, and the loser gets a
DuplicateReviewError.
"""
import math
from collections import namedtuple
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from ..extensions import db
from ..errors import NotFoundError, ValidationError, DuplicateReviewError
from ..models.applicant import Applicant
from ..models.review import Review
from .integrity import filter_valid

UpsertResult = namedtuple("UpsertResult", ["review", "is_new_review"])

# submit payload fields that are kept when omitted on resubmission
KEEP_IF_OMITTED = ("private_notes", "summary", "skill_ratings")

DECISION_KEYS = {
    "strong_hire": "strongHire",
    "recommended": "recommended",
    "neutral": "neutral",
    "not_recommended": "notRecommended",
    "strong_no": "strongNo",
}


def load_applicant(applicant_id):
    applicant = Applicant.query.filter_by(id=applicant_id).first()
    if applicant is None:
        raise NotFoundError("applicant")
    return applicant


def resolve_job_id(applicant_id, job_id=None):
    """Return (applicant, job_id), falling back to the applicant's stored job."""
    applicant = load_applicant(applicant_id)
    if not job_id:
        job_id = applicant.job_id
    if not job_id:
        raise ValidationError("Job ID is missing and cannot be recovered from applicant",
                              details={"jobId": ["Job ID is required"]})
    return applicant, job_id


def _find_review(applicant_id, reviewer_id):
    return Review.query.filter_by(applicant_id=applicant_id, reviewer_id=reviewer_id).first()


def upsert_review(applicant_id, job_id, reviewer_id, data) -> UpsertResult:
    existing = _find_review(applicant_id, reviewer_id)
    is_new = existing is None
    review = existing or Review(applicant_id=applicant_id, reviewer_id=reviewer_id)

    review.job_id = job_id
    for key, value in data.items():
        if value is None and key in KEEP_IF_OMITTED:
            continue
        setattr(review, key, value)

    if is_new:
        db.session.add(review)
    try:
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        raise DuplicateReviewError() from e
    return UpsertResult(review, is_new)


def update_review(review, data):
    for key, value in data.items():
        setattr(review, key, value)
    db.session.commit()
    return review


def get_review(review_id):
    review = Review.query.filter_by(id=review_id).first()
    if review is None:
        raise NotFoundError("review")
    return review


def by_applicant(applicant_id):
    """Reviews for an applicant, newest first, joined to their (existing) reviewer."""
    rows = (
        Review.query.filter_by(applicant_id=applicant_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .all()
    )
    return filter_valid(rows, "reviewer_id", kind="review")


def mine(applicant_id, reviewer_id):
    return _find_review(applicant_id, reviewer_id)


def average_for(applicant_id):
    avg, total = (
        db.session.query(func.avg(Review.rating), func.count(Review.id))
        .filter(Review.applicant_id == applicant_id)
        .one()
    )
    histogram = {key: 0 for key in DECISION_KEYS.values()}
    counts = (
        db.session.query(Review.decision, func.count(Review.id))
        .filter(Review.applicant_id == applicant_id)
        .group_by(Review.decision)
        .all()
    )
    for decision, cnt in counts:
        if decision in DECISION_KEYS:
            histogram[DECISION_KEYS[decision]] = int(cnt)
    return {
        "averageRating": math.floor(float(avg) * 10 + 0.5) / 10 if avg is not None else 0,
        "totalReviews": int(total or 0),
        "decisions": histogram,
    }


def batch_badges(applicant_ids):
    """Reviewer/rating/decision tuples grouped by applicant id (as string keys)."""
    grouped = {str(i): [] for i in applicant_ids}
    if not applicant_ids:
        return grouped
    rows = (
        Review.query.filter(Review.applicant_id.in_(applicant_ids))
        .order_by(Review.applicant_id, Review.created_at, Review.id)
        .all()
    )
    for r, reviewer in filter_valid(rows, "reviewer_id", kind="review"):
        grouped[str(r.applicant_id)].append({
            "reviewerId": reviewer.id,
            "reviewerName": reviewer.name,
            "reviewerRole": reviewer.role,
            "rating": r.rating,
            "decision": r.decision,
        })
    return grouped


def rating_distribution(reviewer_id):
    counts = dict(
        db.session.query(Review.rating, func.count(Review.id))
        .filter(Review.reviewer_id == reviewer_id)
        .group_by(Review.rating)
        .all()
    )
    # every star level present, 5 down to 1
    distribution = [{"rating": r, "count": int(counts.get(r, 0))} for r in (5, 4, 3, 2, 1)]
    return {"distribution": distribution, "total": sum(d["count"] for d in distribution)}


def reviewer_stats(reviewer_id, recent=5):
    total = Review.query.filter_by(reviewer_id=reviewer_id).count()
    rows = (
        db.session.query(Review, Applicant.name)
        .outerjoin(Applicant, Applicant.id == Review.applicant_id)
        .filter(Review.reviewer_id == reviewer_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .limit(recent)
        .all()
    )
    return {
        "totalReviews": total,
        "recentReviews": [
            {
                "id": r.id,
                "applicantName": name or "Unknown",
                "rating": r.rating,
                "decision": r.decision,
                "createdAt": r.created_at.isoformat() if r.created_at else None,
            }
            for r, name in rows
        ],
    }
