from flask import jsonify, request, current_app
from flask_login import login_required, current_user
from . import bp
from .forms import ReviewForm, ReviewUpdateForm
from ...errors import ValidationError, AuthorizationError
from ...models.base import isoformat
from ...services import review_store, audit
from ...services.gatekeeper import Role, OVERSIGHT_ROLES
from ...services.privacy import can_view_private_notes
from ...services.submission import submit_review
from ...utils.forms import coerce_int, json_body


def _review_body(r, include_private=True):
    return {
        "id": r.id,
        "applicantId": r.applicant_id,
        "jobId": r.job_id,
        "rating": r.rating,
        "decision": r.decision,
        "pros": r.pros or [],
        "cons": r.cons or [],
        "privateNotes": r.private_notes if include_private else None,
        "summary": r.summary,
        "skillRatings": r.skill_ratings,
        "createdAt": isoformat(r.created_at),
        "updatedAt": isoformat(r.updated_at),
    }


def _validated(form):
    if not form.validate():
        current_app.logger.info('Review validation failed: %s', form.details)
        raise ValidationError(details=form.details)
    return form.to_data()


@bp.post("/submit")
@login_required
def submit():
    payload = json_body()
    applicant_id = coerce_int(payload.get("applicantId"))
    if applicant_id is None:
        raise ValidationError(details={"applicantId": ["Applicant ID is required"]})

    # job id is optional: recovered from the applicant before validating
    applicant, job_id = review_store.resolve_job_id(applicant_id, coerce_int(payload.get("jobId")))
    data = _validated(ReviewForm(payload))

    review, is_new = submit_review(current_user, applicant, job_id, data)
    return jsonify({
        "success": True,
        "message": "Review submitted successfully" if is_new else "Review updated successfully",
        "review": {"id": review.id, "rating": review.rating, "decision": review.decision},
    })


@bp.get("/by-applicant/<int:applicant_id>")
@login_required
def by_applicant(applicant_id):
    reviews = []
    for r, reviewer in review_store.by_applicant(applicant_id):
        body = _review_body(r, include_private=can_view_private_notes(r, current_user))
        body["reviewer"] = reviewer.to_public()
        reviews.append(body)
    return jsonify({"success": True, "reviews": reviews})


@bp.get("/my-review/<int:applicant_id>")
@login_required
def my_review(applicant_id):
    r = review_store.mine(applicant_id, current_user.id)
    return jsonify({"success": True, "review": _review_body(r) if r else None})


@bp.get("/average/<int:applicant_id>")
@login_required
def average(applicant_id):
    stats = review_store.average_for(applicant_id)
    return jsonify({
        "success": True,
        "averageRating": stats["averageRating"],
        "totalReviews": stats["totalReviews"],
        "decisionHistogram": stats["decisions"],
    })


@bp.post("/batch-badges")
@login_required
def batch_badges():
    raw = json_body().get("applicantIds")
    if not isinstance(raw, list) or not raw:
        raise ValidationError("applicantIds array is required",
                              details={"applicantIds": ["Must be a non-empty list"]})
    limit = current_app.config.get("BATCH_BADGES_MAX_IDS", 100)
    if len(raw) > limit:
        raise ValidationError(f"Maximum {limit} applicant IDs per request",
                              details={"applicantIds": [f"At most {limit} ids"]})
    ids = [coerce_int(v) for v in raw]
    if any(i is None for i in ids):
        raise ValidationError(details={"applicantIds": ["Every id must be an integer"]})
    # de-duplicate, keep request order
    ids = list(dict.fromkeys(ids))
    return jsonify({"success": True, "reviewsByApplicant": review_store.batch_badges(ids)})


@bp.get("/rating-distribution")
@login_required
def rating_distribution():
    reviewer_id = request.args.get("reviewerId", default=current_user.id, type=int)
    if reviewer_id != current_user.id and Role.parse(current_user.role) not in OVERSIGHT_ROLES:
        raise AuthorizationError("You can only view your own rating distribution")
    out = review_store.rating_distribution(reviewer_id)
    return jsonify({"success": True, **out})


@bp.post("/update/<int:review_id>")
@login_required
def update(review_id):
    form = ReviewUpdateForm(json_body())
    data = _validated(form)

    review = review_store.get_review(review_id)
    # only the author can update their review
    if review.reviewer_id != current_user.id:
        raise AuthorizationError("Unauthorized to update this review")

    review_store.update_review(review, data)
    audit.record(current_user, 'review.updated', 'Review', review.id, f"Updated review {review.id}",
                 metadata={"fields": sorted(data)})
    return jsonify({"success": True, "message": "Review updated successfully"})


@bp.get("/my-stats")
@login_required
def my_stats():
    return jsonify({"success": True, "stats": review_store.reviewer_stats(current_user.id)})
