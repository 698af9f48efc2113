from flask import jsonify, current_app
from flask_login import login_required, current_user
from . import bp
from .forms import CommentForm, CommentUpdateForm
from ...extensions import db
from ...errors import ValidationError, NotFoundError, AuthorizationError
from ...models.base import isoformat
from ...models.comment import Comment
from ...services import audit
from ...services.gatekeeper import Role, OVERSIGHT_ROLES
from ...services.integrity import filter_valid
from ...services.privacy import visible_comments_clause
from ...services.review_store import load_applicant
from ...services.submission import create_comment
from ...utils.forms import coerce_int, json_body


def _comment_body(c, author):
    return {
        "id": c.id,
        "content": c.content,
        "isPrivate": c.is_private,
        "author": author.to_public(),
        "createdAt": isoformat(c.created_at),
        "updatedAt": isoformat(c.updated_at),
        "isOwn": c.author_id == current_user.id,
    }


def _validated(form):
    if not form.validate():
        current_app.logger.info('Comment validation failed: %s', form.details)
        raise ValidationError(details=form.details)
    return form


def _get_comment(comment_id):
    c = Comment.query.filter_by(id=comment_id).first()
    if c is None:
        raise NotFoundError("comment")
    return c


def _visible(applicant_id):
    return Comment.query.filter(Comment.applicant_id == applicant_id, visible_comments_clause(current_user))


@bp.post("/create")
@login_required
def create():
    payload = json_body()
    applicant_id = coerce_int(payload.get("applicantId"))
    if applicant_id is None:
        raise ValidationError(details={"applicantId": ["Applicant ID is required"]})
    form = _validated(CommentForm(payload))
    applicant = load_applicant(applicant_id)

    mentions = None
    if isinstance(payload.get("mentions"), list):
        mentions = [i for i in map(coerce_int, payload["mentions"]) if i is not None]
    c =create_comment(current_user, applicant, form.content.data, form.is_private.data, mentions)
    return jsonify({
        "success": True,
        "message": "Comment added successfully",
        "comment": _comment_body(c, current_user),
    })


@bp.get("/by-applicant/<int:applicant_id>")
@login_required
def by_applicant(applicant_id):
    rows = _visible(applicant_id).order_by(Comment.created_at.desc(), Comment.id.desc()).all()
    comments = [_comment_body(c, author) for c, author in filter_valid(rows, "author_id", kind="comment")]
    return jsonify({"success": True, "comments": comments})


@bp.post("/update/<int:comment_id>")
@login_required
def update(comment_id):
    form = _validated(CommentUpdateForm(json_body()))
    c = _get_comment(comment_id)
    # only the author can update their comment
    if c.author_id != current_user.id:
        raise AuthorizationError("Unauthorized to update this comment")

    for k, v in form.to_data().items():
        setattr(c, k, v)
    db.session.commit()
    audit.record(current_user, 'comment.updated', 'Comment', c.id, f"Updated comment {c.id}")
    return jsonify({"success": True, "message": "Comment updated successfully"})


@bp.delete("/delete/<int:comment_id>")
@login_required
def delete(comment_id):
    c = _get_comment(comment_id)
    is_author = c.author_id == current_user.id
    if not is_author and Role.parse(current_user.role) not in OVERSIGHT_ROLES:
        raise AuthorizationError("Unauthorized to delete this comment")

    db.session.delete(c)
    db.session.commit()
    audit.record(current_user, 'comment.deleted', 'Comment', comment_id, f"Deleted comment {comment_id}",
                 severity='warning')
    return jsonify({"success": True, "message": "Comment deleted successfully"})


@bp.get("/count/<int:applicant_id>")
@login_required
def count(applicant_id):
    return jsonify({"success": True, "count": _visible(applicant_id).count()})
