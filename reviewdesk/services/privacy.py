from ..extensions import db
from ..models.comment import Comment
from .gatekeeper import Role, OVERSIGHT_ROLES


def can_view_private_notes(review, actor) -> bool:
    # authors always; otherwise admin/superadmin only
    if review.reviewer_id == actor.id:
        return True
    return Role.parse(getattr(actor, "role", None)) in OVERSIGHT_ROLES


def visible_comments_clause(actor):
    """Private comments are visible to their author alone, whatever the role."""
    return db.or_(Comment.is_private.is_(False), Comment.author_id == actor.id)
