from functools import wraps
from flask import abort
from flask_login import current_user
from ..services.gatekeeper import Role, OVERSIGHT_ROLES

def admin_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        if not current_user.is_authenticated:
            abort(401)
        if Role.parse(getattr(current_user, "role", None)) not in OVERSIGHT_ROLES:
            abort(403)
        return view(*args, **kwargs)
    return wrapped
