from flask import jsonify, current_app
from flask_login import login_user, logout_user, login_required, current_user
from . import bp
from .forms import LoginForm
from ...errors import ValidationError, ReviewDeskError
from ...models.user import User
from ...services import audit
from ...utils.decorators import admin_required
from ...utils.forms import json_body


class InvalidCredentials(ReviewDeskError):
    status_code = 401
    message = "Invalid credentials"


@bp.post("/login")
def login():
    form = LoginForm(json_body())
    if not form.validate():
        raise ValidationError(details=form.details)
    user = User.query.filter_by(email=form.email.data).first()
    # login_user refuses inactive users
    if not user or not user.check_password(form.password.data) or not login_user(user):
        current_app.logger.info('Failed login for %s', form.email.data)
        raise InvalidCredentials()
    audit.record(user, 'user.login', 'User', user.id, f"{user.email} logged in")
    return jsonify({"success": True, "user": user.to_public()})


@bp.post("/logout")
@login_required
def logout():
    audit.record(current_user, 'user.logout', 'User', current_user.id, f"{current_user.email} logged out")
    logout_user()
    return jsonify({"success": True})


@bp.get("/users")
@admin_required
def users_index():
    users = User.query.order_by(User.id).all()
    return jsonify({"success": True, "users": [dict(u.to_public(), isActive=u.is_active) for u in users]})
