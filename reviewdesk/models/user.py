from ..extensions import db
from flask_login import UserMixin
from .base import TimestampMixin
from werkzeug.security import generate_password_hash, check_password_hash

STAFF_ROLES = ("superadmin", "admin", "reviewer")


class User(db.Model, UserMixin, TimestampMixin):
    __tablename__ = "users"
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    name = db.Column(db.String(120), nullable=False, default="")
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(50), default="reviewer", nullable=False, index=True)
    # shadows UserMixin.is_active so Flask-Login refuses deactivated staff
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    def set_password(self, raw):
        self.password_hash = generate_password_hash(raw)

    def check_password(self, raw):
        return check_password_hash(self.password_hash, raw)

    @property
    def is_admin(self):
        return self.role in ("admin", "superadmin")

    def to_public(self):
        return {"id": self.id, "name": self.name, "email": self.email, "role": self.role}

    def __repr__(self) -> str:
        return f"<User id={self.id} role={self.role!r}>"
