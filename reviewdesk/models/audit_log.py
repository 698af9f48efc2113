from ..extensions import db

SEVERITIES = ("info", "warning", "critical")


class AuditLog(db.Model):
    __tablename__ = "audit_logs"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, index=True)
    user_email = db.Column(db.String(255))
    user_name = db.Column(db.String(120))
    user_role = db.Column(db.String(50))
    action = db.Column(db.String(80), nullable=False, index=True)
    resource = db.Column(db.String(50), nullable=False)
    resource_id = db.Column(db.String(64))
    description = db.Column(db.Text)
    # "metadata" is reserved on declarative models
    details = db.Column("metadata", db.JSON)
    severity = db.Column(db.String(20), default="info", nullable=False)
    ip_address = db.Column(db.String(64))
    user_agent = db.Column(db.String(255))
    created_at = db.Column(db.DateTime, server_default=db.func.now(), nullable=False, index=True)
