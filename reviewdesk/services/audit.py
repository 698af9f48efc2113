from flask import current_app, request, has_request_context
from ..extensions import db
from ..models.audit_log import AuditLog

SENSITIVE_FIELDS = ('password', 'password_hash', 'token', 'api_key', 'secret')


def sanitize(metadata):
    if not metadata:
        return metadata
    clean = dict(metadata)
    for k in SENSITIVE_FIELDS:
        if clean.get(k):
            clean[k] = '[REDACTED]'
    return clean


def record(actor, action, resource, resource_id, description, metadata=None, severity="info") -> bool:
    """Append an audit entry. Failures are logged and never raised.

    Runs after the primary write has been committed, so a rollback here only
    discards the audit row.
    """
    try:
        entry = AuditLog(
            user_id=getattr(actor, 'id', None),
            user_email=getattr(actor, 'email', None),
            user_name=getattr(actor, 'name', None),
            user_role=getattr(actor, 'role', None),
            action=action,
            resource=resource,
            resource_id=str(resource_id) if resource_id is not None else None,
            description=description,
            details=sanitize(metadata),
            severity=severity,
        )
        if has_request_context():
            entry.ip_address = request.remote_addr
            entry.user_agent = (request.user_agent.string or '')[:255]
        db.session.add(entry)
        db.session.commit()
        return True
    except Exception:
        db.session.rollback()
        current_app.logger.exception('Failed to create audit log: %s on %s/%s', action, resource, resource_id)
        return False
