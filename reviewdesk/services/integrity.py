from collections import namedtuple
from flask import current_app
from ..models.user import User

Authored = namedtuple("Authored", ["record", "author"])


def load_users(user_ids):
    ids = {int(i) for i in user_ids if i is not None}
    if not ids:
        return {}
    return {u.id: u for u in User.query.filter(User.id.in_(ids)).all()}


def filter_valid(records, author_attr, kind="record"):
    """Join records to their authoring user, dropping those whose user is gone.

    Order is preserved. Orphans stay in the database and are only hidden here,
    with a warning per dropped record so they can be cleaned up later.
    """
    records = list(records)
    users = load_users(getattr(r, author_attr) for r in records)
    valid = []
    for r in records:
        author_id = getattr(r, author_attr)
        author = users.get(author_id)
        if author is None:
            current_app.logger.warning(
                'Skipping orphaned %s id=%s: %s=%s no longer resolves', kind, r.id, author_attr, author_id)
            continue
        valid.append(Authored(r, author))
    dropped = len(records) - len(valid)
    if dropped:
        current_app.logger.warning('Filtered out %d orphaned %s(s)', dropped, kind)
    return valid
