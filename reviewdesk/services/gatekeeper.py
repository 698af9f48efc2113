"""Applicant status rules driven by review submissions.

The only edge owned here is ``new -> evaluated``. It is taken when a reviewer
submits their first review of an applicant. Admin and superadmin reviews are
annotations and never move the pipeline.
"""
import enum
from collections import namedtuple


class Role(str, enum.Enum):
    REVIEWER = "reviewer"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"

    @classmethod
    def parse(cls, value):
        try:
            return cls(value)
        except ValueError:
            return None


OVERSIGHT_ROLES = frozenset({Role.ADMIN, Role.SUPERADMIN})
# reviewers may not move these back
ADVANCED_STATUSES = frozenset({"interview", "interviewing", "hired", "rejected"})

FROM_STATUS = "new"
TO_STATUS = "evaluated"

# reasons
UPDATE = "update"
ADVANCE = "advance"
ADVANCED_STAGE = "advanced_stage"
NO_EDGE = "no_edge"
OVERSIGHT = "oversight"
UNKNOWN_ROLE = "unknown_role"

Decision = namedtuple("Decision", ["status", "reason"])


def next_status(acting_role, current_status, is_new_review):
    """Return a Decision whose ``status`` is the new status or None for unchanged."""
    if not is_new_review:
        return Decision(None, UPDATE)

    role = Role.parse(acting_role)
    if role is None:
        return Decision(None, UNKNOWN_ROLE)
    if role in OVERSIGHT_ROLES:
        return Decision(None, OVERSIGHT)

    if current_status == FROM_STATUS:
        return Decision(TO_STATUS, ADVANCE)
    if current_status in ADVANCED_STATUSES:
        return Decision(None, ADVANCED_STAGE)
    return Decision(None, NO_EDGE)
