from .user import User
from .job import Job
from .applicant import Applicant
from .review import Review
from .comment import Comment
from .notification import Notification
from .audit_log import AuditLog
# base and mixins are imported by the above as needed
