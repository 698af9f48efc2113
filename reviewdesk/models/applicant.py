from ..extensions import db
from .base import TimestampMixin

# new/screening/evaluated/interview/interviewing/hired/rejected/archived
APPLICANT_STATUSES = (
    "new", "screening", "evaluated", "interview", "interviewing", "hired", "rejected", "archived",
)


class Applicant(db.Model, TimestampMixin):
    __tablename__ = "applicants"

    id = db.Column(db.Integer, primary_key=True)
    job_id = db.Column(db.Integer, db.ForeignKey("jobs.id"), index=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(254), index=True)
    status = db.Column(db.String(30), default="new", nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Applicant id={self.id} status={self.status!r}>"
