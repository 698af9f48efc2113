from ..extensions import db
from .base import TimestampMixin

class Job(db.Model, TimestampMixin):
    __tablename__ = "jobs"
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    created_by = db.Column(db.Integer)  # user id

    def __repr__(self) -> str:
        return f"<Job id={self.id} title={self.title!r}>"
