from ..extensions import db
from .base import TimestampMixin

DECISIONS = ("strong_hire", "recommended", "neutral", "not_recommended", "strong_no")


class Review(db.Model, TimestampMixin):
    __tablename__ = "reviews"
    __table_args__ = (
        db.UniqueConstraint("applicant_id", "reviewer_id", name="uq_reviews_applicant_reviewer"),
        db.Index("ix_reviews_applicant_created", "applicant_id", "created_at"),
        db.Index("ix_reviews_reviewer_created", "reviewer_id", "created_at"),
    )

    id = db.Column(db.Integer, primary_key=True)
    applicant_id = db.Column(db.Integer, db.ForeignKey("applicants.id"), nullable=False)
    job_id = db.Column(db.Integer, nullable=False, index=True)
    reviewer_id = db.Column(db.Integer, nullable=False)  # user id, soft reference

    rating = db.Column(db.Integer, nullable=False)  # 1-5
    decision = db.Column(db.String(20), nullable=False)
    pros = db.Column(db.JSON, nullable=False, default=list)
    cons = db.Column(db.JSON, nullable=False, default=list)
    private_notes = db.Column(db.Text)
    summary = db.Column(db.Text)
    skill_ratings = db.Column(db.JSON)  # {"Python": 4, "Communication": 5}

    def __repr__(self) -> str:
        return f"<Review id={self.id} applicant_id={self.applicant_id} reviewer_id={self.reviewer_id}>"
