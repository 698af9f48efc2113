from wtforms import IntegerField, SelectField, StringField, FieldList
from wtforms.validators import NumberRange
from ...models.review import DECISIONS
from ...utils.forms import (
    JSONForm, required, skip_if_absent, whole_number, optional_text, string_entries, strip_text,
)


def skill_rating_errors(ratings):
    if not isinstance(ratings, dict):
        return ["Must be an object of skill name to rating."]
    errors = []
    for name, value in ratings.items():
        if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= 5:
            errors.append(f"{name}: rating must be a whole number between 1 and 5.")
    return errors


class ReviewForm(JSONForm):
    ALIASES = {"privateNotes": "private_notes", "skillRatings": "skill_ratings"}
    LIST_FIELDS = ("pros", "cons")

    rating = IntegerField("Rating", validators=[required("Rating is required"), whole_number, NumberRange(min=1, max=5)])
    decision = SelectField("Decision", choices=[(d, d) for d in DECISIONS],
                           validators=[required("Decision is required")])
    pros = FieldList(StringField("Pro", filters=[strip_text]), validators=[string_entries])
    cons = FieldList(StringField("Con", filters=[strip_text]), validators=[string_entries])
    private_notes = StringField("Private notes", filters=[strip_text], validators=[optional_text])
    summary = StringField("Summary", filters=[strip_text], validators=[optional_text])

    def validate(self, extra_validators=None):
        ok = super().validate(extra_validators=extra_validators)
        ratings = self.payload.get("skillRatings")
        if ratings is not None:
            problems = skill_rating_errors(ratings)
            if problems:
                self.shape_errors["skillRatings"] = problems
                ok = False
        return ok

    def to_data(self):
        return {
            "rating": self.rating.data,
            "decision": self.decision.data,
            "pros": list(self.pros.data),
            "cons": list(self.cons.data),
            "private_notes": self.private_notes.data,
            "summary": self.summary.data,
            "skill_ratings": self.payload.get("skillRatings"),
        }


class ReviewUpdateForm(ReviewForm):
    """Partial update: every field optional, same ranges."""
    rating = IntegerField("Rating", validators=[skip_if_absent, whole_number, NumberRange(min=1, max=5)])
    decision = SelectField("Decision", choices=[(d, d) for d in DECISIONS], validators=[skip_if_absent])

    def to_data(self):
        data = {k: v for k, v in super().to_data().items() if self.present(k)}
        # explicit nulls cannot clear required columns
        for k in ("rating", "decision"):
            if data.get(k, 0) is None:
                del data[k]
        return data
