from flask import current_app
from wtforms import StringField, BooleanField
from wtforms.validators import ValidationError as FieldError
from ...utils.forms import JSONForm, required, skip_if_absent, optional_text, strip_text


def _content_length(form, field):
    limit = current_app.config.get("COMMENT_MAX_LENGTH", 2000)
    if not field.data:
        raise FieldError("Comment content is required")
    if len(field.data) > limit:
        raise FieldError(f"Comment is too long (max {limit} characters)")


def _boolean(form, field):
    if field.object_data is not None and not isinstance(field.object_data, bool):
        raise FieldError("Must be true or false.")


class CommentForm(JSONForm):
    ALIASES = {"isPrivate": "is_private"}

    content = StringField("Content", filters=[strip_text],
                          validators=[required("Comment content is required"), optional_text, _content_length])
    is_private = BooleanField("Private", validators=[_boolean])


class CommentUpdateForm(CommentForm):
    content = StringField("Content", filters=[strip_text],
                          validators=[skip_if_absent, optional_text, _content_length])

    def to_data(self):
        data = {}
        if self.present("content") and self.content.data:
            data["content"] = self.content.data
        if self.present("is_private") and self.is_private.object_data is not None:
            data["is_private"] = bool(self.is_private.data)
        return data
