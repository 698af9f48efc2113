from flask import request
from flask_wtf import FlaskForm
from wtforms.validators import StopValidation, ValidationError as FieldError


def coerce_int(val):
    if val is None or val == "" or isinstance(val, bool):
        return None
    try:
        return int(val)
    except (TypeError, ValueError):
        return None


def json_body():
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def strip_text(value):
    return value.strip() if isinstance(value, str) else value


def required(message):
    def _required(form, field):
        if field.object_data is None:
            field.errors[:] = []
            raise StopValidation(message)
    return _required


def skip_if_absent(form, field):
    """Like wtforms Optional, but keyed on the JSON payload rather than formdata."""
    if field.object_data is None:
        field.errors[:] = []
        raise StopValidation()


def whole_number(form, field):
    raw = field.object_data
    if raw is not None and (isinstance(raw, bool) or not isinstance(raw, int)):
        field.errors[:] = []
        raise StopValidation("Must be a whole number.")


def optional_text(form, field):
    if field.object_data is not None and not isinstance(field.object_data, str):
        raise StopValidation("Must be a string.")


def string_entries(form, field):
    if not all(isinstance(v, str) for v in field.data):
        raise FieldError("Must be a list of strings.")


class JSONForm(FlaskForm):
    """FlaskForm fed from a JSON payload instead of request formdata.

    ``ALIASES`` maps payload keys (camelCase) to field names so validation
    errors are reported under the keys the client sent. Values for
    ``LIST_FIELDS`` must be JSON arrays; anything else is rejected before it
    reaches the FieldList.
    """
    ALIASES = {}
    LIST_FIELDS = ()

    class Meta:
        csrf = False

    def __init__(self, payload=None, **kwargs):
        payload = payload or {}
        self.payload = payload
        self.shape_errors = {}
        data = {}
        for key, value in payload.items():
            name = self.ALIASES.get(key, key)
            if name in self.LIST_FIELDS and value is not None and not isinstance(value, list):
                self.shape_errors[key] = ["Must be a list of strings."]
                continue
            data[name] = value
        super().__init__(formdata=None, data=data, **kwargs)

    def validate(self, extra_validators=None):
        ok = super().validate(extra_validators=extra_validators)
        return ok and not self.shape_errors

    def present(self, name):
        reverse = {v: k for k, v in self.ALIASES.items()}
        return reverse.get(name, name) in self.payload

    @property
    def details(self):
        reverse = {v: k for k, v in self.ALIASES.items()}
        out = dict(self.shape_errors)
        for name, errors in self.errors.items():
            if name is None:
                continue
            flat = []
            for e in errors:
                # FieldList nests one error list per entry
                flat.extend(e if isinstance(e, list) else [e])
            if flat:
                out[reverse.get(name, name)] = [str(e) for e in flat]
        return out
