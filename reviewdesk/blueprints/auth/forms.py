from wtforms import StringField, PasswordField
from wtforms.validators import DataRequired, Email
from ...utils.forms import JSONForm, strip_text


class LoginForm(JSONForm):
    email = StringField("Email", filters=[strip_text], validators=[DataRequired(), Email()])
    password = PasswordField("Password", validators=[DataRequired()])
