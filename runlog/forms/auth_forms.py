# runlog/forms/auth_forms.py

from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, SelectField
from wtforms.validators import DataRequired, Email, Length


class JsonForm(FlaskForm):
    """Formularios que se rellenan desde el JSON de la API (sin CSRF)."""

    class Meta:
        csrf = False


class SignupForm(JsonForm):
    username = StringField(
        "Username",
        validators=[
            DataRequired(message="Username is required"),
            Length(min=2, max=50, message="Username must be 2-50 characters"),
        ],
    )
    email = StringField(
        "Email",
        validators=[DataRequired(message="Email is required"), Email(message="Invalid email")],
    )
    password = PasswordField(
        "Password",
        validators=[
            DataRequired(message="Password is required"),
            Length(min=6, message="Password must be at least 6 characters"),
        ],
    )
    # "admin" solo se asigna desde la CLI / BD
    role = SelectField("Role", choices=[("user", "Runner"), ("coach", "Coach")], default="user")


class SigninForm(JsonForm):
    email = StringField(
        "Email",
        validators=[DataRequired(message="Email is required"), Email(message="Invalid email")],
    )
    password = PasswordField(
        "Password",
        validators=[DataRequired(message="Password is required")],
    )
