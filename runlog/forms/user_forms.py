# runlog/forms/user_forms.py

from wtforms import StringField, PasswordField, DateField, FloatField
from wtforms.validators import DataRequired, Email, Length, Optional, Regexp, ValidationError

from runlog.forms.auth_forms import JsonForm
from runlog.models.user import RECENT_RACE_DISTANCES

RACE_TIME_PATTERN = r"^\d{1,2}:[0-5]\d:[0-5]\d$"


class UserUpdateForm(JsonForm):
    username = StringField(
        "Username",
        validators=[Optional(), Length(min=2, max=50, message="Username must be 2-50 characters")],
    )
    email = StringField("Email", validators=[Optional(), Email(message="Invalid email")])
    password = PasswordField(
        "Password",
        validators=[Optional(), Length(min=6, message="Password must be at least 6 characters")],
    )
    avatar = StringField("Avatar", validators=[Optional(), Length(max=500)])


class UpcomingRaceForm(JsonForm):
    name = StringField("Name", validators=[DataRequired(message="Race name is required"), Length(max=120)])
    date = DateField(
        "Date",
        format="%Y-%m-%d",
        validators=[DataRequired(message="Race date is required (YYYY-MM-DD)")],
    )
    projected_time = StringField(
        "Projected time",
        validators=[Optional(), Regexp(RACE_TIME_PATTERN, message="Time must be HH:MM:SS")],
    )


class RecentRaceForm(JsonForm):
    name = StringField("Name", validators=[DataRequired(message="Race name is required"), Length(max=120)])
    location = StringField("Location", validators=[Optional(), Length(max=120)])
    distance = FloatField("Distance (km)", validators=[DataRequired(message="Distance is required")])
    time = StringField(
        "Time",
        validators=[
            DataRequired(message="Time is required"),
            Regexp(RACE_TIME_PATTERN, message="Time must be HH:MM:SS"),
        ],
    )
    date = DateField(
        "Date",
        format="%Y-%m-%d",
        validators=[DataRequired(message="Race date is required (YYYY-MM-DD)")],
    )

    def validate_distance(self, field):
        if field.data not in RECENT_RACE_DISTANCES:
            allowed = ", ".join(str(d) for d in RECENT_RACE_DISTANCES)
            raise ValidationError(f"Distance must be one of {allowed}")
