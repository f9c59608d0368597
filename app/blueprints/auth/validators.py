from flask_wtf import FlaskForm
from wtforms import IntegerField, PasswordField, StringField
from wtforms.validators import (
    AnyOf,
    DataRequired,
    EqualTo,
    Length,
    Optional,
    Regexp,
)

from .models import ROLES


class LoginValidator(FlaskForm):
    email = StringField(validators=[DataRequired()])
    password = PasswordField(validators=[DataRequired()])


class ChangePasswordValidator(FlaskForm):
    cur_password = PasswordField()
    new_password = PasswordField(
        validators=[
            DataRequired(),
            Length(min=6, max=100),
            EqualTo("confirm", message="New passwords must match!"),
        ],
    )
    confirm = PasswordField()


class RegisterValidator(FlaskForm):
    name = StringField(validators=[DataRequired(), Length(min=2, max=100)])
    email = StringField(
        validators=[
            DataRequired(),
            Regexp(r"^[^@\s]+@[^@\s]+\.[^@\s]+$", message="Invalid email address"),
        ]
    )
    password = PasswordField(
        validators=[
            DataRequired(),
            Length(min=6, max=100),
            EqualTo("confirm_password", message="Passwords must match!"),
        ]
    )
    confirm_password = PasswordField()
    role = StringField(
        validators=[
            Optional(),
            AnyOf(ROLES, message="Value must be one of %(values)s"),
        ],
        default="SPRAYER",
    )
    actor_type_uid = IntegerField(validators=[Optional()])
    number = StringField(
        validators=[
            Optional(),
            Length(max=20),
            Regexp(
                r"^[A-Z0-9-]*$",
                message="Number may only contain uppercase letters, digits and hyphens",
            ),
        ]
    )
