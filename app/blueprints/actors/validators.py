from flask_wtf import FlaskForm
from wtforms import BooleanField, IntegerField, StringField
from wtforms.validators import DataRequired, Length, Optional, Regexp

ACTOR_NUMBER_REGEXP = Regexp(
    r"^[A-Z0-9-]*$",
    message="Number may only contain uppercase letters, digits and hyphens",
)


class ActorsQueryParamValidator(FlaskForm):
    class Meta:
        csrf = False

    actor_type_uid = IntegerField(validators=[Optional()])


class CreateActorValidator(FlaskForm):
    name = StringField(validators=[DataRequired(), Length(min=2, max=100)])
    description = StringField(validators=[Optional(), Length(max=500)])
    number = StringField(validators=[Optional(), Length(max=20), ACTOR_NUMBER_REGEXP])
    actor_type_uid = IntegerField(validators=[DataRequired()])
    active = BooleanField(validators=[Optional()], default=True)


class UpdateActorValidator(FlaskForm):
    name = StringField(validators=[Optional(), Length(min=2, max=100)])
    description = StringField(validators=[Optional(), Length(max=500)])
    number = StringField(validators=[Optional(), Length(max=20), ACTOR_NUMBER_REGEXP])
    actor_type_uid = IntegerField(validators=[Optional()])
    active = BooleanField(validators=[Optional()])


class CreateActorTypeValidator(FlaskForm):
    actor_type_name = StringField(validators=[DataRequired(), Length(min=2, max=50)])
