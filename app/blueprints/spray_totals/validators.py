from flask_wtf import FlaskForm
from wtforms import DateField, IntegerField, StringField
from wtforms.validators import AnyOf, DataRequired, Length, NumberRange, Optional

from .models import (
    REASONS_NOT_SPRAYED,
    ROOFS_TYPES,
    SPRAY_STATUSES,
    SPRAY_TYPES,
    WALLS_TYPES,
)

ANY_OF_MESSAGE = "Value must be one of %(values)s"


def count_field():
    return IntegerField(validators=[Optional(), NumberRange(min=0)])


class SprayTotalsQueryParamValidator(FlaskForm):
    class Meta:
        csrf = False

    year = IntegerField(validators=[Optional()])
    spray_status = StringField(
        validators=[Optional(), AnyOf(SPRAY_STATUSES, message=ANY_OF_MESSAGE)]
    )
    spray_type = StringField(
        validators=[Optional(), AnyOf(SPRAY_TYPES, message=ANY_OF_MESSAGE)]
    )
    community_uid = IntegerField(validators=[Optional()])
    sprayer_uid = IntegerField(validators=[Optional()])


class CreateSprayTotalsValidator(FlaskForm):
    sprayer_uid = IntegerField(validators=[DataRequired()])
    brigade_chief_uid = IntegerField(validators=[DataRequired()])
    community_uid = IntegerField(validators=[DataRequired()])
    spray_configuration_uid = IntegerField(validators=[Optional()])
    spray_type = StringField(
        validators=[Optional(), AnyOf(SPRAY_TYPES, message=ANY_OF_MESSAGE)]
    )
    spray_date = DateField(validators=[DataRequired()])
    spray_round = IntegerField(validators=[Optional(), NumberRange(min=1)])
    spray_status = StringField(
        validators=[Optional(), AnyOf(SPRAY_STATUSES, message=ANY_OF_MESSAGE)]
    )
    insecticide_used = StringField(validators=[Optional(), Length(max=100)])
    structures_found = count_field()
    structures_sprayed = count_field()
    structures_not_sprayed = count_field()
    compartments_sprayed = count_field()
    walls_type = StringField(
        validators=[Optional(), AnyOf(WALLS_TYPES, message=ANY_OF_MESSAGE)]
    )
    roofs_type = StringField(
        validators=[Optional(), AnyOf(ROOFS_TYPES, message=ANY_OF_MESSAGE)]
    )
    number_of_persons = count_field()
    children_under_5 = count_field()
    pregnant_women = count_field()
    reason_not_sprayed = StringField(
        validators=[Optional(), AnyOf(REASONS_NOT_SPRAYED, message=ANY_OF_MESSAGE)]
    )


class UpdateSprayTotalsValidator(CreateSprayTotalsValidator):
    sprayer_uid = IntegerField(validators=[Optional()])
    brigade_chief_uid = IntegerField(validators=[Optional()])
    community_uid = IntegerField(validators=[Optional()])
    spray_date = DateField(validators=[Optional()])
