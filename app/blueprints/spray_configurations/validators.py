from flask_wtf import FlaskForm
from wtforms import BooleanField, DateField, IntegerField, StringField
from wtforms.validators import DataRequired, Length, NumberRange, Optional


class CreateSprayConfigurationValidator(FlaskForm):
    year = IntegerField(validators=[DataRequired(), NumberRange(min=2020, max=2100)])
    province_uid = IntegerField(validators=[Optional()])
    district_uid = IntegerField(validators=[Optional()])
    spray_target = IntegerField(validators=[Optional(), NumberRange(min=0)])
    proposed_spray_days = IntegerField(
        validators=[DataRequired(), NumberRange(min=1, max=365)]
    )
    start_date = DateField(validators=[Optional()])
    end_date = DateField(validators=[Optional()])
    spray_rounds = IntegerField(validators=[Optional(), NumberRange(min=1, max=5)])
    days_between_rounds = IntegerField(validators=[Optional(), NumberRange(min=0)])
    description = StringField(validators=[Optional(), Length(max=500)])
    notes = StringField(validators=[Optional(), Length(max=1000)])
    active = BooleanField(default=True)


class UpdateSprayConfigurationValidator(FlaskForm):
    year = IntegerField(validators=[Optional(), NumberRange(min=2020, max=2100)])
    province_uid = IntegerField(validators=[Optional()])
    district_uid = IntegerField(validators=[Optional()])
    spray_target = IntegerField(validators=[Optional(), NumberRange(min=0)])
    proposed_spray_days = IntegerField(
        validators=[Optional(), NumberRange(min=1, max=365)]
    )
    start_date = DateField(validators=[Optional()])
    end_date = DateField(validators=[Optional()])
    spray_rounds = IntegerField(validators=[Optional(), NumberRange(min=1, max=5)])
    days_between_rounds = IntegerField(validators=[Optional(), NumberRange(min=0)])
    description = StringField(validators=[Optional(), Length(max=500)])
    notes = StringField(validators=[Optional(), Length(max=1000)])
    active = BooleanField()
