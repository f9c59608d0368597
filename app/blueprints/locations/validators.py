from flask_wtf import FlaskForm
from wtforms import IntegerField, StringField
from wtforms.validators import DataRequired, Length, Optional, Regexp

LOCATION_CODE_REGEXP = Regexp(
    r"^[A-Z0-9-]*$",
    message="Code may only contain uppercase letters, digits and hyphens",
)


class DistrictsQueryParamValidator(FlaskForm):
    class Meta:
        csrf = False

    province_uid = IntegerField(validators=[Optional()])


class LocalitiesQueryParamValidator(FlaskForm):
    class Meta:
        csrf = False

    district_uid = IntegerField(validators=[Optional()])


class CommunitiesQueryParamValidator(FlaskForm):
    class Meta:
        csrf = False

    locality_uid = IntegerField(validators=[Optional()])


class CreateProvinceValidator(FlaskForm):
    province_name = StringField(validators=[DataRequired(), Length(min=2, max=100)])
    province_code = StringField(
        validators=[Optional(), Length(max=10), LOCATION_CODE_REGEXP]
    )


class UpdateProvinceValidator(FlaskForm):
    province_name = StringField(validators=[Optional(), Length(min=2, max=100)])
    province_code = StringField(
        validators=[Optional(), Length(max=10), LOCATION_CODE_REGEXP]
    )


class CreateDistrictValidator(FlaskForm):
    district_name = StringField(validators=[DataRequired(), Length(min=2, max=100)])
    district_code = StringField(
        validators=[Optional(), Length(max=10), LOCATION_CODE_REGEXP]
    )
    province_uid = IntegerField(validators=[DataRequired()])


class UpdateDistrictValidator(FlaskForm):
    district_name = StringField(validators=[Optional(), Length(min=2, max=100)])
    district_code = StringField(
        validators=[Optional(), Length(max=10), LOCATION_CODE_REGEXP]
    )
    province_uid = IntegerField(validators=[Optional()])


class CreateLocalityValidator(FlaskForm):
    locality_name = StringField(validators=[DataRequired(), Length(min=2, max=100)])
    district_uid = IntegerField(validators=[DataRequired()])


class UpdateLocalityValidator(FlaskForm):
    locality_name = StringField(validators=[Optional(), Length(min=2, max=100)])
    district_uid = IntegerField(validators=[Optional()])


class CreateCommunityValidator(FlaskForm):
    community_name = StringField(validators=[DataRequired(), Length(min=2, max=100)])
    locality_uid = IntegerField(validators=[DataRequired()])


class UpdateCommunityValidator(FlaskForm):
    community_name = StringField(validators=[Optional(), Length(min=2, max=100)])
    locality_uid = IntegerField(validators=[Optional()])
