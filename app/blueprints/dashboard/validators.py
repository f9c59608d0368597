from flask_wtf import FlaskForm
from wtforms import IntegerField
from wtforms.validators import Optional


class DashboardQueryParamValidator(FlaskForm):
    class Meta:
        csrf = False

    year = IntegerField(validators=[Optional()])


class SprayProgressQueryParamValidator(FlaskForm):
    class Meta:
        csrf = False

    year = IntegerField(validators=[Optional()])
    province_uid = IntegerField(validators=[Optional()])
    district_uid = IntegerField(validators=[Optional()])
