from flask_wtf import FlaskForm
from wtforms import DateField, FormField, IntegerField, StringField
from wtforms.validators import AnyOf, DataRequired, Optional

from app.blueprints.spray_totals.models import SPRAY_STATUSES, SPRAY_TYPES

REPORT_TYPES = ("summary", "detailed")


class ReportFiltersValidator(FlaskForm):
    class Meta:
        csrf = False

    year = IntegerField(validators=[Optional()])
    start_date = DateField(validators=[Optional()])
    end_date = DateField(validators=[Optional()])
    province_uid = IntegerField(validators=[Optional()])
    district_uid = IntegerField(validators=[Optional()])
    spray_status = StringField(
        validators=[
            Optional(),
            AnyOf(
                SPRAY_STATUSES + ("all",), message="Value must be one of %(values)s"
            ),
        ]
    )
    spray_type = StringField(
        validators=[
            Optional(),
            AnyOf(SPRAY_TYPES + ("all",), message="Value must be one of %(values)s"),
        ]
    )


class ExportReportValidator(FlaskForm):
    report_type = StringField(
        validators=[
            DataRequired(),
            AnyOf(REPORT_TYPES, message="Invalid report type, use one of %(values)s"),
        ]
    )
    filters = FormField(ReportFiltersValidator)
