from flask import current_app, jsonify, send_file

from app.utils.utils import (
    logged_in_active_user_required,
    validate_payload,
    validate_query_params,
)

from .export import XLSX_MIMETYPE, build_report_workbook, get_report_filename
from .routes import reports_bp
from .utils import ReportFilters, build_detailed_report, build_summary_report
from .validators import ExportReportValidator, ReportFiltersValidator


@reports_bp.route("/summary", methods=["GET"])
@logged_in_active_user_required
@validate_query_params(ReportFiltersValidator)
def get_summary_report(validated_query_params):
    """
    Summary report of the spray records for a year

    Accepts the query params year, start_date, end_date, province_uid,
    district_uid, spray_status and spray_type
    """

    report_filters = ReportFilters.from_form(validated_query_params)

    return jsonify({"success": True, "data": build_summary_report(report_filters)}), 200


@reports_bp.route("/detailed", methods=["GET"])
@logged_in_active_user_required
@validate_query_params(ReportFiltersValidator)
def get_detailed_report(validated_query_params):
    report_filters = ReportFilters.from_form(validated_query_params)

    return (
        jsonify({"success": True, "data": build_detailed_report(report_filters)}),
        200,
    )


@reports_bp.route("/export", methods=["POST"])
@logged_in_active_user_required
@validate_payload(ExportReportValidator)
def export_report(validated_payload):
    """
    Download a summary or detailed report as an Excel file

    Requires JSON body with following keys:
    - report_type: summary | detailed
    - filters (optional): same keys as the report query params
    """

    report_type = validated_payload.report_type.data
    report_filters = ReportFilters.from_form(validated_payload.filters.form)

    if report_type == "summary":
        report = build_summary_report(report_filters)
    else:
        report = build_detailed_report(report_filters)

    current_app.logger.info(
        "Exporting %s report for %s", report_type, report_filters.year
    )

    return send_file(
        build_report_workbook(report_type, report),
        mimetype=XLSX_MIMETYPE,
        as_attachment=True,
        download_name=get_report_filename(report_type, report_filters.year),
    )
