from datetime import date

from flask import jsonify

from app.utils.utils import logged_in_active_user_required, validate_query_params

from .routes import dashboard_bp
from .utils import build_geographical_breakdown, build_overview, build_spray_progress
from .validators import DashboardQueryParamValidator, SprayProgressQueryParamValidator


def get_year(validated_query_params):
    year = validated_query_params.year.data

    return year if year is not None else date.today().year


@dashboard_bp.route("/overview", methods=["GET"])
@logged_in_active_user_required
@validate_query_params(DashboardQueryParamValidator)
def get_overview(validated_query_params):
    """
    Dashboard headline numbers for a year, defaults to the current year
    """

    overview = build_overview(get_year(validated_query_params))

    return jsonify({"success": True, "data": overview}), 200


@dashboard_bp.route("/geographical", methods=["GET"])
@logged_in_active_user_required
@validate_query_params(DashboardQueryParamValidator)
def get_geographical_breakdown(validated_query_params):
    breakdown = build_geographical_breakdown(get_year(validated_query_params))

    return jsonify({"success": True, "data": breakdown}), 200


@dashboard_bp.route("/spray-progress", methods=["GET"])
@logged_in_active_user_required
@validate_query_params(SprayProgressQueryParamValidator)
def get_spray_progress(validated_query_params):
    """
    Progress of the year's spraying against its targets, optionally for a
    province or district
    """

    spray_progress = build_spray_progress(
        get_year(validated_query_params),
        province_uid=validated_query_params.province_uid.data,
        district_uid=validated_query_params.district_uid.data,
    )

    return jsonify({"success": True, "data": spray_progress}), 200
