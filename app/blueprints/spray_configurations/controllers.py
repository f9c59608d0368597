from flask import current_app, jsonify, request
from flask_login import current_user
from sqlalchemy.exc import IntegrityError

from app import db
from app.blueprints.locations.models import District, Province
from app.utils.utils import (
    get_payload_fields,
    logged_in_active_user_required,
    roles_required,
    validate_payload,
)

from .models import SprayConfiguration
from .routes import spray_configurations_bp
from .validators import (
    CreateSprayConfigurationValidator,
    UpdateSprayConfigurationValidator,
)


def find_duplicate_configuration(year, province_uid, district_uid, exclude_uid=None):
    """
    Look for another configuration with the same year and location scope

    A null province or district only matches another null, which a unique
    constraint can't express
    """

    duplicate_query = SprayConfiguration.query.filter(
        SprayConfiguration.year == year
    )

    if province_uid is None:
        duplicate_query = duplicate_query.filter(
            SprayConfiguration.province_uid.is_(None)
        )
    else:
        duplicate_query = duplicate_query.filter(
            SprayConfiguration.province_uid == province_uid
        )

    if district_uid is None:
        duplicate_query = duplicate_query.filter(
            SprayConfiguration.district_uid.is_(None)
        )
    else:
        duplicate_query = duplicate_query.filter(
            SprayConfiguration.district_uid == district_uid
        )

    if exclude_uid is not None:
        duplicate_query = duplicate_query.filter(
            SprayConfiguration.spray_configuration_uid != exclude_uid
        )

    return duplicate_query.first()


def check_configuration_scope(province_uid, district_uid):
    """
    Return an error message if the referenced province or district is missing
    """

    if province_uid is not None and Province.query.get(province_uid) is None:
        return "Province not found"

    if district_uid is not None and District.query.get(district_uid) is None:
        return "District not found"

    return None


@spray_configurations_bp.route("", methods=["GET"])
@logged_in_active_user_required
def get_spray_configurations():
    spray_configurations = SprayConfiguration.query.order_by(
        SprayConfiguration.year.desc(),
        SprayConfiguration.spray_configuration_uid,
    ).all()

    return (
        jsonify(
            {
                "success": True,
                "data": [
                    spray_configuration.to_dict()
                    for spray_configuration in spray_configurations
                ],
            }
        ),
        200,
    )


@spray_configurations_bp.route("/<int:spray_configuration_uid>", methods=["GET"])
@logged_in_active_user_required
def get_spray_configuration(spray_configuration_uid):
    spray_configuration = SprayConfiguration.query.get(spray_configuration_uid)

    if spray_configuration is None:
        return (
            jsonify({"success": False, "error": "Spray configuration not found"}),
            404,
        )

    return jsonify({"success": True, "data": spray_configuration.to_dict()}), 200


@spray_configurations_bp.route("", methods=["POST"])
@logged_in_active_user_required
@roles_required("ADMIN", "SUPERVISOR")
@validate_payload(CreateSprayConfigurationValidator)
def create_spray_configuration(validated_payload):
    """
    Create the campaign configuration for a year and location scope
    """

    payload = request.get_json()

    year = validated_payload.year.data
    province_uid = validated_payload.province_uid.data
    district_uid = validated_payload.district_uid.data
    start_date = validated_payload.start_date.data
    end_date = validated_payload.end_date.data

    if start_date and end_date and start_date > end_date:
        return (
            jsonify({"success": False, "error": "Start date must be before end date"}),
            400,
        )

    scope_error = check_configuration_scope(province_uid, district_uid)
    if scope_error:
        return jsonify({"success": False, "error": scope_error}), 400

    if find_duplicate_configuration(year, province_uid, district_uid):
        return (
            jsonify(
                {
                    "success": False,
                    "error": "A configuration already exists for this year and location",
                }
            ),
            409,
        )

    spray_configuration = SprayConfiguration(
        year=year,
        proposed_spray_days=validated_payload.proposed_spray_days.data,
        spray_target=validated_payload.spray_target.data or 0,
        province_uid=province_uid,
        district_uid=district_uid,
        start_date=start_date,
        end_date=end_date,
        spray_rounds=validated_payload.spray_rounds.data or 1,
        days_between_rounds=validated_payload.days_between_rounds.data or 0,
        description=validated_payload.description.data or None,
        notes=validated_payload.notes.data or None,
        active=validated_payload.active.data if "active" in payload else True,
        created_by=current_user.user_uid,
    )

    try:
        db.session.add(spray_configuration)
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        current_app.logger.warning("Failed to create spray configuration: %s", e)
        return (
            jsonify({"success": False, "error": "Invalid spray configuration"}),
            400,
        )

    return jsonify({"success": True, "data": spray_configuration.to_dict()}), 201


@spray_configurations_bp.route("/<int:spray_configuration_uid>", methods=["PUT"])
@logged_in_active_user_required
@roles_required("ADMIN", "SUPERVISOR")
@validate_payload(UpdateSprayConfigurationValidator)
def update_spray_configuration(spray_configuration_uid, validated_payload):
    """
    Update the fields sent in the request body
    """

    spray_configuration = SprayConfiguration.query.get(spray_configuration_uid)

    if spray_configuration is None:
        return (
            jsonify({"success": False, "error": "Spray configuration not found"}),
            404,
        )

    updates = get_payload_fields(
        validated_payload,
        [
            "year",
            "province_uid",
            "district_uid",
            "spray_target",
            "proposed_spray_days",
            "start_date",
            "end_date",
            "spray_rounds",
            "days_between_rounds",
            "description",
            "notes",
            "active",
        ],
    )

    # Required columns can't be cleared
    for field_name in [
        "year",
        "spray_target",
        "proposed_spray_days",
        "spray_rounds",
        "days_between_rounds",
        "active",
    ]:
        if field_name in updates and updates[field_name] is None:
            del updates[field_name]

    year = updates.get("year", spray_configuration.year)
    province_uid = updates.get("province_uid", spray_configuration.province_uid)
    district_uid = updates.get("district_uid", spray_configuration.district_uid)
    start_date = updates.get("start_date", spray_configuration.start_date)
    end_date = updates.get("end_date", spray_configuration.end_date)

    if start_date and end_date and start_date > end_date:
        return (
            jsonify({"success": False, "error": "Start date must be before end date"}),
            400,
        )

    scope_error = check_configuration_scope(province_uid, district_uid)
    if scope_error:
        return jsonify({"success": False, "error": scope_error}), 400

    if find_duplicate_configuration(
        year, province_uid, district_uid, exclude_uid=spray_configuration_uid
    ):
        return (
            jsonify(
                {
                    "success": False,
                    "error": "A configuration already exists for this year and location",
                }
            ),
            409,
        )

    for field_name, value in updates.items():
        if field_name in ("description", "notes"):
            value = value or None
        setattr(spray_configuration, field_name, value)

    try:
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        current_app.logger.warning("Failed to update spray configuration: %s", e)
        return (
            jsonify({"success": False, "error": "Invalid spray configuration"}),
            400,
        )

    return jsonify({"success": True, "data": spray_configuration.to_dict()}), 200


@spray_configurations_bp.route("/<int:spray_configuration_uid>", methods=["DELETE"])
@logged_in_active_user_required
@roles_required("ADMIN")
def delete_spray_configuration(spray_configuration_uid):
    from app.blueprints.spray_totals.models import SprayTotals

    spray_configuration = SprayConfiguration.query.get(spray_configuration_uid)

    if spray_configuration is None:
        return (
            jsonify({"success": False, "error": "Spray configuration not found"}),
            404,
        )

    spray_totals_count = SprayTotals.query.filter(
        SprayTotals.spray_configuration_uid == spray_configuration_uid
    ).count()

    if spray_totals_count > 0:
        return (
            jsonify(
                {
                    "success": False,
                    "error": f"Spray configuration is used by {spray_totals_count} spray records",
                }
            ),
            400,
        )

    db.session.delete(spray_configuration)
    db.session.commit()

    return jsonify({"success": True, "message": "Spray configuration deleted"}), 200
