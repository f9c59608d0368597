from datetime import datetime

from flask import current_app, jsonify
from flask_login import current_user
from sqlalchemy.exc import IntegrityError

from app import db
from app.blueprints.auth.models import User
from app.blueprints.locations.models import Community
from app.blueprints.spray_configurations.models import SprayConfiguration
from app.utils.utils import (
    get_payload_fields,
    logged_in_active_user_required,
    roles_required,
    validate_payload,
    validate_query_params,
)

from .models import SprayTotals
from .queries import build_spray_totals_query
from .routes import spray_totals_bp
from .utils import SprayCounts
from .validators import (
    CreateSprayTotalsValidator,
    SprayTotalsQueryParamValidator,
    UpdateSprayTotalsValidator,
)

UPDATABLE_FIELDS = [
    "sprayer_uid",
    "brigade_chief_uid",
    "community_uid",
    "spray_configuration_uid",
    "spray_type",
    "spray_date",
    "spray_round",
    "spray_status",
    "insecticide_used",
    "structures_found",
    "structures_sprayed",
    "structures_not_sprayed",
    "compartments_sprayed",
    "walls_type",
    "roofs_type",
    "number_of_persons",
    "children_under_5",
    "pregnant_women",
    "reason_not_sprayed",
]

# Fields that may be cleared by sending an empty value
NULLABLE_FIELDS = ["spray_configuration_uid", "reason_not_sprayed"]


def get_active_actor(user_uid):
    return User.query.filter(
        User.user_uid == user_uid,
        User.active.is_(True),
        User.deleted_at.is_(None),
    ).first()


def check_references(
    sprayer_uid=None,
    brigade_chief_uid=None,
    community_uid=None,
    spray_configuration_uid=None,
):
    """
    Return an error message for the first reference that doesn't resolve
    """

    if sprayer_uid is not None and get_active_actor(sprayer_uid) is None:
        return "Sprayer not found or inactive"

    if brigade_chief_uid is not None and get_active_actor(brigade_chief_uid) is None:
        return "Brigade chief not found or inactive"

    if community_uid is not None and Community.query.get(community_uid) is None:
        return "Community not found"

    if (
        spray_configuration_uid is not None
        and SprayConfiguration.query.get(spray_configuration_uid) is None
    ):
        return "Spray configuration not found"

    return None


@spray_totals_bp.route("", methods=["GET"])
@logged_in_active_user_required
@validate_query_params(SprayTotalsQueryParamValidator)
def get_spray_totals(validated_query_params):
    """
    Get the spray totals, newest spray date first
    """

    spray_totals_query = build_spray_totals_query()

    year = validated_query_params.year.data
    spray_status = validated_query_params.spray_status.data
    spray_type = validated_query_params.spray_type.data
    community_uid = validated_query_params.community_uid.data
    sprayer_uid = validated_query_params.sprayer_uid.data

    if year is not None:
        spray_totals_query = spray_totals_query.filter(SprayTotals.spray_year == year)
    if spray_status:
        spray_totals_query = spray_totals_query.filter(
            SprayTotals.spray_status == spray_status
        )
    if spray_type:
        spray_totals_query = spray_totals_query.filter(
            SprayTotals.spray_type == spray_type
        )
    if community_uid is not None:
        spray_totals_query = spray_totals_query.filter(
            SprayTotals.community_uid == community_uid
        )
    if sprayer_uid is not None:
        spray_totals_query = spray_totals_query.filter(
            SprayTotals.sprayer_uid == sprayer_uid
        )

    spray_totals = spray_totals_query.order_by(
        SprayTotals.spray_date.desc(), SprayTotals.created_at.desc()
    ).all()

    return (
        jsonify(
            {
                "success": True,
                "data": [spray_total.to_dict() for spray_total in spray_totals],
            }
        ),
        200,
    )


@spray_totals_bp.route("/<int:spray_totals_uid>", methods=["GET"])
@logged_in_active_user_required
def get_spray_total(spray_totals_uid):
    spray_total = (
        build_spray_totals_query()
        .filter(SprayTotals.spray_totals_uid == spray_totals_uid)
        .first()
    )

    if spray_total is None:
        return jsonify({"success": False, "error": "Spray record not found"}), 404

    return jsonify({"success": True, "data": spray_total.to_dict()}), 200


@spray_totals_bp.route("", methods=["POST"])
@logged_in_active_user_required
@roles_required("ADMIN", "SUPERVISOR", "SPRAYER")
@validate_payload(CreateSprayTotalsValidator)
def create_spray_total(validated_payload):
    """
    Record spraying activity for a community

    When structures_not_sprayed is left out it is taken as the difference
    between structures found and sprayed
    """

    sprayer_uid = validated_payload.sprayer_uid.data
    brigade_chief_uid = validated_payload.brigade_chief_uid.data
    community_uid = validated_payload.community_uid.data
    spray_configuration_uid = validated_payload.spray_configuration_uid.data

    reference_error = check_references(
        sprayer_uid=sprayer_uid,
        brigade_chief_uid=brigade_chief_uid,
        community_uid=community_uid,
        spray_configuration_uid=spray_configuration_uid,
    )
    if reference_error:
        return jsonify({"success": False, "error": reference_error}), 400

    structures_found = validated_payload.structures_found.data or 0
    structures_sprayed = validated_payload.structures_sprayed.data or 0
    structures_not_sprayed = validated_payload.structures_not_sprayed.data
    if structures_not_sprayed is None:
        structures_not_sprayed = structures_found - structures_sprayed

    spray_counts = SprayCounts(
        structures_found=structures_found,
        structures_sprayed=structures_sprayed,
        structures_not_sprayed=structures_not_sprayed,
        number_of_persons=validated_payload.number_of_persons.data or 0,
        children_under_5=validated_payload.children_under_5.data or 0,
        pregnant_women=validated_payload.pregnant_women.data or 0,
    )

    count_errors = spray_counts.get_errors()
    if count_errors:
        return jsonify({"success": False, "error": count_errors}), 400

    spray_total = SprayTotals(
        sprayer_uid=sprayer_uid,
        brigade_chief_uid=brigade_chief_uid,
        community_uid=community_uid,
        spray_date=validated_payload.spray_date.data,
        created_by=current_user.user_uid,
        spray_configuration_uid=spray_configuration_uid,
        spray_type=validated_payload.spray_type.data or "PRINCIPAL",
        spray_round=validated_payload.spray_round.data or 1,
        spray_status=validated_payload.spray_status.data or "PLANNED",
        insecticide_used=validated_payload.insecticide_used.data or "",
        structures_found=spray_counts.structures_found,
        structures_sprayed=spray_counts.structures_sprayed,
        structures_not_sprayed=spray_counts.structures_not_sprayed,
        compartments_sprayed=validated_payload.compartments_sprayed.data or 0,
        walls_type=validated_payload.walls_type.data or "MATOPE",
        roofs_type=validated_payload.roofs_type.data or "ZINCO",
        number_of_persons=spray_counts.number_of_persons,
        children_under_5=spray_counts.children_under_5,
        pregnant_women=spray_counts.pregnant_women,
        reason_not_sprayed=validated_payload.reason_not_sprayed.data or None,
    )

    try:
        db.session.add(spray_total)
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        current_app.logger.warning("Failed to create spray record: %s", e)
        return jsonify({"success": False, "error": "Invalid spray record"}), 400

    return jsonify({"success": True, "data": spray_total.to_dict()}), 201


@spray_totals_bp.route("/<int:spray_totals_uid>", methods=["PUT"])
@logged_in_active_user_required
@roles_required("ADMIN", "SUPERVISOR", "SPRAYER")
@validate_payload(UpdateSprayTotalsValidator)
def update_spray_total(spray_totals_uid, validated_payload):
    """
    Update the fields sent in the request body

    Sprayers can only update the records they created
    """

    spray_total = (
        build_spray_totals_query()
        .filter(SprayTotals.spray_totals_uid == spray_totals_uid)
        .first()
    )

    if spray_total is None:
        return jsonify({"success": False, "error": "Spray record not found"}), 404

    if (
        current_user.role == "SPRAYER"
        and spray_total.created_by != current_user.user_uid
    ):
        return (
            jsonify(
                {
                    "success": False,
                    "error": "Sprayers can only edit the records they created",
                }
            ),
            403,
        )

    updates = get_payload_fields(validated_payload, UPDATABLE_FIELDS)

    # Empty values leave required columns as they are
    for field_name in list(updates):
        if field_name in NULLABLE_FIELDS:
            updates[field_name] = updates[field_name] or None
        elif updates[field_name] is None or updates[field_name] == "":
            del updates[field_name]

    reference_error = check_references(
        sprayer_uid=updates.get("sprayer_uid"),
        brigade_chief_uid=updates.get("brigade_chief_uid"),
        community_uid=updates.get("community_uid"),
        spray_configuration_uid=updates.get("spray_configuration_uid"),
    )
    if reference_error:
        return jsonify({"success": False, "error": reference_error}), 400

    if (
        "structures_found" in updates
        and "structures_sprayed" in updates
        and "structures_not_sprayed" not in updates
    ):
        updates["structures_not_sprayed"] = (
            updates["structures_found"] - updates["structures_sprayed"]
        )

    spray_counts = SprayCounts(
        **{
            field_name: updates.get(field_name, getattr(spray_total, field_name))
            for field_name in [
                "structures_found",
                "structures_sprayed",
                "structures_not_sprayed",
                "number_of_persons",
                "children_under_5",
                "pregnant_women",
            ]
        }
    )

    count_errors = spray_counts.get_errors()
    if count_errors:
        return jsonify({"success": False, "error": count_errors}), 400

    for field_name, value in updates.items():
        setattr(spray_total, field_name, value)

    if "spray_date" in updates:
        spray_total.spray_year = updates["spray_date"].year

    spray_total.updated_by = current_user.user_uid

    try:
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        current_app.logger.warning("Failed to update spray record: %s", e)
        return jsonify({"success": False, "error": "Invalid spray record"}), 400

    return jsonify({"success": True, "data": spray_total.to_dict()}), 200


@spray_totals_bp.route("/<int:spray_totals_uid>", methods=["DELETE"])
@logged_in_active_user_required
@roles_required("ADMIN", "SUPERVISOR")
def delete_spray_total(spray_totals_uid):
    """
    Soft delete a spray record, completed records are kept
    """

    spray_total = (
        build_spray_totals_query()
        .filter(SprayTotals.spray_totals_uid == spray_totals_uid)
        .first()
    )

    if spray_total is None:
        return jsonify({"success": False, "error": "Spray record not found"}), 404

    if spray_total.spray_status == "COMPLETED":
        return (
            jsonify(
                {"success": False, "error": "Completed spray records can't be deleted"}
            ),
            400,
        )

    spray_total.is_deleted = True
    spray_total.deleted_at = datetime.utcnow()
    spray_total.deleted_by = current_user.user_uid
    db.session.commit()

    return jsonify({"success": True, "message": "Spray record deleted"}), 200
