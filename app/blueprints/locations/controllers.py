from flask import current_app, jsonify
from sqlalchemy.exc import IntegrityError

from app import db
from app.utils.utils import (
    get_payload_fields,
    logged_in_active_user_required,
    roles_required,
    validate_payload,
    validate_query_params,
)

from .models import Community, District, Locality, Province
from .routes import locations_bp
from .validators import (
    CommunitiesQueryParamValidator,
    CreateCommunityValidator,
    CreateDistrictValidator,
    CreateLocalityValidator,
    CreateProvinceValidator,
    DistrictsQueryParamValidator,
    LocalitiesQueryParamValidator,
    UpdateCommunityValidator,
    UpdateDistrictValidator,
    UpdateLocalityValidator,
    UpdateProvinceValidator,
)


def not_found(entity_label):
    return jsonify({"success": False, "error": f"{entity_label} not found"}), 404


def save_location(location, entity_label, status_code):
    """
    Commit a created or updated location, duplicates within the same parent
    come back as 409
    """

    try:
        db.session.add(location)
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        current_app.logger.warning("Duplicate %s: %s", entity_label.lower(), e)
        return (
            jsonify(
                {
                    "success": False,
                    "error": f"{entity_label} with this name already exists",
                }
            ),
            409,
        )

    return jsonify({"success": True, "data": location.to_dict()}), status_code


def delete_location(location, entity_label):
    """
    Hard delete a location

    Children go with it through the database cascade, the database refuses
    when spray records still point at the location's communities
    """

    try:
        db.session.delete(location)
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        current_app.logger.warning("Refused to delete %s: %s", entity_label, e)
        return (
            jsonify(
                {
                    "success": False,
                    "error": f"{entity_label} is referenced by other records",
                }
            ),
            400,
        )

    return jsonify({"success": True, "message": f"{entity_label} deleted"}), 200


##############################################################################
# PROVINCES
##############################################################################


@locations_bp.route("/provinces", methods=["GET"])
@logged_in_active_user_required
def get_provinces():
    provinces = Province.query.order_by(Province.province_name).all()

    return (
        jsonify(
            {"success": True, "data": [province.to_dict() for province in provinces]}
        ),
        200,
    )


@locations_bp.route("/provinces/<int:province_uid>", methods=["GET"])
@logged_in_active_user_required
def get_province(province_uid):
    province = Province.query.get(province_uid)

    if province is None:
        return not_found("Province")

    return jsonify({"success": True, "data": province.to_dict()}), 200


@locations_bp.route("/provinces", methods=["POST"])
@logged_in_active_user_required
@roles_required("ADMIN", "SUPERVISOR")
@validate_payload(CreateProvinceValidator)
def create_province(validated_payload):
    province = Province(
        province_name=validated_payload.province_name.data,
        province_code=validated_payload.province_code.data or None,
    )

    return save_location(province, "Province", 201)


@locations_bp.route("/provinces/<int:province_uid>", methods=["PUT"])
@logged_in_active_user_required
@roles_required("ADMIN", "SUPERVISOR")
@validate_payload(UpdateProvinceValidator)
def update_province(province_uid, validated_payload):
    province = Province.query.get(province_uid)

    if province is None:
        return not_found("Province")

    updates = get_payload_fields(validated_payload, ["province_name", "province_code"])

    if updates.get("province_name"):
        province.province_name = updates["province_name"]
    if "province_code" in updates:
        province.province_code = updates["province_code"] or None

    return save_location(province, "Province", 200)


@locations_bp.route("/provinces/<int:province_uid>", methods=["DELETE"])
@logged_in_active_user_required
@roles_required("ADMIN")
def delete_province(province_uid):
    province = Province.query.get(province_uid)

    if province is None:
        return not_found("Province")

    return delete_location(province, "Province")


##############################################################################
# DISTRICTS
##############################################################################


@locations_bp.route("/districts", methods=["GET"])
@logged_in_active_user_required
@validate_query_params(DistrictsQueryParamValidator)
def get_districts(validated_query_params):
    """
    Get the districts, optionally for a single province
    """

    province_uid = validated_query_params.province_uid.data

    district_query = District.query
    if province_uid is not None:
        district_query = district_query.filter(District.province_uid == province_uid)

    districts = district_query.order_by(District.district_name).all()

    return (
        jsonify(
            {"success": True, "data": [district.to_dict() for district in districts]}
        ),
        200,
    )


@locations_bp.route("/districts/<int:district_uid>", methods=["GET"])
@logged_in_active_user_required
def get_district(district_uid):
    district = District.query.get(district_uid)

    if district is None:
        return not_found("District")

    return jsonify({"success": True, "data": district.to_dict()}), 200


@locations_bp.route("/districts", methods=["POST"])
@logged_in_active_user_required
@roles_required("ADMIN", "SUPERVISOR")
@validate_payload(CreateDistrictValidator)
def create_district(validated_payload):
    province_uid = validated_payload.province_uid.data

    if Province.query.get(province_uid) is None:
        return jsonify({"success": False, "error": "Province not found"}), 400

    district = District(
        district_name=validated_payload.district_name.data,
        province_uid=province_uid,
        district_code=validated_payload.district_code.data or None,
    )

    return save_location(district, "District", 201)


@locations_bp.route("/districts/<int:district_uid>", methods=["PUT"])
@logged_in_active_user_required
@roles_required("ADMIN", "SUPERVISOR")
@validate_payload(UpdateDistrictValidator)
def update_district(district_uid, validated_payload):
    district = District.query.get(district_uid)

    if district is None:
        return not_found("District")

    updates = get_payload_fields(
        validated_payload, ["district_name", "district_code", "province_uid"]
    )

    if updates.get("province_uid") is not None:
        if Province.query.get(updates["province_uid"]) is None:
            return jsonify({"success": False, "error": "Province not found"}), 400
        district.province_uid = updates["province_uid"]
    if updates.get("district_name"):
        district.district_name = updates["district_name"]
    if "district_code" in updates:
        district.district_code = updates["district_code"] or None

    return save_location(district, "District", 200)


@locations_bp.route("/districts/<int:district_uid>", methods=["DELETE"])
@logged_in_active_user_required
@roles_required("ADMIN")
def delete_district(district_uid):
    district = District.query.get(district_uid)

    if district is None:
        return not_found("District")

    return delete_location(district, "District")


##############################################################################
# LOCALITIES
##############################################################################


@locations_bp.route("/localities", methods=["GET"])
@logged_in_active_user_required
@validate_query_params(LocalitiesQueryParamValidator)
def get_localities(validated_query_params):
    district_uid = validated_query_params.district_uid.data

    locality_query = Locality.query
    if district_uid is not None:
        locality_query = locality_query.filter(Locality.district_uid == district_uid)

    localities = locality_query.order_by(Locality.locality_name).all()

    return (
        jsonify(
            {"success": True, "data": [locality.to_dict() for locality in localities]}
        ),
        200,
    )


@locations_bp.route("/localities/<int:locality_uid>", methods=["GET"])
@logged_in_active_user_required
def get_locality(locality_uid):
    locality = Locality.query.get(locality_uid)

    if locality is None:
        return not_found("Locality")

    return jsonify({"success": True, "data": locality.to_dict()}), 200


@locations_bp.route("/localities", methods=["POST"])
@logged_in_active_user_required
@roles_required("ADMIN", "SUPERVISOR")
@validate_payload(CreateLocalityValidator)
def create_locality(validated_payload):
    district_uid = validated_payload.district_uid.data

    if District.query.get(district_uid) is None:
        return jsonify({"success": False, "error": "District not found"}), 400

    locality = Locality(
        locality_name=validated_payload.locality_name.data,
        district_uid=district_uid,
    )

    return save_location(locality, "Locality", 201)


@locations_bp.route("/localities/<int:locality_uid>", methods=["PUT"])
@logged_in_active_user_required
@roles_required("ADMIN", "SUPERVISOR")
@validate_payload(UpdateLocalityValidator)
def update_locality(locality_uid, validated_payload):
    locality = Locality.query.get(locality_uid)

    if locality is None:
        return not_found("Locality")

    updates = get_payload_fields(validated_payload, ["locality_name", "district_uid"])

    if updates.get("district_uid") is not None:
        if District.query.get(updates["district_uid"]) is None:
            return jsonify({"success": False, "error": "District not found"}), 400
        locality.district_uid = updates["district_uid"]
    if updates.get("locality_name"):
        locality.locality_name = updates["locality_name"]

    return save_location(locality, "Locality", 200)


@locations_bp.route("/localities/<int:locality_uid>", methods=["DELETE"])
@logged_in_active_user_required
@roles_required("ADMIN")
def delete_locality(locality_uid):
    locality = Locality.query.get(locality_uid)

    if locality is None:
        return not_found("Locality")

    return delete_location(locality, "Locality")


##############################################################################
# COMMUNITIES
##############################################################################


@locations_bp.route("/communities", methods=["GET"])
@logged_in_active_user_required
@validate_query_params(CommunitiesQueryParamValidator)
def get_communities(validated_query_params):
    locality_uid = validated_query_params.locality_uid.data

    community_query = Community.query
    if locality_uid is not None:
        community_query = community_query.filter(
            Community.locality_uid == locality_uid
        )

    communities = community_query.order_by(Community.community_name).all()

    return (
        jsonify(
            {
                "success": True,
                "data": [community.to_dict() for community in communities],
            }
        ),
        200,
    )


@locations_bp.route("/communities/<int:community_uid>", methods=["GET"])
@logged_in_active_user_required
def get_community(community_uid):
    community = Community.query.get(community_uid)

    if community is None:
        return not_found("Community")

    return jsonify({"success": True, "data": community.to_dict()}), 200


@locations_bp.route("/communities", methods=["POST"])
@logged_in_active_user_required
@roles_required("ADMIN", "SUPERVISOR")
@validate_payload(CreateCommunityValidator)
def create_community(validated_payload):
    locality_uid = validated_payload.locality_uid.data

    if Locality.query.get(locality_uid) is None:
        return jsonify({"success": False, "error": "Locality not found"}), 400

    community = Community(
        community_name=validated_payload.community_name.data,
        locality_uid=locality_uid,
    )

    return save_location(community, "Community", 201)


@locations_bp.route("/communities/<int:community_uid>", methods=["PUT"])
@logged_in_active_user_required
@roles_required("ADMIN", "SUPERVISOR")
@validate_payload(UpdateCommunityValidator)
def update_community(community_uid, validated_payload):
    community = Community.query.get(community_uid)

    if community is None:
        return not_found("Community")

    updates = get_payload_fields(validated_payload, ["community_name", "locality_uid"])

    if updates.get("locality_uid") is not None:
        if Locality.query.get(updates["locality_uid"]) is None:
            return jsonify({"success": False, "error": "Locality not found"}), 400
        community.locality_uid = updates["locality_uid"]
    if updates.get("community_name"):
        community.community_name = updates["community_name"]

    return save_location(community, "Community", 200)


@locations_bp.route("/communities/<int:community_uid>", methods=["DELETE"])
@logged_in_active_user_required
@roles_required("ADMIN")
def delete_community(community_uid):
    community = Community.query.get(community_uid)

    if community is None:
        return not_found("Community")

    return delete_location(community, "Community")
