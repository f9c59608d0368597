from datetime import datetime

from flask import current_app, jsonify, request
from sqlalchemy.exc import IntegrityError

from app import db
from app.blueprints.auth.models import User
from app.utils.utils import (
    get_payload_fields,
    logged_in_active_user_required,
    roles_required,
    validate_payload,
    validate_query_params,
)

from .models import ActorType
from .routes import actors_bp
from .validators import (
    ActorsQueryParamValidator,
    CreateActorTypeValidator,
    CreateActorValidator,
    UpdateActorValidator,
)


def build_actor_email(name):
    """
    Actors are created without an email, so derive a placeholder login
    from their name
    """

    local_part = ".".join(name.lower().split())
    return f"{local_part}@{current_app.config['ACTOR_EMAIL_DOMAIN']}"


def get_actor_query():
    return User.query.filter(
        User.actor_type_uid.isnot(None),
        User.deleted_at.is_(None),
    )


##############################################################################
# ACTORS
##############################################################################


@actors_bp.route("/actors", methods=["GET"])
@logged_in_active_user_required
@validate_query_params(ActorsQueryParamValidator)
def get_actors(validated_query_params):
    """
    Get all actors, optionally filtered by actor type
    """

    actor_type_uid = validated_query_params.actor_type_uid.data

    actor_query = get_actor_query()
    if actor_type_uid is not None:
        actor_query = actor_query.filter(User.actor_type_uid == actor_type_uid)

    actors = actor_query.order_by(User.name).all()

    response = jsonify(
        {
            "success": True,
            "data": [actor.to_dict() for actor in actors],
        }
    )
    response.add_etag()

    return response, 200


@actors_bp.route("/actors/<int:user_uid>", methods=["GET"])
@logged_in_active_user_required
def get_actor(user_uid):
    actor = get_actor_query().filter(User.user_uid == user_uid).first()

    if actor is None:
        return jsonify({"success": False, "error": "Actor not found"}), 404

    return jsonify({"success": True, "data": actor.to_dict()}), 200


@actors_bp.route("/actors", methods=["POST"])
@logged_in_active_user_required
@roles_required("ADMIN", "SUPERVISOR")
@validate_payload(CreateActorValidator)
def create_actor(validated_payload):
    """
    Create a field actor

    Actors get the SPRAYER role and no password
    """

    payload = request.get_json()
    actor_type_uid = validated_payload.actor_type_uid.data

    if ActorType.query.get(actor_type_uid) is None:
        return jsonify({"success": False, "error": "Actor type not found"}), 400

    actor = User(
        email=build_actor_email(validated_payload.name.data),
        name=validated_payload.name.data,
        role="SPRAYER",
        number=validated_payload.number.data or None,
        description=validated_payload.description.data or None,
        actor_type_uid=actor_type_uid,
        active=validated_payload.active.data if "active" in payload else True,
    )

    try:
        db.session.add(actor)
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        current_app.logger.warning("Duplicate actor: %s", e)
        return (
            jsonify(
                {"success": False, "error": "An actor with this name or number exists"}
            ),
            409,
        )

    return jsonify({"success": True, "data": actor.to_dict()}), 201


@actors_bp.route("/actors/<int:user_uid>", methods=["PUT"])
@logged_in_active_user_required
@roles_required("ADMIN", "SUPERVISOR")
@validate_payload(UpdateActorValidator)
def update_actor(user_uid, validated_payload):
    actor = get_actor_query().filter(User.user_uid == user_uid).first()

    if actor is None:
        return jsonify({"success": False, "error": "Actor not found"}), 404

    updates = get_payload_fields(
        validated_payload,
        ["name", "description", "number", "actor_type_uid", "active"],
    )

    if updates.get("actor_type_uid") is not None:
        if ActorType.query.get(updates["actor_type_uid"]) is None:
            return jsonify({"success": False, "error": "Actor type not found"}), 400

    for field_name, value in updates.items():
        if value is None and field_name in ("name", "actor_type_uid", "active"):
            continue
        setattr(actor, field_name, value or None if field_name == "number" else value)

    try:
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        current_app.logger.warning("Duplicate actor: %s", e)
        return (
            jsonify({"success": False, "error": "An actor with this number exists"}),
            409,
        )

    return jsonify({"success": True, "data": actor.to_dict()}), 200


@actors_bp.route("/actors/<int:user_uid>", methods=["DELETE"])
@logged_in_active_user_required
@roles_required("ADMIN")
def delete_actor(user_uid):
    """
    Soft delete an actor so that existing spray records keep their references
    """

    actor = get_actor_query().filter(User.user_uid == user_uid).first()

    if actor is None:
        return jsonify({"success": False, "error": "Actor not found"}), 404

    actor.deleted_at = datetime.utcnow()
    db.session.commit()

    return jsonify({"success": True, "message": "Actor deleted"}), 200


##############################################################################
# ACTOR TYPES
##############################################################################


@actors_bp.route("/actor-types", methods=["GET"])
@logged_in_active_user_required
def get_actor_types():
    actor_types = ActorType.query.order_by(ActorType.actor_type_name).all()

    return (
        jsonify(
            {
                "success": True,
                "data": [actor_type.to_dict() for actor_type in actor_types],
            }
        ),
        200,
    )


@actors_bp.route("/actor-types", methods=["POST"])
@logged_in_active_user_required
@roles_required("ADMIN")
@validate_payload(CreateActorTypeValidator)
def create_actor_type(validated_payload):
    actor_type = ActorType(actor_type_name=validated_payload.actor_type_name.data)

    try:
        db.session.add(actor_type)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return jsonify({"success": False, "error": "Actor type already exists"}), 409

    return jsonify({"success": True, "data": actor_type.to_dict()}), 201
