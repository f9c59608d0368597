from datetime import timedelta

from flask import current_app, jsonify, make_response
from flask_login import current_user, login_user, logout_user
from flask_wtf.csrf import generate_csrf
from sqlalchemy.exc import IntegrityError

from app import db
from app.utils.utils import (
    logged_in_active_user_required,
    roles_required,
    validate_payload,
)

from .models import User
from .routes import auth_bp
from .validators import ChangePasswordValidator, LoginValidator, RegisterValidator


##############################################################################
# LOGIN / LOGOUT
##############################################################################


@auth_bp.route("/get-csrf", methods=["GET"])
def set_xsrf_cookie():
    """
    Sets CSRF-TOKEN cookie
    """
    response = make_response(jsonify({"message": "success"}), 200)
    response.set_cookie("CSRF-TOKEN", generate_csrf(), samesite="None", secure=True)
    return response


@auth_bp.route("/login", methods=["POST"])
@validate_payload(LoginValidator)
def login(validated_payload):
    """
    Endpoint to login

    Requires JSON body with following keys:
    - email
    - password

    Requires X-CSRF-Token in header, obtained from cookie set by /get-csrf
    """

    email = validated_payload.email.data
    password = validated_payload.password.data

    user = User.query.filter_by(email=email).first()

    if user:
        if not user.is_active() or user.deleted_at is not None:
            return jsonify(success=False, error="INACTIVE_USER"), 403

        if user.verify_password(password):
            login_user(user, remember=True, duration=timedelta(days=7))
            return jsonify(message="Success: logged in"), 200
        else:
            return jsonify(success=False, error="UNAUTHORIZED"), 401
    else:
        return jsonify(success=False, error="UNAUTHORIZED"), 401


@auth_bp.route("/logout", methods=["GET"])
@logged_in_active_user_required
def logout():
    logout_user()
    return jsonify(message="Success: logged out"), 200


##############################################################################
# PASSWORD MANAGEMENT
##############################################################################


@auth_bp.route("/change-password", methods=["POST"])
@logged_in_active_user_required
@validate_payload(ChangePasswordValidator)
def change_password(validated_payload):
    """
    Endpoint to change password, user must be logged in

    Requires JSON body with following keys:
    - cur_password
    - new_password
    - confirm

    Requires X-CSRF-Token in header, obtained from cookie set by /get-csrf
    """

    cur_password = validated_payload.cur_password.data
    new_password = validated_payload.new_password.data

    if current_user.verify_password(cur_password):
        current_user.change_password(new_password)
        return jsonify(message="Success: password changed"), 200
    else:
        return jsonify(success=False, error="Wrong password"), 403


##############################################################################
# REGISTRATION
##############################################################################


@auth_bp.route("/register", methods=["POST"])
@logged_in_active_user_required
@roles_required("ADMIN")
@validate_payload(RegisterValidator)
def register(validated_payload):
    """
    Endpoint for an admin to create a login account

    Requires JSON body with following keys:
    - name
    - email
    - password
    - confirm_password
    - role (optional, defaults to SPRAYER)
    - actor_type_uid (optional)
    - number (optional)
    """

    from app.blueprints.actors.models import ActorType

    email = validated_payload.email.data
    number = validated_payload.number.data or None
    actor_type_uid = validated_payload.actor_type_uid.data

    if User.query.filter_by(email=email).first() is not None:
        return jsonify({"success": False, "error": "Email already in use"}), 409

    if number and User.query.filter_by(number=number).first() is not None:
        return jsonify({"success": False, "error": "Number already in use"}), 409

    if actor_type_uid is not None:
        actor_type = ActorType.query.filter_by(
            actor_type_uid=actor_type_uid, active=True
        ).first()
        if actor_type is None:
            return jsonify({"success": False, "error": "Invalid actor type"}), 400

    user = User(
        email=email,
        name=validated_payload.name.data,
        role=validated_payload.role.data or "SPRAYER",
        password=validated_payload.password.data,
        number=number,
        actor_type_uid=actor_type_uid,
    )

    try:
        db.session.add(user)
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        current_app.logger.warning("Duplicate user registration: %s", e)
        return (
            jsonify({"success": False, "error": "Email or number already in use"}),
            409,
        )

    return (
        jsonify({"message": "Success: user registered", "user": user.to_dict()}),
        201,
    )
