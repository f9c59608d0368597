from functools import wraps

from flask import jsonify, request, session
from flask_login import current_user, login_required, logout_user

from app import db
from app.blueprints.auth.models import User


def safe_isoformat(value):
    """
    Assert that a value is not None before converting to isoformat()
    """

    if value is not None:
        return value.isoformat()
    else:
        return ""


def safe_ratio(numerator, denominator):
    """
    Return numerator / denominator as a percentage, or 0 when the
    denominator is 0
    """

    if denominator:
        return numerator / denominator * 100
    else:
        return 0


def logged_in_active_user_required(f):
    """
    Login required middleware
    Checks additional active user logic. Otherwise pass flow to built-in login_required (Flask-Login) decorator
    """

    @wraps(f)
    def decorated_function(*args, **kwargs):
        if "_user_id" in session:
            user_uid = session.get("_user_id")

            if user_uid is not None:
                user = (
                    db.session.query(User)
                    .filter(User.user_uid == user_uid)
                    .one_or_none()
                )
                if user is None or user.deleted_at is not None:
                    logout_user()
                    return jsonify(success=False, error="UNAUTHORIZED"), 401
                if user.is_active() is False:
                    return jsonify(success=False, error="INACTIVE_USER"), 403

        return login_required(f)(*args, **kwargs)

    return decorated_function


def roles_required(*role_names):
    """
    Function to check if the current user's role is one of the allowed roles
    """

    def decorator(fn):
        @wraps(fn)
        def decorated_function(*args, **kwargs):
            if current_user.role not in role_names:
                error_message = (
                    f"User does not have the required role: {', '.join(role_names)}"
                )
                response = {"success": False, "error": error_message}
                return jsonify(response), 403

            return fn(*args, **kwargs)

        return decorated_function

    return decorator


def validate_query_params(validator):
    """
    Decorator to validate query params
    """

    def decorator(fn):
        @wraps(fn)
        def decorated_function(*args, **kwargs):
            query_param_validator = validator.from_json(request.args)

            if not query_param_validator.validate():
                return (
                    jsonify(
                        {
                            "success": False,
                            "data": None,
                            "error": query_param_validator.errors,
                        }
                    ),
                    400,
                )

            kwargs["validated_query_params"] = query_param_validator

            return fn(*args, **kwargs)

        return decorated_function

    return decorator


def validate_payload(validator):
    """
    Decorator to validate the JSON payload
    """

    def decorator(fn):
        @wraps(fn)
        def decorated_function(*args, **kwargs):
            payload_validator = validator.from_json(request.get_json())

            if not payload_validator.validate():
                return jsonify(success=False, error=payload_validator.errors), 400

            kwargs["validated_payload"] = payload_validator

            return fn(*args, **kwargs)

        return decorated_function

    return decorator


def get_payload_fields(validated_payload, field_names):
    """
    Return a dict of the validated values for the fields that were
    actually sent in the request body

    Used by the PUT endpoints, which only change the fields they are given
    """

    payload = request.get_json() or {}

    return {
        field_name: getattr(validated_payload, field_name).data
        for field_name in field_names
        if field_name in payload
    }
