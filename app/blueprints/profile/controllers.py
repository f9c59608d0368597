from flask import jsonify
from flask_login import current_user

from app.utils.utils import logged_in_active_user_required

from .routes import profile_bp


@profile_bp.route("", methods=["GET"])
@logged_in_active_user_required
def get_profile():
    """
    Returns the profile of the logged in user
    """

    return jsonify(current_user.to_dict()), 200
