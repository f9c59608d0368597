from flask import Blueprint

spray_configurations_bp = Blueprint(
    "spray_configurations", __name__, url_prefix="/api/spray-configurations"
)
