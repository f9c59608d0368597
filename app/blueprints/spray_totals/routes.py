from flask import Blueprint

spray_totals_bp = Blueprint("spray_totals", __name__, url_prefix="/api/spray-totals")
