from flask import Blueprint

actors_bp = Blueprint("actors", __name__, url_prefix="/api")
