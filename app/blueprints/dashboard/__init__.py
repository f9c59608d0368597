from .routes import dashboard_bp
from . import controllers
