from .routes import spray_totals_bp
from . import controllers
