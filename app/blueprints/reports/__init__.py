from .routes import reports_bp
from . import controllers
