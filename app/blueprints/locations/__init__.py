from .routes import locations_bp
from . import controllers
