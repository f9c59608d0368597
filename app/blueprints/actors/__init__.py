from .routes import actors_bp
from . import controllers
