from .routes import profile_bp
from . import controllers
