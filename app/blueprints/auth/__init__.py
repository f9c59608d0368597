from .routes import auth_bp
from . import controllers
