from .routes import healthcheck_bp
from . import controllers
