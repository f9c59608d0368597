from .routes import spray_configurations_bp
from . import controllers
