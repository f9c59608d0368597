from app import db


class ActorType(db.Model):
    """
    SQLAlchemy data model for ActorType
    This table defines the kinds of field actors, e.g. Sprayer, Brigade Chief
    """

    __tablename__ = "actor_types"

    actor_type_uid = db.Column(db.Integer(), primary_key=True, autoincrement=True)
    actor_type_name = db.Column(db.String(50), unique=True, nullable=False)
    active = db.Column(db.Boolean(), nullable=False, default=True)

    def __init__(self, actor_type_name, active=True):
        self.actor_type_name = actor_type_name
        self.active = active

    def to_dict(self):
        return {
            "actor_type_uid": self.actor_type_uid,
            "actor_type_name": self.actor_type_name,
            "active": self.active,
        }
