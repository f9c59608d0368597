from app import db
from passlib.hash import pbkdf2_sha256

ROLES = ("ADMIN", "SUPERVISOR", "SPRAYER")


class User(db.Model):
    """
    SQLAlchemy data model for User

    Field actors (sprayers, brigade chiefs) are users with an actor type.
    They may or may not have a password to log in with.
    """

    __tablename__ = "users"

    user_uid = db.Column(db.Integer(), primary_key=True, autoincrement=True)
    email = db.Column(db.String(), unique=True, nullable=False)
    password_secure = db.Column(db.String(), nullable=True)
    name = db.Column(db.String(100), nullable=False)
    role = db.Column(db.String(), nullable=False, default="SPRAYER")
    number = db.Column(db.String(20), unique=True, nullable=True)
    description = db.Column(db.String(500), nullable=True)
    actor_type_uid = db.Column(
        db.Integer(),
        db.ForeignKey("actor_types.actor_type_uid"),
        nullable=True,
    )
    active = db.Column(db.Boolean(), nullable=False, default=True)
    created_at = db.Column(db.DateTime(), server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime(), server_default=db.func.now(), onupdate=db.func.now()
    )
    deleted_at = db.Column(db.DateTime(), nullable=True)

    actor_type = db.relationship("ActorType", lazy="joined")

    __table_args__ = (
        db.CheckConstraint(
            "role IN ('ADMIN', 'SUPERVISOR', 'SPRAYER')",
            name="role",
        ),
    )

    def __init__(
        self,
        email,
        name,
        role="SPRAYER",
        password=None,
        number=None,
        description=None,
        actor_type_uid=None,
        active=True,
    ):
        self.email = email
        self.name = name
        self.role = role
        if password is not None:
            self.password_secure = pbkdf2_sha256.hash(password)
        else:
            self.password_secure = None
        self.number = number
        self.description = description
        self.actor_type_uid = actor_type_uid
        self.active = active

    def to_dict(self):
        return {
            "user_uid": self.user_uid,
            "email": self.email,
            "name": self.name,
            "role": self.role,
            "number": self.number,
            "description": self.description,
            "actor_type_uid": self.actor_type_uid,
            "actor_type_name": (
                self.actor_type.actor_type_name if self.actor_type else None
            ),
            "active": self.active,
        }

    def verify_password(self, password):
        if self.password_secure is None:
            return False

        return pbkdf2_sha256.verify(password, self.password_secure)

    def change_password(self, new_password):
        self.password_secure = pbkdf2_sha256.hash(new_password)
        db.session.add(self)
        db.session.commit()

    ##############################################################################
    # NECESSARY CALLABLES FOR FLASK-LOGIN
    ##############################################################################

    def is_active(self):
        """
        Return True if the user is active
        """
        return self.active

    def get_id(self):
        """
        Return the uid to satisfy Flask-Login's requirements.
        """
        return str(self.user_uid)

    def is_authenticated(self):
        """
        Return True if the user is authenticated.
        """
        return True

    def is_anonymous(self):
        """
        False, as anonymous users aren't supported.
        """
        return False
