from app import db
from app.blueprints.auth.models import User
from app.blueprints.locations.models import District, Province
from app.utils.utils import safe_isoformat

NATIONAL_SCOPE_LABEL = "Nacional"


class SprayConfiguration(db.Model):
    """
    SQLAlchemy data model for SprayConfiguration
    This table holds the campaign targets for a year, either nationally or
    scoped to a province and/or district
    """

    __tablename__ = "spray_configurations"

    spray_configuration_uid = db.Column(
        db.Integer(), primary_key=True, autoincrement=True
    )
    year = db.Column(db.Integer(), nullable=False)
    province_uid = db.Column(
        db.Integer(),
        db.ForeignKey(Province.province_uid, ondelete="CASCADE"),
        nullable=True,
    )
    district_uid = db.Column(
        db.Integer(),
        db.ForeignKey(District.district_uid, ondelete="CASCADE"),
        nullable=True,
    )
    spray_target = db.Column(db.Integer(), nullable=False, default=0)
    proposed_spray_days = db.Column(db.Integer(), nullable=False)
    start_date = db.Column(db.Date(), nullable=True)
    end_date = db.Column(db.Date(), nullable=True)
    spray_rounds = db.Column(db.Integer(), nullable=False, default=1)
    days_between_rounds = db.Column(db.Integer(), nullable=False, default=0)
    description = db.Column(db.String(500), nullable=True)
    notes = db.Column(db.String(1000), nullable=True)
    active = db.Column(db.Boolean(), nullable=False, default=True)
    created_by = db.Column(db.Integer(), db.ForeignKey(User.user_uid), nullable=True)
    created_at = db.Column(db.DateTime(), server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime(), server_default=db.func.now(), onupdate=db.func.now()
    )

    province = db.relationship(Province, lazy="joined")
    district = db.relationship(District, lazy="joined")
    created_by_user = db.relationship(User, lazy="joined")

    __table_args__ = (
        db.CheckConstraint("spray_target >= 0", name="spray_target"),
        db.CheckConstraint(
            "proposed_spray_days BETWEEN 1 AND 365", name="proposed_spray_days"
        ),
        db.CheckConstraint("spray_rounds BETWEEN 1 AND 5", name="spray_rounds"),
        db.CheckConstraint("days_between_rounds >= 0", name="days_between_rounds"),
    )

    def __init__(
        self,
        year,
        proposed_spray_days,
        spray_target=0,
        province_uid=None,
        district_uid=None,
        start_date=None,
        end_date=None,
        spray_rounds=1,
        days_between_rounds=0,
        description=None,
        notes=None,
        active=True,
        created_by=None,
    ):
        self.year = year
        self.proposed_spray_days = proposed_spray_days
        self.spray_target = spray_target
        self.province_uid = province_uid
        self.district_uid = district_uid
        self.start_date = start_date
        self.end_date = end_date
        self.spray_rounds = spray_rounds
        self.days_between_rounds = days_between_rounds
        self.description = description
        self.notes = notes
        self.active = active
        self.created_by = created_by

    def to_dict(self):
        return {
            "spray_configuration_uid": self.spray_configuration_uid,
            "year": self.year,
            "province_uid": self.province_uid,
            "province_name": (
                self.province.province_name if self.province else NATIONAL_SCOPE_LABEL
            ),
            "district_uid": self.district_uid,
            "district_name": self.district.district_name if self.district else None,
            "spray_target": self.spray_target,
            "proposed_spray_days": self.proposed_spray_days,
            "start_date": safe_isoformat(self.start_date),
            "end_date": safe_isoformat(self.end_date),
            "spray_rounds": self.spray_rounds,
            "days_between_rounds": self.days_between_rounds,
            "description": self.description,
            "notes": self.notes,
            "active": self.active,
            "created_by": self.created_by,
            "created_by_name": (
                self.created_by_user.name if self.created_by_user else None
            ),
        }
