from app import db
from app.blueprints.auth.models import User
from app.blueprints.locations.models import Community
from app.blueprints.spray_configurations.models import SprayConfiguration
from app.utils.utils import safe_isoformat

SPRAY_TYPES = ("PRINCIPAL", "SECUNDARIA")
SPRAY_STATUSES = ("PLANNED", "IN_PROGRESS", "COMPLETED", "CANCELLED")
WALLS_TYPES = ("MATOPE", "COLMO", "CIMENTO")
ROOFS_TYPES = ("CAPIM_PLASTICO", "ZINCO")
REASONS_NOT_SPRAYED = ("RECUSA", "FECHADA", "OUTRO")


class SprayTotals(db.Model):
    """
    SQLAlchemy data model for SprayTotals
    One row records the spraying done in a community on a date by a sprayer
    and their brigade chief

    Rows are never hard deleted, `is_deleted` hides them from every query
    """

    __tablename__ = "spray_totals"

    spray_totals_uid = db.Column(db.Integer(), primary_key=True, autoincrement=True)
    sprayer_uid = db.Column(db.Integer(), db.ForeignKey(User.user_uid), nullable=False)
    brigade_chief_uid = db.Column(
        db.Integer(), db.ForeignKey(User.user_uid), nullable=False
    )
    community_uid = db.Column(
        db.Integer(), db.ForeignKey(Community.community_uid), nullable=False
    )
    spray_configuration_uid = db.Column(
        db.Integer(),
        db.ForeignKey(SprayConfiguration.spray_configuration_uid),
        nullable=True,
    )
    spray_type = db.Column(db.String(), nullable=False, default="PRINCIPAL")
    spray_date = db.Column(db.Date(), nullable=False)
    spray_year = db.Column(db.Integer(), nullable=False)
    spray_round = db.Column(db.Integer(), nullable=False, default=1)
    spray_status = db.Column(db.String(), nullable=False, default="PLANNED")
    insecticide_used = db.Column(db.String(100), nullable=False, default="")
    structures_found = db.Column(db.Integer(), nullable=False, default=0)
    structures_sprayed = db.Column(db.Integer(), nullable=False, default=0)
    structures_not_sprayed = db.Column(db.Integer(), nullable=False, default=0)
    compartments_sprayed = db.Column(db.Integer(), nullable=False, default=0)
    walls_type = db.Column(db.String(), nullable=False, default="MATOPE")
    roofs_type = db.Column(db.String(), nullable=False, default="ZINCO")
    number_of_persons = db.Column(db.Integer(), nullable=False, default=0)
    children_under_5 = db.Column(db.Integer(), nullable=False, default=0)
    pregnant_women = db.Column(db.Integer(), nullable=False, default=0)
    reason_not_sprayed = db.Column(db.String(), nullable=True)
    is_deleted = db.Column(db.Boolean(), nullable=False, default=False)
    deleted_at = db.Column(db.DateTime(), nullable=True)
    deleted_by = db.Column(db.Integer(), db.ForeignKey(User.user_uid), nullable=True)
    created_by = db.Column(db.Integer(), db.ForeignKey(User.user_uid), nullable=False)
    updated_by = db.Column(db.Integer(), db.ForeignKey(User.user_uid), nullable=True)
    created_at = db.Column(db.DateTime(), server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime(), server_default=db.func.now(), onupdate=db.func.now()
    )

    sprayer = db.relationship(User, foreign_keys=[sprayer_uid], lazy="joined")
    brigade_chief = db.relationship(
        User, foreign_keys=[brigade_chief_uid], lazy="joined"
    )
    community = db.relationship(Community, lazy="joined")
    spray_configuration = db.relationship(SprayConfiguration, lazy="joined")
    created_by_user = db.relationship(User, foreign_keys=[created_by])
    updated_by_user = db.relationship(User, foreign_keys=[updated_by])

    __table_args__ = (
        db.CheckConstraint(
            "spray_type IN ('PRINCIPAL', 'SECUNDARIA')", name="spray_type"
        ),
        db.CheckConstraint(
            "spray_status IN ('PLANNED', 'IN_PROGRESS', 'COMPLETED', 'CANCELLED')",
            name="spray_status",
        ),
        db.CheckConstraint(
            "walls_type IN ('MATOPE', 'COLMO', 'CIMENTO')", name="walls_type"
        ),
        db.CheckConstraint(
            "roofs_type IN ('CAPIM_PLASTICO', 'ZINCO')", name="roofs_type"
        ),
        db.CheckConstraint(
            "reason_not_sprayed IS NULL OR "
            "reason_not_sprayed IN ('RECUSA', 'FECHADA', 'OUTRO')",
            name="reason_not_sprayed",
        ),
        db.CheckConstraint("spray_round >= 1", name="spray_round"),
        db.CheckConstraint(
            "structures_found >= 0 AND structures_sprayed >= 0 "
            "AND structures_not_sprayed >= 0 AND compartments_sprayed >= 0 "
            "AND number_of_persons >= 0 AND children_under_5 >= 0 "
            "AND pregnant_women >= 0",
            name="non_negative_counts",
        ),
        db.CheckConstraint(
            "structures_sprayed + structures_not_sprayed = structures_found",
            name="structures_balance",
        ),
        db.Index("ix_spray_totals_spray_year_is_deleted", "spray_year", "is_deleted"),
    )

    def __init__(
        self,
        sprayer_uid,
        brigade_chief_uid,
        community_uid,
        spray_date,
        created_by,
        spray_configuration_uid=None,
        spray_type="PRINCIPAL",
        spray_round=1,
        spray_status="PLANNED",
        insecticide_used="",
        structures_found=0,
        structures_sprayed=0,
        structures_not_sprayed=0,
        compartments_sprayed=0,
        walls_type="MATOPE",
        roofs_type="ZINCO",
        number_of_persons=0,
        children_under_5=0,
        pregnant_women=0,
        reason_not_sprayed=None,
    ):
        self.sprayer_uid = sprayer_uid
        self.brigade_chief_uid = brigade_chief_uid
        self.community_uid = community_uid
        self.spray_date = spray_date
        self.spray_year = spray_date.year
        self.created_by = created_by
        self.spray_configuration_uid = spray_configuration_uid
        self.spray_type = spray_type
        self.spray_round = spray_round
        self.spray_status = spray_status
        self.insecticide_used = insecticide_used
        self.structures_found = structures_found
        self.structures_sprayed = structures_sprayed
        self.structures_not_sprayed = structures_not_sprayed
        self.compartments_sprayed = compartments_sprayed
        self.walls_type = walls_type
        self.roofs_type = roofs_type
        self.number_of_persons = number_of_persons
        self.children_under_5 = children_under_5
        self.pregnant_women = pregnant_women
        self.reason_not_sprayed = reason_not_sprayed
        self.is_deleted = False

    def to_dict(self):
        community = self.community
        locality, district, province = (
            community.get_hierarchy() if community else (None, None, None)
        )

        return {
            "spray_totals_uid": self.spray_totals_uid,
            "sprayer_uid": self.sprayer_uid,
            "sprayer_name": self.sprayer.name if self.sprayer else None,
            "sprayer_number": self.sprayer.number if self.sprayer else None,
            "brigade_chief_uid": self.brigade_chief_uid,
            "brigade_chief_name": (
                self.brigade_chief.name if self.brigade_chief else None
            ),
            "brigade_chief_number": (
                self.brigade_chief.number if self.brigade_chief else None
            ),
            "community_uid": self.community_uid,
            "community_name": community.community_name if community else None,
            "locality_name": locality.locality_name if locality else None,
            "district_name": district.district_name if district else None,
            "province_name": province.province_name if province else None,
            "spray_configuration_uid": self.spray_configuration_uid,
            "spray_configuration_description": (
                self.spray_configuration.description
                if self.spray_configuration
                else None
            ),
            "spray_type": self.spray_type,
            "spray_date": safe_isoformat(self.spray_date),
            "spray_year": self.spray_year,
            "spray_round": self.spray_round,
            "spray_status": self.spray_status,
            "insecticide_used": self.insecticide_used,
            "structures_found": self.structures_found,
            "structures_sprayed": self.structures_sprayed,
            "structures_not_sprayed": self.structures_not_sprayed,
            "compartments_sprayed": self.compartments_sprayed,
            "walls_type": self.walls_type,
            "roofs_type": self.roofs_type,
            "number_of_persons": self.number_of_persons,
            "children_under_5": self.children_under_5,
            "pregnant_women": self.pregnant_women,
            "reason_not_sprayed": self.reason_not_sprayed,
            "created_by": self.created_by,
            "created_by_name": (
                self.created_by_user.name if self.created_by_user else None
            ),
            "updated_by": self.updated_by,
            "updated_by_name": (
                self.updated_by_user.name if self.updated_by_user else None
            ),
            "created_at": safe_isoformat(self.created_at),
            "updated_at": safe_isoformat(self.updated_at),
        }
