from app import db


class Province(db.Model):
    """
    SQLAlchemy data model for Province
    Top level of the geographic hierarchy
    """

    __tablename__ = "provinces"

    province_uid = db.Column(db.Integer(), primary_key=True, autoincrement=True)
    province_name = db.Column(db.String(100), unique=True, nullable=False)
    province_code = db.Column(db.String(10), unique=True, nullable=True)
    created_at = db.Column(db.DateTime(), server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime(), server_default=db.func.now(), onupdate=db.func.now()
    )

    def __init__(self, province_name, province_code=None):
        self.province_name = province_name
        self.province_code = province_code

    def to_dict(self):
        return {
            "province_uid": self.province_uid,
            "province_name": self.province_name,
            "province_code": self.province_code,
        }


class District(db.Model):
    """
    SQLAlchemy data model for District
    """

    __tablename__ = "districts"

    district_uid = db.Column(db.Integer(), primary_key=True, autoincrement=True)
    district_name = db.Column(db.String(100), nullable=False)
    district_code = db.Column(db.String(10), nullable=True)
    province_uid = db.Column(
        db.Integer(),
        db.ForeignKey(Province.province_uid, ondelete="CASCADE"),
        nullable=False,
    )
    created_at = db.Column(db.DateTime(), server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime(), server_default=db.func.now(), onupdate=db.func.now()
    )

    province = db.relationship(Province, lazy="joined")

    __table_args__ = (
        db.UniqueConstraint(
            "province_uid",
            "district_name",
            name="_province_uid_district_name_uc",
        ),
    )

    def __init__(self, district_name, province_uid, district_code=None):
        self.district_name = district_name
        self.province_uid = province_uid
        self.district_code = district_code

    def to_dict(self):
        return {
            "district_uid": self.district_uid,
            "district_name": self.district_name,
            "district_code": self.district_code,
            "province_uid": self.province_uid,
            "province_name": self.province.province_name if self.province else None,
        }


class Locality(db.Model):
    """
    SQLAlchemy data model for Locality
    """

    __tablename__ = "localities"

    locality_uid = db.Column(db.Integer(), primary_key=True, autoincrement=True)
    locality_name = db.Column(db.String(100), nullable=False)
    district_uid = db.Column(
        db.Integer(),
        db.ForeignKey(District.district_uid, ondelete="CASCADE"),
        nullable=False,
    )
    created_at = db.Column(db.DateTime(), server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime(), server_default=db.func.now(), onupdate=db.func.now()
    )

    district = db.relationship(District, lazy="joined")

    __table_args__ = (
        db.UniqueConstraint(
            "district_uid",
            "locality_name",
            name="_district_uid_locality_name_uc",
        ),
    )

    def __init__(self, locality_name, district_uid):
        self.locality_name = locality_name
        self.district_uid = district_uid

    def to_dict(self):
        district = self.district
        province = district.province if district else None

        return {
            "locality_uid": self.locality_uid,
            "locality_name": self.locality_name,
            "district_uid": self.district_uid,
            "district_name": district.district_name if district else None,
            "province_uid": province.province_uid if province else None,
            "province_name": province.province_name if province else None,
        }


class Community(db.Model):
    """
    SQLAlchemy data model for Community
    Lowest level of the geographic hierarchy, spray records attach here
    """

    __tablename__ = "communities"

    community_uid = db.Column(db.Integer(), primary_key=True, autoincrement=True)
    community_name = db.Column(db.String(100), nullable=False)
    locality_uid = db.Column(
        db.Integer(),
        db.ForeignKey(Locality.locality_uid, ondelete="CASCADE"),
        nullable=False,
    )
    created_at = db.Column(db.DateTime(), server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime(), server_default=db.func.now(), onupdate=db.func.now()
    )

    locality = db.relationship(Locality, lazy="joined")

    __table_args__ = (
        db.UniqueConstraint(
            "locality_uid",
            "community_name",
            name="_locality_uid_community_name_uc",
        ),
    )

    def __init__(self, community_name, locality_uid):
        self.community_name = community_name
        self.locality_uid = locality_uid

    def get_hierarchy(self):
        """
        Return the (locality, district, province) chain above this community
        """

        locality = self.locality
        district = locality.district if locality else None
        province = district.province if district else None

        return locality, district, province

    def to_dict(self):
        locality, district, province = self.get_hierarchy()

        return {
            "community_uid": self.community_uid,
            "community_name": self.community_name,
            "locality_uid": self.locality_uid,
            "locality_name": locality.locality_name if locality else None,
            "district_uid": district.district_uid if district else None,
            "district_name": district.district_name if district else None,
            "province_uid": province.province_uid if province else None,
            "province_name": province.province_name if province else None,
        }
