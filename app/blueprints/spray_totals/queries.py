from sqlalchemy import select

from app.blueprints.locations.models import Community, District, Locality

from .models import SprayTotals


def build_spray_totals_query():
    """
    Base query for spray totals, soft deleted rows are always left out
    """

    return SprayTotals.query.filter(SprayTotals.is_deleted.is_(False))


def filter_by_location(spray_totals_query, province_uid=None, district_uid=None):
    """
    Restrict a spray totals query to a district, or failing that a province

    The district filter wins when both are given
    """

    if district_uid is None and province_uid is None:
        return spray_totals_query

    community_select = select(Community.community_uid).join(
        Locality, Community.locality_uid == Locality.locality_uid
    )

    if district_uid is not None:
        community_select = community_select.where(
            Locality.district_uid == district_uid
        )
    else:
        community_select = community_select.join(
            District, Locality.district_uid == District.district_uid
        ).where(District.province_uid == province_uid)

    return spray_totals_query.filter(SprayTotals.community_uid.in_(community_select))
