import math
from datetime import date, datetime, timedelta

from sqlalchemy import func

from app import db
from app.blueprints.locations.models import Community
from app.blueprints.reports.utils import (
    ReportFilters,
    SprayTotalsAggregate,
    count_by,
    get_active_configurations,
    get_total_target,
)
from app.blueprints.spray_totals.models import SprayTotals
from app.blueprints.spray_totals.queries import (
    build_spray_totals_query,
    filter_by_location,
)
from app.utils.utils import safe_isoformat, safe_ratio

PROGRESS_STATUSES = ("COMPLETED", "IN_PROGRESS")
RECENT_ACTIVITY_DAYS = 30
RECENT_ACTIVITY_LIMIT = 10


def build_overview(year):
    """
    Headline numbers for the dashboard
    """

    spray_totals = (
        ReportFilters(year=year)
        .apply(build_spray_totals_query())
        .order_by(SprayTotals.spray_date.asc())
        .all()
    )

    overall = SprayTotalsAggregate()
    province_uids = set()
    district_uids = set()
    community_uids = set()
    sprayers_this_month = set()
    records_with_sprayed_structures = 0

    today = date.today()

    for spray_total in spray_totals:
        overall.add(spray_total)

        community_uids.add(spray_total.community_uid)
        if spray_total.community is not None:
            _, district, province = spray_total.community.get_hierarchy()
            if district is not None:
                district_uids.add(district.district_uid)
            if province is not None:
                province_uids.add(province.province_uid)

        if (
            spray_total.spray_date.year == today.year
            and spray_total.spray_date.month == today.month
        ):
            sprayers_this_month.add(spray_total.sprayer_uid)

        if spray_total.structures_sprayed > 0:
            records_with_sprayed_structures += 1

    total_spray_target = get_total_target(year)

    recent_activity = (
        build_spray_totals_query()
        .filter(
            SprayTotals.spray_year == year,
            SprayTotals.spray_date
            >= today - timedelta(days=RECENT_ACTIVITY_DAYS),
        )
        .order_by(SprayTotals.spray_date.desc())
        .limit(RECENT_ACTIVITY_LIMIT)
        .all()
    )

    return {
        "overview": {
            "total_structures_found": overall.structures_found,
            "total_structures_sprayed": overall.structures_sprayed,
            "total_structures_not_sprayed": overall.structures_not_sprayed,
            "total_spray_target": total_spray_target,
            "coverage_percentage": overall.coverage_rate,
            "target_progress": safe_ratio(
                overall.structures_sprayed, total_spray_target
            ),
            "total_population": overall.number_of_persons,
            "total_children_under_5": overall.children_under_5,
            "total_pregnant_women": overall.pregnant_women,
            "average_structures_per_day": (
                overall.structures_sprayed / records_with_sprayed_structures
                if records_with_sprayed_structures
                else 0
            ),
        },
        "geography": {
            "unique_provinces": len(province_uids),
            "unique_districts": len(district_uids),
            "unique_communities": len(community_uids),
        },
        "teams": {
            "active_sprayers_this_month": len(sprayers_this_month),
            "total_records": overall.record_count,
            "completed_records": len(
                [
                    spray_total
                    for spray_total in spray_totals
                    if spray_total.spray_status == "COMPLETED"
                ]
            ),
        },
        "statistics": {
            "status_distribution": count_by(spray_totals, "spray_status"),
            "type_distribution": count_by(spray_totals, "spray_type"),
        },
        "recent_activity": [
            {
                "spray_totals_uid": spray_total.spray_totals_uid,
                "spray_date": safe_isoformat(spray_total.spray_date),
                "structures_sprayed": spray_total.structures_sprayed,
                "structures_found": spray_total.structures_found,
                "spray_status": spray_total.spray_status,
            }
            for spray_total in recent_activity
        ],
        "year": year,
        "last_updated": datetime.now().isoformat(),
    }


def build_geographical_breakdown(year):
    """
    Province > district > community tree of the year's spray records

    Records are summed per community in the database, the district and
    province nodes add up their children and only then get a coverage rate
    """

    community_sums = (
        db.session.query(
            SprayTotals.community_uid,
            func.count(SprayTotals.spray_totals_uid),
            func.coalesce(func.sum(SprayTotals.structures_found), 0),
            func.coalesce(func.sum(SprayTotals.structures_sprayed), 0),
            func.coalesce(func.sum(SprayTotals.number_of_persons), 0),
        )
        .filter(
            SprayTotals.spray_year == year,
            SprayTotals.is_deleted.is_(False),
        )
        .group_by(SprayTotals.community_uid)
        .all()
    )

    communities = {
        community.community_uid: community
        for community in Community.query.filter(
            Community.community_uid.in_(
                [community_uid for community_uid, *_ in community_sums]
            )
        ).all()
    }

    overall = SprayTotalsAggregate()
    provinces = {}

    for (
        community_uid,
        record_count,
        structures_found,
        structures_sprayed,
        number_of_persons,
    ) in community_sums:
        community = communities.get(community_uid)
        if community is None:
            continue

        _, district, province = community.get_hierarchy()
        if district is None or province is None:
            continue

        province_node = provinces.setdefault(
            province.province_uid,
            {
                "province_uid": province.province_uid,
                "province_name": province.province_name,
                "districts": {},
                "totals": SprayTotalsAggregate(),
            },
        )
        district_node = province_node["districts"].setdefault(
            district.district_uid,
            {
                "district_uid": district.district_uid,
                "district_name": district.district_name,
                "communities": [],
                "totals": SprayTotalsAggregate(),
            },
        )

        community_totals = SprayTotalsAggregate()
        for aggregate in (
            community_totals,
            district_node["totals"],
            province_node["totals"],
            overall,
        ):
            aggregate.add_group(
                record_count, structures_found, structures_sprayed, number_of_persons
            )

        district_node["communities"].append(
            {
                "community_uid": community.community_uid,
                "community_name": community.community_name,
                **community_totals.to_node_dict(),
            }
        )

    province_data = []
    for province_node in provinces.values():
        province_data.append(
            {
                "province_uid": province_node["province_uid"],
                "province_name": province_node["province_name"],
                "districts": [
                    {
                        "district_uid": district_node["district_uid"],
                        "district_name": district_node["district_name"],
                        "communities": district_node["communities"],
                        "totals": district_node["totals"].to_node_dict(),
                    }
                    for district_node in province_node["districts"].values()
                ],
                "totals": province_node["totals"].to_node_dict(),
            }
        )

    return {
        "year": year,
        "summary": {
            "total_provinces": len(province_data),
            "total_districts": sum(
                len(province["districts"]) for province in province_data
            ),
            "total_communities": sum(
                len(district["communities"])
                for province in province_data
                for district in province["districts"]
            ),
            "overall_totals": overall.to_node_dict(),
        },
        "provinces": province_data,
        "last_updated": datetime.now().isoformat(),
    }


def build_spray_progress(year, province_uid=None, district_uid=None):
    """
    Daily and cumulative progress of completed and in progress spraying
    against the year's targets
    """

    configurations = get_active_configurations(
        year, province_uid=province_uid, district_uid=district_uid
    )

    total_target = sum(
        configuration.spray_target or 0 for configuration in configurations
    )

    if total_target == 0:
        return {
            "target": 0,
            "total_sprayed": 0,
            "percentage_complete": 0,
            "remaining_to_spray": 0,
            "progress": [],
            "configurations": [],
        }

    daily_query = db.session.query(
        SprayTotals.spray_date,
        func.coalesce(func.sum(SprayTotals.structures_sprayed), 0),
        func.coalesce(func.sum(SprayTotals.structures_found), 0),
    ).filter(
        SprayTotals.spray_year == year,
        SprayTotals.is_deleted.is_(False),
        SprayTotals.spray_status.in_(PROGRESS_STATUSES),
    )
    daily_query = filter_by_location(
        daily_query, province_uid=province_uid, district_uid=district_uid
    )
    daily_sums = (
        daily_query.group_by(SprayTotals.spray_date)
        .order_by(SprayTotals.spray_date.asc())
        .all()
    )

    progress = []
    cumulative_sprayed = 0
    cumulative_found = 0
    for spray_date, daily_sprayed, daily_found in daily_sums:
        cumulative_sprayed += daily_sprayed
        cumulative_found += daily_found
        progress.append(
            {
                "date": safe_isoformat(spray_date),
                "daily_sprayed": daily_sprayed,
                "cumulative_sprayed": cumulative_sprayed,
                "daily_found": daily_found,
                "cumulative_found": cumulative_found,
                "percentage_complete": min(
                    100, safe_ratio(cumulative_sprayed, total_target)
                ),
                "coverage_rate": safe_ratio(cumulative_sprayed, cumulative_found),
            }
        )

    remaining_to_spray = max(0, total_target - cumulative_sprayed)
    active_days = len(progress)
    average_daily_progress = cumulative_sprayed / active_days if active_days else 0

    estimated_completion_date = None
    if average_daily_progress > 0 and remaining_to_spray > 0:
        days_to_complete = math.ceil(remaining_to_spray / average_daily_progress)
        last_date = daily_sums[-1][0] if daily_sums else date.today()
        estimated_completion_date = last_date + timedelta(days=days_to_complete)

    start_dates = [
        configuration.start_date
        for configuration in configurations
        if configuration.start_date
    ]
    end_dates = [
        configuration.end_date for configuration in configurations if configuration.end_date
    ]

    return {
        "target": total_target,
        "total_sprayed": cumulative_sprayed,
        "total_found": cumulative_found,
        "percentage_complete": min(100, safe_ratio(cumulative_sprayed, total_target)),
        "remaining_to_spray": remaining_to_spray,
        "coverage_rate": safe_ratio(cumulative_sprayed, cumulative_found),
        "average_daily_progress": average_daily_progress,
        "active_days": active_days,
        "estimated_completion_date": safe_isoformat(estimated_completion_date)
        or None,
        "start_date": safe_isoformat(min(start_dates)) if start_dates else None,
        "end_date": safe_isoformat(max(end_dates)) if end_dates else None,
        "progress": progress,
        "configurations": [
            configuration.to_dict() for configuration in configurations
        ],
        "last_updated": datetime.now().isoformat(),
    }
