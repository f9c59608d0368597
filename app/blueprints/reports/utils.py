from collections import defaultdict
from datetime import date, datetime

from app.blueprints.spray_configurations.models import SprayConfiguration
from app.blueprints.spray_totals.models import SprayTotals
from app.blueprints.spray_totals.queries import (
    build_spray_totals_query,
    filter_by_location,
)
from app.utils.utils import safe_isoformat, safe_ratio

UNSPECIFIED_LABEL = "Não especificado"


class ReportFilters:
    """
    Filters shared by the report and dashboard endpoints

    A date range is only applied when both ends are given and the value
    `all` for status or type means no filter
    """

    def __init__(
        self,
        year=None,
        start_date=None,
        end_date=None,
        province_uid=None,
        district_uid=None,
        spray_status=None,
        spray_type=None,
    ):
        self.year = year if year is not None else date.today().year
        self.start_date = start_date
        self.end_date = end_date
        self.province_uid = province_uid
        self.district_uid = district_uid
        self.spray_status = spray_status if spray_status != "all" else None
        self.spray_type = spray_type if spray_type != "all" else None

    @classmethod
    def from_form(cls, form):
        return cls(
            year=form.year.data,
            start_date=form.start_date.data,
            end_date=form.end_date.data,
            province_uid=form.province_uid.data,
            district_uid=form.district_uid.data,
            spray_status=form.spray_status.data or None,
            spray_type=form.spray_type.data or None,
        )

    def apply(self, spray_totals_query):
        spray_totals_query = spray_totals_query.filter(
            SprayTotals.spray_year == self.year
        )

        if self.start_date and self.end_date:
            spray_totals_query = spray_totals_query.filter(
                SprayTotals.spray_date >= self.start_date,
                SprayTotals.spray_date <= self.end_date,
            )

        if self.spray_status:
            spray_totals_query = spray_totals_query.filter(
                SprayTotals.spray_status == self.spray_status
            )

        if self.spray_type:
            spray_totals_query = spray_totals_query.filter(
                SprayTotals.spray_type == self.spray_type
            )

        return filter_by_location(
            spray_totals_query,
            province_uid=self.province_uid,
            district_uid=self.district_uid,
        )

    def to_dict(self):
        return {
            "year": self.year,
            "start_date": safe_isoformat(self.start_date) or None,
            "end_date": safe_isoformat(self.end_date) or None,
            "province_uid": self.province_uid,
            "district_uid": self.district_uid,
            "spray_status": self.spray_status,
            "spray_type": self.spray_type,
        }


class SprayTotalsAggregate:
    """
    Running sums over a group of spray records

    The coverage rate is worked out from the sums, never averaged from
    the rows
    """

    def __init__(self):
        self.record_count = 0
        self.structures_found = 0
        self.structures_sprayed = 0
        self.structures_not_sprayed = 0
        self.compartments_sprayed = 0
        self.number_of_persons = 0
        self.children_under_5 = 0
        self.pregnant_women = 0

    def add(self, spray_total):
        self.record_count += 1
        self.structures_found += spray_total.structures_found
        self.structures_sprayed += spray_total.structures_sprayed
        self.structures_not_sprayed += spray_total.structures_not_sprayed
        self.compartments_sprayed += spray_total.compartments_sprayed
        self.number_of_persons += spray_total.number_of_persons
        self.children_under_5 += spray_total.children_under_5
        self.pregnant_women += spray_total.pregnant_women

    def add_group(
        self, record_count, structures_found, structures_sprayed, number_of_persons
    ):
        """
        Add the sums of an already grouped set of records
        """

        self.record_count += record_count
        self.structures_found += structures_found
        self.structures_sprayed += structures_sprayed
        self.number_of_persons += number_of_persons

    @property
    def coverage_rate(self):
        return safe_ratio(self.structures_sprayed, self.structures_found)

    def to_distribution_dict(self):
        return {
            "record_count": self.record_count,
            "structures_found": self.structures_found,
            "structures_sprayed": self.structures_sprayed,
            "population": self.number_of_persons,
        }

    def to_node_dict(self):
        return {
            "structures_sprayed": self.structures_sprayed,
            "structures_found": self.structures_found,
            "number_of_persons": self.number_of_persons,
            "record_count": self.record_count,
            "coverage_rate": self.coverage_rate,
        }


def get_active_configurations(year, province_uid=None, district_uid=None):
    """
    Active configurations for a year, optionally scoped to a province and
    district
    """

    configuration_query = SprayConfiguration.query.filter(
        SprayConfiguration.year == year,
        SprayConfiguration.active.is_(True),
    )

    if province_uid is not None:
        configuration_query = configuration_query.filter(
            SprayConfiguration.province_uid == province_uid
        )
    if district_uid is not None:
        configuration_query = configuration_query.filter(
            SprayConfiguration.district_uid == district_uid
        )

    return configuration_query.all()


def get_total_target(year, province_uid=None, district_uid=None):
    return sum(
        configuration.spray_target or 0
        for configuration in get_active_configurations(
            year, province_uid=province_uid, district_uid=district_uid
        )
    )


def count_by(spray_totals, attribute):
    counts = defaultdict(int)
    for spray_total in spray_totals:
        counts[getattr(spray_total, attribute)] += 1

    return dict(counts)


def get_province_name(spray_total):
    if spray_total.community is None:
        return None

    _, _, province = spray_total.community.get_hierarchy()

    return province.province_name if province else None


def build_summary_report(report_filters):
    """
    Totals, distributions and per sprayer performance for the filtered
    spray records
    """

    spray_totals = (
        report_filters.apply(build_spray_totals_query())
        .order_by(SprayTotals.spray_date.asc())
        .all()
    )

    overall = SprayTotalsAggregate()
    provinces = defaultdict(SprayTotalsAggregate)
    months = defaultdict(SprayTotalsAggregate)
    sprayers = defaultdict(SprayTotalsAggregate)

    for spray_total in spray_totals:
        overall.add(spray_total)
        provinces[get_province_name(spray_total) or UNSPECIFIED_LABEL].add(spray_total)
        months[spray_total.spray_date.strftime("%Y-%m")].add(spray_total)
        sprayer_name = spray_total.sprayer.name if spray_total.sprayer else None
        sprayers[sprayer_name or UNSPECIFIED_LABEL].add(spray_total)

    total_target = get_total_target(
        report_filters.year,
        province_uid=report_filters.province_uid,
        district_uid=report_filters.district_uid,
    )

    team_performance = {}
    for sprayer_name, aggregate in sprayers.items():
        team_performance[sprayer_name] = {
            "record_count": aggregate.record_count,
            "structures_found": aggregate.structures_found,
            "structures_sprayed": aggregate.structures_sprayed,
            "avg_structures_per_day": (
                aggregate.structures_sprayed / aggregate.record_count
            ),
        }

    return {
        "overview": {
            "total_records": overall.record_count,
            "total_structures_found": overall.structures_found,
            "total_structures_sprayed": overall.structures_sprayed,
            "total_structures_not_sprayed": overall.structures_not_sprayed,
            "total_population": overall.number_of_persons,
            "total_children_under_5": overall.children_under_5,
            "total_pregnant_women": overall.pregnant_women,
            "total_compartments_sprayed": overall.compartments_sprayed,
            "coverage_percentage": overall.coverage_rate,
            "total_target": total_target,
            "target_progress": safe_ratio(overall.structures_sprayed, total_target),
        },
        "distributions": {
            "status": count_by(spray_totals, "spray_status"),
            "type": count_by(spray_totals, "spray_type"),
            "province": {
                province_name: aggregate.to_distribution_dict()
                for province_name, aggregate in provinces.items()
            },
            "monthly": {
                month: aggregate.to_distribution_dict()
                for month, aggregate in months.items()
            },
        },
        "team_performance": team_performance,
        "filters": report_filters.to_dict(),
        "generated_at": datetime.now().isoformat(),
    }


def flatten_spray_total(spray_total):
    """
    One row of the detailed report, missing relations become empty values
    """

    community = spray_total.community
    locality, district, province = (
        community.get_hierarchy() if community else (None, None, None)
    )
    sprayer = spray_total.sprayer
    brigade_chief = spray_total.brigade_chief
    spray_configuration = spray_total.spray_configuration

    return {
        "spray_totals_uid": spray_total.spray_totals_uid,
        "spray_date": safe_isoformat(spray_total.spray_date),
        "spray_year": spray_total.spray_year,
        "spray_round": spray_total.spray_round,
        "spray_type": spray_total.spray_type,
        "spray_status": spray_total.spray_status,
        "insecticide_used": spray_total.insecticide_used,
        "province": province.province_name if province else "",
        "district": district.district_name if district else "",
        "locality": locality.locality_name if locality else "",
        "community": community.community_name if community else "",
        "structures_found": spray_total.structures_found,
        "structures_sprayed": spray_total.structures_sprayed,
        "structures_not_sprayed": spray_total.structures_not_sprayed,
        "compartments_sprayed": spray_total.compartments_sprayed,
        "walls_type": spray_total.walls_type,
        "roofs_type": spray_total.roofs_type,
        "reason_not_sprayed": spray_total.reason_not_sprayed or "",
        "number_of_persons": spray_total.number_of_persons,
        "children_under_5": spray_total.children_under_5,
        "pregnant_women": spray_total.pregnant_women,
        "sprayer_name": sprayer.name if sprayer else "",
        "sprayer_number": (sprayer.number or "") if sprayer else "",
        "brigade_chief_name": brigade_chief.name if brigade_chief else "",
        "brigade_chief_number": (
            (brigade_chief.number or "") if brigade_chief else ""
        ),
        "spray_target": (
            spray_configuration.spray_target or 0 if spray_configuration else 0
        ),
        "configuration_description": (
            spray_configuration.description or "" if spray_configuration else ""
        ),
        "coverage_percentage": safe_ratio(
            spray_total.structures_sprayed, spray_total.structures_found
        ),
        "created_by": (
            spray_total.created_by_user.name if spray_total.created_by_user else ""
        ),
        "updated_by": (
            spray_total.updated_by_user.name if spray_total.updated_by_user else ""
        ),
        "created_at": safe_isoformat(spray_total.created_at),
        "updated_at": safe_isoformat(spray_total.updated_at),
    }


def build_detailed_report(report_filters):
    """
    Every filtered spray record flattened into a row, newest first
    """

    spray_totals = (
        report_filters.apply(build_spray_totals_query())
        .order_by(SprayTotals.spray_date.desc(), SprayTotals.created_at.desc())
        .all()
    )

    records = [flatten_spray_total(spray_total) for spray_total in spray_totals]

    # Mean of the per row coverage, unlike the summary report
    average_coverage = (
        sum(record["coverage_percentage"] for record in records) / len(records)
        if records
        else 0
    )

    return {
        "summary": {
            "total_records": len(records),
            "total_structures_found": sum(
                record["structures_found"] for record in records
            ),
            "total_structures_sprayed": sum(
                record["structures_sprayed"] for record in records
            ),
            "total_population": sum(record["number_of_persons"] for record in records),
            "average_coverage": average_coverage,
        },
        "records": records,
        "filters": report_filters.to_dict(),
        "generated_at": datetime.now().isoformat(),
    }
