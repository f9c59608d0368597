from datetime import date
from io import BytesIO

import pytest
from openpyxl import load_workbook
from utils import add_deleted_spray_total, add_spray_total


@pytest.mark.reports
class TestReports:
    @pytest.fixture
    def spray_totals(self, app, seed_data):
        """
        Two records in the seeded community and one outside the report year
        """

        add_spray_total(
            app,
            seed_data,
            spray_date=date(seed_data["year"], 3, 10),
            spray_status="COMPLETED",
            structures_found=100,
            structures_sprayed=80,
            structures_not_sprayed=20,
        )
        add_spray_total(
            app,
            seed_data,
            spray_date=date(seed_data["year"], 4, 2),
            spray_status="IN_PROGRESS",
            spray_type="SECUNDARIA",
            structures_found=50,
            structures_sprayed=50,
            structures_not_sprayed=0,
            number_of_persons=100,
            children_under_5=10,
            pregnant_women=2,
        )
        add_spray_total(
            app,
            seed_data,
            spray_date=date(seed_data["year"] - 1, 3, 10),
        )

    def test_summary_report(self, client, login_supervisor, spray_totals, seed_data):
        response = client.get(
            "/api/reports/summary", query_string={"year": seed_data["year"]}
        )
        assert response.status_code == 200

        report = response.json["data"]
        overview = report["overview"]

        assert overview["total_records"] == 2
        assert overview["total_structures_found"] == 150
        assert overview["total_structures_sprayed"] == 130
        assert overview["total_structures_not_sprayed"] == 20
        assert overview["total_population"] == 500
        assert overview["total_children_under_5"] == 70
        assert overview["total_pregnant_women"] == 14
        assert overview["coverage_percentage"] == pytest.approx(130 / 150 * 100)
        assert overview["total_target"] == 1000
        assert overview["target_progress"] == pytest.approx(13)

        assert report["distributions"]["status"] == {"COMPLETED": 1, "IN_PROGRESS": 1}
        assert report["distributions"]["type"] == {"PRINCIPAL": 1, "SECUNDARIA": 1}
        assert report["distributions"]["province"] == {
            "Gaza": {
                "record_count": 2,
                "structures_found": 150,
                "structures_sprayed": 130,
                "population": 500,
            }
        }
        assert sorted(report["distributions"]["monthly"].keys()) == [
            f"{seed_data['year']}-03",
            f"{seed_data['year']}-04",
        ]
        assert report["team_performance"]["Joao Machava"]["record_count"] == 2
        assert report["team_performance"]["Joao Machava"][
            "avg_structures_per_day"
        ] == pytest.approx(65)
        assert report["filters"]["year"] == seed_data["year"]

    def test_summary_report_filters(
        self, client, login_supervisor, spray_totals, seed_data
    ):
        """
        The value all means no filter, a date range needs both ends
        """

        response = client.get(
            "/api/reports/summary",
            query_string={
                "year": seed_data["year"],
                "spray_status": "COMPLETED",
                "spray_type": "all",
            },
        )
        assert response.status_code == 200
        assert response.json["data"]["overview"]["total_records"] == 1
        assert response.json["data"]["filters"]["spray_type"] is None

        response = client.get(
            "/api/reports/summary",
            query_string={
                "year": seed_data["year"],
                "start_date": f"{seed_data['year']}-04-01",
                "end_date": f"{seed_data['year']}-04-30",
            },
        )
        assert response.json["data"]["overview"]["total_records"] == 1

        response = client.get(
            "/api/reports/summary",
            query_string={
                "year": seed_data["year"],
                "start_date": f"{seed_data['year']}-04-01",
            },
        )
        assert response.json["data"]["overview"]["total_records"] == 2

    def test_summary_report_location_filter(
        self, client, login_supervisor, spray_totals, seed_data
    ):
        response = client.get(
            "/api/reports/summary",
            query_string={
                "year": seed_data["year"],
                "province_uid": seed_data["province_uid"],
            },
        )
        assert response.json["data"]["overview"]["total_records"] == 2

        response = client.get(
            "/api/reports/summary",
            query_string={"year": seed_data["year"], "province_uid": 999},
        )
        assert response.json["data"]["overview"]["total_records"] == 0
        assert response.json["data"]["overview"]["total_target"] == 0

    def test_summary_report_empty_year(self, client, login_supervisor):
        """
        No records and no target give a coverage and target progress of 0
        """

        response = client.get("/api/reports/summary", query_string={"year": 2030})
        assert response.status_code == 200

        overview = response.json["data"]["overview"]
        assert overview["total_records"] == 0
        assert overview["coverage_percentage"] == 0
        assert overview["target_progress"] == 0
        assert response.json["data"]["team_performance"] == {}

    def test_summary_report_invalid_status(self, client, login_supervisor):
        response = client.get(
            "/api/reports/summary", query_string={"spray_status": "DONE"}
        )
        assert response.status_code == 400

    def test_summary_report_logged_out(self, client):
        response = client.get("/api/reports/summary")
        assert response.status_code == 401

    def test_detailed_report(self, client, login_sprayer, spray_totals, seed_data):
        """
        Records come newest first, average coverage is the mean of the rows
        """

        response = client.get(
            "/api/reports/detailed", query_string={"year": seed_data["year"]}
        )
        assert response.status_code == 200

        report = response.json["data"]
        assert report["summary"]["total_records"] == 2
        assert report["summary"]["total_structures_found"] == 150
        assert report["summary"]["total_structures_sprayed"] == 130
        assert report["summary"]["total_population"] == 500
        assert report["summary"]["average_coverage"] == pytest.approx(90)

        assert [record["spray_date"] for record in report["records"]] == [
            f"{seed_data['year']}-04-02",
            f"{seed_data['year']}-03-10",
        ]

        record = report["records"][1]
        assert record["province"] == "Gaza"
        assert record["district"] == "Chokwe"
        assert record["locality"] == "Lionde"
        assert record["community"] == "Bairro 1"
        assert record["sprayer_number"] == "SP-001"
        assert record["brigade_chief_name"] == "Maria Cossa"
        assert record["spray_target"] == 1000
        assert record["configuration_description"] == "Chokwe 2024 campaign"
        assert record["reason_not_sprayed"] == ""
        assert record["coverage_percentage"] == pytest.approx(80)
        assert record["created_by"] == "Admin User"
        assert record["updated_by"] == ""

    def test_detailed_report_zero_found(self, app, client, login_sprayer, seed_data):
        add_spray_total(
            app,
            seed_data,
            structures_found=0,
            structures_sprayed=0,
            structures_not_sprayed=0,
        )

        response = client.get(
            "/api/reports/detailed", query_string={"year": seed_data["year"]}
        )

        assert response.json["data"]["records"][0]["coverage_percentage"] == 0
        assert response.json["data"]["summary"]["average_coverage"] == 0

    def test_export_summary_report(
        self, client, login_supervisor, csrf_token, spray_totals, seed_data
    ):
        response = client.post(
            "/api/reports/export",
            json={"report_type": "summary", "filters": {"year": seed_data["year"]}},
            headers={"X-CSRF-Token": csrf_token},
        )
        assert response.status_code == 200
        assert response.mimetype == (
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )
        assert (
            f"relatorio-resumo-{seed_data['year']}.xlsx"
            in response.headers["Content-Disposition"]
        )

        workbook = load_workbook(BytesIO(response.data))
        assert workbook.sheetnames == ["Resumo"]

        worksheet = workbook["Resumo"]
        assert worksheet["A1"].value == "RELATÓRIO RESUMO DE PULVERIZAÇÃO"

        rows = {
            row[0]: row[1]
            for row in worksheet.iter_rows(values_only=True)
            if row and row[0]
        }
        assert rows["Total de Registros"] == 2
        assert rows["Estruturas Pulverizadas"] == 130
        assert rows["Completo"] == 1
        assert rows["Secundária"] == 1

    def test_export_detailed_report(
        self, client, login_supervisor, csrf_token, spray_totals, seed_data
    ):
        response = client.post(
            "/api/reports/export",
            json={"report_type": "detailed", "filters": {"year": seed_data["year"]}},
            headers={"X-CSRF-Token": csrf_token},
        )
        assert response.status_code == 200
        assert (
            f"relatorio-detalhado-{seed_data['year']}.xlsx"
            in response.headers["Content-Disposition"]
        )

        workbook = load_workbook(BytesIO(response.data))
        assert workbook.sheetnames == ["Registros Detalhados", "Resumo"]

        worksheet = workbook["Registros Detalhados"]
        headers = [cell.value for cell in worksheet[1]]
        assert headers[0] == "ID"
        assert headers[1] == "Data de Pulverização"
        assert len(headers) == 32
        assert worksheet.max_row == 3

        # Newest record first, dates rendered as dd/mm/yyyy
        assert worksheet["B2"].value == f"02/04/{seed_data['year']}"
        assert worksheet["E2"].value == "Secundária"
        assert worksheet["F2"].value == "Em Progresso"

    def test_export_unknown_report_type(self, client, login_supervisor, csrf_token):
        response = client.post(
            "/api/reports/export",
            json={"report_type": "monthly"},
            headers={"X-CSRF-Token": csrf_token},
        )
        assert response.status_code == 400

    def test_reports_exclude_deleted_records(
        self, app, client, login_supervisor, spray_totals, seed_data
    ):
        """
        Soft deleted records are left out of both reports
        """

        add_deleted_spray_total(
            app,
            seed_data,
            spray_date=date(seed_data["year"], 3, 20),
            structures_found=500,
            structures_sprayed=500,
            structures_not_sprayed=0,
        )

        response = client.get(
            "/api/reports/summary", query_string={"year": seed_data["year"]}
        )
        overview = response.json["data"]["overview"]
        assert overview["total_records"] == 2
        assert overview["total_structures_found"] == 150

        response = client.get(
            "/api/reports/detailed", query_string={"year": seed_data["year"]}
        )
        assert response.json["data"]["summary"]["total_records"] == 2
        assert f"{seed_data['year']}-03-20" not in [
            record["spray_date"] for record in response.json["data"]["records"]
        ]
