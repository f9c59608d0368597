from datetime import date, datetime
from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

SPRAY_STATUS_LABELS = {
    "COMPLETED": "Completo",
    "IN_PROGRESS": "Em Progresso",
    "PLANNED": "Planeado",
    "CANCELLED": "Cancelado",
}

SPRAY_TYPE_LABELS = {
    "PRINCIPAL": "Principal",
    "SECUNDARIA": "Secundária",
}

MAX_COLUMN_WIDTH = 50

# Header and record key for each column of the detailed sheet
DETAILED_COLUMNS = [
    ("ID", "spray_totals_uid"),
    ("Data de Pulverização", "spray_date"),
    ("Ano", "spray_year"),
    ("Ronda", "spray_round"),
    ("Tipo", "spray_type"),
    ("Status", "spray_status"),
    ("Inseticida", "insecticide_used"),
    ("Província", "province"),
    ("Distrito", "district"),
    ("Localidade", "locality"),
    ("Comunidade", "community"),
    ("Estruturas Encontradas", "structures_found"),
    ("Estruturas Pulverizadas", "structures_sprayed"),
    ("Estruturas Não Pulverizadas", "structures_not_sprayed"),
    ("Compartimentos Pulverizados", "compartments_sprayed"),
    ("Tipo de Paredes", "walls_type"),
    ("Tipo de Telhados", "roofs_type"),
    ("Motivo Não Pulverizado", "reason_not_sprayed"),
    ("Número de Pessoas", "number_of_persons"),
    ("Crianças <5 anos", "children_under_5"),
    ("Mulheres Grávidas", "pregnant_women"),
    ("Pulverizador", "sprayer_name"),
    ("Número Pulverizador", "sprayer_number"),
    ("Chefe de Brigada", "brigade_chief_name"),
    ("Número Chefe", "brigade_chief_number"),
    ("Meta", "spray_target"),
    ("Descrição Configuração", "configuration_description"),
    ("Taxa de Cobertura (%)", "coverage_percentage"),
    ("Criado Por", "created_by"),
    ("Atualizado Por", "updated_by"),
    ("Data de Criação", "created_at"),
    ("Data de Atualização", "updated_at"),
]


def format_timestamp(value):
    """
    Render an ISO date or datetime string as dd/mm/yyyy [HH:MM:SS]
    """

    if not value:
        return ""

    if "T" in value or " " in value:
        return datetime.fromisoformat(value).strftime("%d/%m/%Y %H:%M:%S")

    return date.fromisoformat(value).strftime("%d/%m/%Y")


def get_report_filename(report_type, year):
    if report_type == "summary":
        return f"relatorio-resumo-{year}.xlsx"

    return f"relatorio-detalhado-{year}.xlsx"


class SheetWriter:
    """
    Appends labeled rows and section headings to a worksheet
    """

    def __init__(self, worksheet):
        self.worksheet = worksheet

    def title(self, text):
        self.worksheet.append([text])
        self.worksheet.cell(row=self.worksheet.max_row, column=1).font = Font(
            bold=True, size=14
        )

    def section(self, text, headers=None):
        self.worksheet.append([])
        self.worksheet.append([text])
        self.worksheet.cell(row=self.worksheet.max_row, column=1).font = Font(
            bold=True
        )
        if headers:
            self.worksheet.append(headers)
            for column in range(1, len(headers) + 1):
                self.worksheet.cell(row=self.worksheet.max_row, column=column).font = (
                    Font(bold=True)
                )

    def row(self, *values):
        self.worksheet.append(list(values))

    def generated_at(self):
        self.row("Gerado em:", datetime.now().strftime("%d/%m/%Y %H:%M:%S"))


def write_summary_sheet(worksheet, summary_report):
    overview = summary_report["overview"]
    distributions = summary_report["distributions"]

    writer = SheetWriter(worksheet)
    writer.title("RELATÓRIO RESUMO DE PULVERIZAÇÃO")
    writer.generated_at()

    writer.section("VISÃO GERAL")
    writer.row("Total de Registros", overview["total_records"])
    writer.row("Estruturas Encontradas", overview["total_structures_found"])
    writer.row("Estruturas Pulverizadas", overview["total_structures_sprayed"])
    writer.row("Estruturas Não Pulverizadas", overview["total_structures_not_sprayed"])
    writer.row("Taxa de Cobertura (%)", round(overview["coverage_percentage"], 2))
    writer.row("População Total", overview["total_population"])
    writer.row("Crianças <5 anos", overview["total_children_under_5"])
    writer.row("Mulheres Grávidas", overview["total_pregnant_women"])
    writer.row("Meta Total", overview["total_target"])
    writer.row("Progresso da Meta (%)", round(overview["target_progress"], 2))

    writer.section("DISTRIBUIÇÃO POR STATUS", ["Status", "Quantidade"])
    for spray_status, count in distributions["status"].items():
        writer.row(SPRAY_STATUS_LABELS.get(spray_status, spray_status), count)

    writer.section("DISTRIBUIÇÃO POR TIPO", ["Tipo", "Quantidade"])
    for spray_type, count in distributions["type"].items():
        writer.row(SPRAY_TYPE_LABELS.get(spray_type, spray_type), count)

    writer.section(
        "DISTRIBUIÇÃO POR PROVÍNCIA",
        [
            "Província",
            "Registros",
            "Estruturas Encontradas",
            "Estruturas Pulverizadas",
            "População",
        ],
    )
    for province_name, province_data in distributions["province"].items():
        writer.row(
            province_name,
            province_data["record_count"],
            province_data["structures_found"],
            province_data["structures_sprayed"],
            province_data["population"],
        )

    writer.section(
        "PERFORMANCE DAS EQUIPES",
        [
            "Pulverizador",
            "Registros",
            "Estruturas Encontradas",
            "Estruturas Pulverizadas",
            "Média por Dia",
        ],
    )
    for sprayer_name, sprayer_data in summary_report["team_performance"].items():
        writer.row(
            sprayer_name,
            sprayer_data["record_count"],
            sprayer_data["structures_found"],
            sprayer_data["structures_sprayed"],
            round(sprayer_data["avg_structures_per_day"], 1),
        )

    worksheet.column_dimensions["A"].width = 35
    for column in range(2, 6):
        worksheet.column_dimensions[get_column_letter(column)].width = 22


def get_detailed_row(record):
    row = []
    for _, key in DETAILED_COLUMNS:
        value = record[key]

        if key == "spray_type":
            value = SPRAY_TYPE_LABELS.get(value, value)
        elif key == "spray_status":
            value = SPRAY_STATUS_LABELS.get(value, value)
        elif key == "coverage_percentage":
            value = round(value, 2)
        elif key in ("spray_date", "created_at", "updated_at"):
            value = format_timestamp(value)

        row.append(value)

    return row


def write_detailed_sheet(worksheet, detailed_report):
    headers = [header for header, _ in DETAILED_COLUMNS]
    worksheet.append(headers)
    for column in range(1, len(headers) + 1):
        worksheet.cell(row=1, column=column).font = Font(bold=True)

    rows = [get_detailed_row(record) for record in detailed_report["records"]]
    for row in rows:
        worksheet.append(row)

    # Size each column to its longest value
    for column_index, header in enumerate(headers):
        max_length = max(
            [len(header)]
            + [len(str(row[column_index])) for row in rows if row[column_index]]
        )
        worksheet.column_dimensions[get_column_letter(column_index + 1)].width = min(
            max_length + 2, MAX_COLUMN_WIDTH
        )


def write_detailed_summary_sheet(worksheet, detailed_report):
    summary = detailed_report["summary"]

    writer = SheetWriter(worksheet)
    writer.title("RESUMO DO RELATÓRIO DETALHADO")
    writer.generated_at()
    writer.row()
    writer.row("Total de Registros", summary["total_records"])
    writer.row("Estruturas Encontradas", summary["total_structures_found"])
    writer.row("Estruturas Pulverizadas", summary["total_structures_sprayed"])
    writer.row("População Total", summary["total_population"])
    writer.row("Cobertura Média (%)", round(summary["average_coverage"], 2))

    worksheet.column_dimensions["A"].width = 35
    worksheet.column_dimensions["B"].width = 22


def build_report_workbook(report_type, report):
    """
    Render a summary or detailed report as an xlsx file

    Returns a BytesIO positioned at the start of the file
    """

    workbook = Workbook()
    worksheet = workbook.active

    if report_type == "summary":
        worksheet.title = "Resumo"
        write_summary_sheet(worksheet, report)
    else:
        worksheet.title = "Registros Detalhados"
        write_detailed_sheet(worksheet, report)
        write_detailed_summary_sheet(workbook.create_sheet("Resumo"), report)

    buffer = BytesIO()
    workbook.save(buffer)
    buffer.seek(0)

    return buffer
