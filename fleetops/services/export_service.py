"""
Service d'export CSV/Excel / CSV/Excel export service.
Genere le rapport financier en CSV (';', UTF-8 BOM) ou XLSX.
"""

import csv
import io
from typing import Any

from openpyxl import Workbook

from fleetops.schemas.report import FinancialReport

DETAIL_FIELDS = ["date", "kind", "vehicle_code", "description", "value"]


class ExportService:
    """Export du rapport financier / Financial report export."""

    @staticmethod
    def summary_rows(report: FinancialReport) -> list[tuple[str, Any]]:
        """Bloc resume (libelle, valeur) / Summary block (label, value)."""
        return [
            ("period_start", report.window_start.isoformat()),
            ("period_end", report.window_end.isoformat()),
            ("total_revenue", report.total_revenue),
            ("maintenance_cost", report.maintenance_cost),
            ("fuel_cost", report.fuel_cost),
            ("general_cost", report.general_cost),
            ("total_expenses", report.total_expenses),
            ("net_profit", report.net_profit),
            ("margin_percent", report.margin_percent),
        ]

    @staticmethod
    def detail_rows(report: FinancialReport) -> list[dict[str, Any]]:
        rows = []
        for row in report.details:
            data = row.model_dump()
            data["date"] = row.date.isoformat()
            data["vehicle_code"] = row.vehicle_code or "-"
            rows.append(data)
        return rows

    @staticmethod
    def to_csv(report: FinancialReport) -> bytes:
        """Générer un CSV UTF-8 BOM avec séparateur ';' / Generate UTF-8 BOM CSV with ';' separator."""
        output = io.StringIO()
        writer = csv.writer(output, delimiter=";")
        for label, value in ExportService.summary_rows(report):
            writer.writerow([label, value])
        writer.writerow([])

        dict_writer = csv.DictWriter(output, fieldnames=DETAIL_FIELDS, delimiter=";", extrasaction="ignore")
        dict_writer.writeheader()
        for row in ExportService.detail_rows(report):
            dict_writer.writerow(row)
        return ("\ufeff" + output.getvalue()).encode("utf-8")

    @staticmethod
    def to_xlsx(report: FinancialReport) -> bytes:
        """Générer un fichier Excel (resume + detail) / Generate an Excel file (summary + details)."""
        wb = Workbook()
        ws = wb.active
        ws.title = "Summary"
        for row_idx, (label, value) in enumerate(ExportService.summary_rows(report), 1):
            cell = ws.cell(row=row_idx, column=1, value=label)
            cell.font = cell.font.copy(bold=True)
            ws.cell(row=row_idx, column=2, value=value if isinstance(value, str) else float(value))

        details = wb.create_sheet("Details")
        # En-têtes / Headers
        for col_idx, field in enumerate(DETAIL_FIELDS, 1):
            cell = details.cell(row=1, column=col_idx, value=field)
            cell.font = cell.font.copy(bold=True)

        # Données / Data rows
        for row_idx, row in enumerate(ExportService.detail_rows(report), 2):
            for col_idx, field in enumerate(DETAIL_FIELDS, 1):
                value = row.get(field)
                details.cell(row=row_idx, column=col_idx, value=float(value) if field == "value" else value)

        buf = io.BytesIO()
        wb.save(buf)
        return buf.getvalue()
