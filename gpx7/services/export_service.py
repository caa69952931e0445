"""
Service d'export CSV/Excel / CSV/Excel export service.
Genere le registre des depenses en CSV ou XLSX.
Renders the expense ledger as CSV or XLSX.
"""

import csv
import io

from openpyxl import Workbook
from openpyxl.styles import Font

from gpx7.services.expense_service import LedgerEntry

LEDGER_FIELDS = ["date", "category", "plate", "description", "amount"]


class ExportService:
    """Export du registre / Ledger export."""

    @staticmethod
    def ledger_rows(ledger: list[LedgerEntry]) -> list[dict]:
        return [
            {
                "date": e.date.strftime("%Y-%m-%d"),
                "category": e.category.value,
                "plate": e.plate or "",
                "description": e.description,
                "amount": e.amount,
            }
            for e in ledger
        ]

    @staticmethod
    def to_csv(rows: list[dict], fields: list[str]) -> bytes:
        """Générer un CSV UTF-8 BOM avec séparateur ';' / Generate UTF-8 BOM CSV with ';' separator."""
        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=fields, delimiter=";", extrasaction="ignore")
        writer.writeheader()
        for row in rows:
            writer.writerow({f: row.get(f, "") for f in fields})
        return ("\ufeff" + output.getvalue()).encode("utf-8")

    @staticmethod
    def to_xlsx(rows: list[dict], fields: list[str], sheet_name: str = "Expenses", total: float | None = None) -> bytes:
        """Générer un fichier Excel / Generate an Excel file.

        Une ligne TOTAL est ajoutee si total est fourni / A TOTAL row is appended when total is given.
        """
        wb = Workbook()
        ws = wb.active
        ws.title = sheet_name

        # En-têtes / Headers
        for col_idx, field in enumerate(fields, 1):
            cell = ws.cell(row=1, column=col_idx, value=field)
            cell.font = Font(bold=True)

        # Données / Data rows
        for row_idx, row in enumerate(rows, 2):
            for col_idx, field in enumerate(fields, 1):
                ws.cell(row=row_idx, column=col_idx, value=row.get(field))

        if total is not None and "amount" in fields:
            total_row = len(rows) + 2
            label = ws.cell(row=total_row, column=1, value="TOTAL")
            label.font = Font(bold=True)
            ws.cell(row=total_row, column=fields.index("amount") + 1, value=total)

        buf = io.BytesIO()
        wb.save(buf)
        return buf.getvalue()
