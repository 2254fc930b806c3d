"""Excel exporter for projected declaration sheets."""

import io
import logging
import re
from collections.abc import Sequence
from decimal import Decimal
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from ..core.models import CustomsRecord
from .base import WorkbookBuilder
from .projector import ProjectedLayouts, ProjectedSheet

logger = logging.getLogger(__name__)


class OpenpyxlWorkbookBuilder(WorkbookBuilder):
    """Write cell matrices to an .xlsx workbook with openpyxl."""

    # Styles
    TITLE_FONT = Font(bold=True, size=14)
    TOTAL_FILL = PatternFill(start_color="DDEBF7", end_color="DDEBF7", fill_type="solid")
    TOTAL_FONT = Font(bold=True)
    WRAP = Alignment(wrap_text=True, vertical="top")

    @property
    def format_name(self) -> str:
        return "Excel"

    @property
    def file_extension(self) -> str:
        return ".xlsx"

    @property
    def mime_type(self) -> str:
        return "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

    def build(self, sheets: Sequence[ProjectedSheet]) -> bytes:
        wb = Workbook()
        # Drop the default sheet so the workbook holds exactly the given sheets
        wb.remove(wb.active)

        for sheet in sheets:
            ws = wb.create_sheet(sheet.name)
            self._write_sheet(ws, sheet)

        # Save to bytes
        output = io.BytesIO()
        wb.save(output)
        output.seek(0)
        return output.read()

    def _write_sheet(self, ws, sheet: ProjectedSheet) -> None:
        for row_idx, row in enumerate(sheet.rows, start=1):
            is_total = sheet.has_total_row and row_idx == len(sheet.rows)
            for col_idx, value in enumerate(row, start=1):
                cell = ws.cell(row=row_idx, column=col_idx, value=self._cell_value(value))

                if isinstance(value, str) and "\n" in value:
                    cell.alignment = self.WRAP
                if isinstance(value, Decimal):
                    cell.number_format = "#,##0.####"
                if is_total:
                    cell.font = self.TOTAL_FONT
                    cell.fill = self.TOTAL_FILL

        if sheet.rows and sheet.rows[0]:
            ws.cell(row=1, column=1).font = self.TITLE_FONT

        for col, width in enumerate(sheet.column_widths, start=1):
            ws.column_dimensions[get_column_letter(col)].width = width

    def _cell_value(self, value):
        if isinstance(value, Decimal):
            return float(value)
        return value


class ExcelExporter:
    """Emit the projected sheets as one downloadable workbook."""

    FILENAME_PREFIX = "Customs_Declaration"
    DRAFT_NAME = "Draft"

    def __init__(self, builder: WorkbookBuilder | None = None):
        self.builder = builder or OpenpyxlWorkbookBuilder()

    def export(self, layouts: ProjectedLayouts) -> bytes:
        """
        Build the workbook bytes.

        Sheets are always Declaration, Packing List, Invoice, Contract.
        """
        return self.builder.build(layouts.sheets())

    def filename_for(self, record: CustomsRecord) -> str:
        """Customs_Declaration_<invoice number>.xlsx, or ..._Draft.xlsx without one."""
        number = record.invoice_info.invoice_number.strip()
        stem = re.sub(r'[\\/:*?"<>|\s]+', "_", number) if number else self.DRAFT_NAME
        return f"{self.FILENAME_PREFIX}_{stem}{self.builder.file_extension}"

    def write(self, record: CustomsRecord, layouts: ProjectedLayouts, output_dir: str | Path) -> Path:
        """
        Write the workbook for `record` into `output_dir`.

        Returns:
            Path of the written file
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        path = output_dir / self.filename_for(record)
        path.write_bytes(self.export(layouts))
        logger.info(f"Wrote {self.builder.format_name} workbook {path}")
        return path
