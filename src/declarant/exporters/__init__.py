"""Sheet projection and workbook export."""

from .base import WorkbookBuilder
from .excel_exporter import ExcelExporter, OpenpyxlWorkbookBuilder
from .projector import ProjectedLayouts, ProjectedSheet, RecordProjector, format_number

__all__ = [
    "ExcelExporter",
    "OpenpyxlWorkbookBuilder",
    "ProjectedLayouts",
    "ProjectedSheet",
    "RecordProjector",
    "WorkbookBuilder",
    "format_number",
]
