"""Declaration session: ingestion -> analysis -> projection -> workbook."""

import logging
import time
from datetime import date
from pathlib import Path

from ..config import get_settings
from ..exporters import ExcelExporter, ProjectedLayouts, RecordProjector
from ..extractors import BaseExtractor
from ..normalizers import LLMExtractor
from ..utils.file_handlers import UploadedFile
from .exceptions import DeclarantError, ValidationError
from .ingestion import IngestionState
from .models import CustomsRecord, DocumentRole

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred during AI analysis."


class DeclarationSession:
    """
    One user's in-memory declaration session.

    Orchestrates: File selection -> Text extraction -> LLM analysis -> Sheets -> Workbook

    Every failure ends in `error` holding a single user-facing message, with
    `is_processing` cleared and the ready slots kept, so the user can fix the
    problem and submit again.
    """

    def __init__(
        self,
        extractor: BaseExtractor | None = None,
        llm_extractor: LLMExtractor | None = None,
        projector: RecordProjector | None = None,
        exporter: ExcelExporter | None = None,
    ):
        """
        Initialize the session with its collaborators.

        If not provided, creates default instances.
        """
        self.ingestion = IngestionState(extractor)
        self.llm_extractor = llm_extractor or LLMExtractor()
        self.projector = projector or RecordProjector()
        self.exporter = exporter or ExcelExporter()

        self.is_processing = False
        self.error: str | None = None
        self.result: CustomsRecord | None = None

    @property
    def has_api_key(self) -> bool:
        return self.llm_extractor.has_credentials

    @property
    def can_process(self) -> bool:
        """Whether the analyze action should be enabled."""
        return not self.is_processing and self.ingestion.all_ready

    async def select_file(self, role: DocumentRole, upload: UploadedFile) -> None:
        """Read a file into its slot, surfacing a read failure as the session error."""
        slot = await self.ingestion.load_file(role, upload)
        if slot.error:
            self.error = slot.error

    async def process(self) -> CustomsRecord | None:
        """
        Analyze the four documents.

        Returns:
            The extracted record, or None when the attempt failed (see `error`)
        """
        try:
            if self.is_processing:
                raise ValidationError("An analysis is already running. Please wait for it to finish.")
            request = self.ingestion.build_request()
        except ValidationError as e:
            self.error = e.message
            return None

        self.is_processing = True
        self.error = None
        start_time = time.time()

        try:
            self.result = await self.llm_extractor.analyze_request(request)
            logger.info(f"Analysis finished in {int((time.time() - start_time) * 1000)} ms")
            return self.result
        except DeclarantError as e:
            logger.warning(f"Analysis failed: {type(e).__name__}")
            self.error = e.message or UNEXPECTED_ERROR_MESSAGE
            return None
        except Exception:
            logger.exception("Unexpected error during analysis")
            self.error = UNEXPECTED_ERROR_MESSAGE
            return None
        finally:
            self.is_processing = False

    def project(self, declaration_date: date | None = None) -> ProjectedLayouts:
        """
        Build the four sheets for the current result.

        Raises:
            ValidationError: If no analysis result is available yet
        """
        if self.result is None:
            raise ValidationError("No analysis result to export. Please analyze the documents first.")
        return self.projector.project(self.result, declaration_date or date.today())

    def export(self, output_dir: str | Path | None = None, declaration_date: date | None = None) -> Path:
        """
        Write the declaration workbook and return its path.

        Raises:
            ValidationError: If no analysis result is available yet
        """
        layouts = self.project(declaration_date)
        target = output_dir if output_dir is not None else get_settings().output_dir
        return self.exporter.write(self.result, layouts, target)
