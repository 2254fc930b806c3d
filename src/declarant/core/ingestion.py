"""Per-slot state machine for the four uploaded documents."""

import asyncio
import logging

from ..extractors import BaseExtractor, TextExtractor
from ..utils.file_handlers import UploadedFile
from .exceptions import ReadError, ValidationError
from .models import DocumentRole, DocumentSlot, ExtractionRequest, SlotStatus

logger = logging.getLogger(__name__)


class IngestionState:
    """
    Track the contract, invoice, description and packing slots.

    Each slot moves empty/error -> reading -> ready | error. Selecting a file
    again restarts the cycle; the slot's generation counter makes the latest
    selection win even if an older extraction finishes later.
    """

    def __init__(self, extractor: BaseExtractor | None = None):
        self.extractor = extractor or TextExtractor()
        self._slots: dict[DocumentRole, DocumentSlot] = {role: DocumentSlot(role=role) for role in DocumentRole}
        self._tasks: dict[DocumentRole, asyncio.Task] = {}

    def slot(self, role: DocumentRole) -> DocumentSlot:
        return self._slots[role]

    def slots(self) -> list[DocumentSlot]:
        return [self._slots[role] for role in DocumentRole]

    @property
    def all_ready(self) -> bool:
        return all(slot.is_ready for slot in self._slots.values())

    def missing_roles(self) -> list[DocumentRole]:
        """Roles whose slot is not ready yet."""
        return [slot.role for slot in self.slots() if not slot.is_ready]

    def select_file(self, role: DocumentRole, upload: UploadedFile) -> asyncio.Task:
        """
        Start reading a file into a slot.

        The slot is marked reading before this returns; the extraction itself
        runs as a task on the current event loop.

        Returns:
            The task that applies the extraction outcome to the slot
        """
        slot = self._slots[role]
        slot.generation += 1
        slot.file = upload
        slot.content = None
        slot.error = None
        slot.status = SlotStatus.READING
        logger.info(f"Reading {role.value} file {upload.filename} (attempt {slot.generation})")

        task = asyncio.create_task(self._read(role, upload, slot.generation))
        self._tasks[role] = task
        return task

    async def load_file(self, role: DocumentRole, upload: UploadedFile) -> DocumentSlot:
        """Select a file and wait until its extraction has been applied."""
        await self.select_file(role, upload)
        return self._slots[role]

    async def wait(self) -> None:
        """Wait for every in-flight extraction."""
        pending = [task for task in self._tasks.values() if not task.done()]
        if pending:
            await asyncio.gather(*pending)

    def build_request(self) -> ExtractionRequest:
        """
        Collect the four document texts for analysis.

        Raises:
            ValidationError: If any slot is not ready
        """
        missing = self.missing_roles()
        if missing:
            raise ValidationError(
                "Please upload all 4 required documents before processing.",
                details={"missing": [role.value for role in missing]},
            )

        return ExtractionRequest(
            contract_text=self._slots[DocumentRole.CONTRACT].content,
            invoice_text=self._slots[DocumentRole.INVOICE].content,
            description_text=self._slots[DocumentRole.DESCRIPTION].content,
            packing_text=self._slots[DocumentRole.PACKING].content,
        )

    async def _read(self, role: DocumentRole, upload: UploadedFile, generation: int) -> None:
        try:
            result = await self.extractor.extract(upload)
            if not result.has_content:
                raise ReadError("Document contains no text.", role=role.value)
        except ReadError as e:
            self._fail(role, generation, e)
            return
        except Exception as e:
            logger.exception(f"Unexpected error reading {role.value} file {upload.filename}")
            self._fail(role, generation, e)
            return

        slot = self._slots[role]
        if slot.generation != generation:
            logger.debug(f"Dropping superseded {role.value} extraction (attempt {generation})")
            return

        slot.content = result.text
        slot.status = SlotStatus.READY
        for warning in result.warnings:
            logger.debug(f"{role.value}: {warning}")
        logger.info(f"{role.value} file ready ({len(result.text)} chars)")

    def _fail(self, role: DocumentRole, generation: int, error: Exception) -> None:
        slot = self._slots[role]
        if slot.generation != generation:
            logger.debug(f"Dropping superseded {role.value} failure (attempt {generation})")
            return

        logger.warning(f"Error reading {role.value} file: {error}")
        slot.file = None
        slot.content = None
        slot.status = SlotStatus.ERROR
        slot.error = f"Error reading {role.value} file. Please ensure it is a valid .docx or .txt file."
