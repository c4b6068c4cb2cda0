import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from django.conf import settings

from restora.const import PROGRESS_DONE
from restora.models import Phase, Preset, RestorationEntry, RestorationJob
from restora.serializers import validate_source_file
from restora.services import HistoryStore, interpret_response
from restora.tasks.progress import ProgressTicker
from restora.utils import get_agent_client
from restora.utils.exceptions import (
    ErrorKind,
    FileValidationError,
    RestorationError,
    TransportError,
    UploadError,
    format_error,
)
from restora.utils.imaging import create_preview, probe_dimensions, to_data_url
from restora.utils.prompt import build_instruction

logger = logging.getLogger(__name__)

# A new file may be selected from these phases; others are mid-flight
SELECTABLE_PHASES = (
    Phase.IDLE,
    Phase.READY,
    Phase.UPLOAD_FAILED,
    Phase.COMPLETED,
    Phase.FAILED,
)


@dataclass(frozen=True)
class ErrorNotice:
    """Content of the single user-visible error slot."""

    kind: ErrorKind
    message: str

    @classmethod
    def from_exception(cls, exc: RestorationError) -> "ErrorNotice":
        return cls(kind=exc.kind, message=exc.message)

    def as_dict(self):
        return format_error(code=self.kind.value, message=self.message)


class RestorationWorkflow:
    """
    Drive one restoration job at a time through its lifecycle

    Steps:
    1. Validate the selected file (declared type + size)
    2. Expose a preview, encode the bytes and probe dimensions
    3. Upload to obtain asset ids
    4. On demand, invoke the agent while fabricating progress
    5. Interpret the response and record successes in the history
    """

    def __init__(self, client=None, history: Optional[HistoryStore] = None,
                 agent_id: Optional[str] = None, progress_interval: Optional[float] = None):
        self.client = client or get_agent_client()
        self.history = history if history is not None else HistoryStore()
        self.agent_id = agent_id or settings.RESTORA_AGENT_ID
        self.progress_interval = (
            progress_interval if progress_interval is not None
            else settings.RESTORA_PROGRESS_INTERVAL
        )
        self.job = RestorationJob()
        self.error: Optional[ErrorNotice] = None
        self.progress_ticker: Optional[ProgressTicker] = None
        self._listeners: List[Callable[[RestorationJob], None]] = []

    # --- Observers ----------------------------------------------------------

    def subscribe(self, listener: Callable[[RestorationJob], None]) -> Callable[[], None]:
        """Call `listener(job)` after every phase or progress change."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.job)

    def _set_phase(self, job: RestorationJob, phase: Phase) -> None:
        logger.info(f"{job} -> {phase.value}")
        job.phase = phase
        self._notify()

    def _set_progress(self, job: RestorationJob, value: int) -> None:
        if job is not self.job or job.phase != Phase.RESTORING:
            return
        job.progress = max(job.progress, value)
        self._notify()

    def _fail(self, exc: RestorationError) -> None:
        self.error = ErrorNotice.from_exception(exc)

    # --- Presets ------------------------------------------------------------

    @property
    def presets(self) -> List[Preset]:
        return self.job.active_presets

    def toggle_preset(self, preset) -> bool:
        """Flip one preset; returns whether it is now selected."""
        preset = Preset(preset)
        if preset in self.job.selected_presets:
            self.job.selected_presets.discard(preset)
            return False
        self.job.selected_presets.add(preset)
        return True

    def set_presets(self, presets: Iterable) -> None:
        self.job.selected_presets = {Preset(preset) for preset in presets}

    # --- Error slot ---------------------------------------------------------

    def dismiss_error(self) -> None:
        self.error = None

    # --- Lifecycle ----------------------------------------------------------

    @property
    def can_restore(self) -> bool:
        job = self.job
        return (
            bool(job.asset_refs)
            and job.phase not in (Phase.VALIDATING, Phase.UPLOADING, Phase.RESTORING)
            and job.outcome is None
        )

    def reset(self) -> None:
        """Discard the current job (the "Replace Photo" action)."""
        presets = set(self.job.selected_presets)
        self._release(self.job)
        self.job = RestorationJob(selected_presets=presets)
        self.error = None
        self._notify()

    def _release(self, job: RestorationJob) -> None:
        if job.preview_handle is not None:
            job.preview_handle.revoke()

    async def select_file(self, source_file) -> Phase:
        """
        Validate and upload a newly selected file.

        Starting a new job resets asset ids, outcome, progress and dimensions;
        preset selections carry over. Ignored while uploading or restoring.
        """
        if self.job.phase not in SELECTABLE_PHASES:
            logger.info(f"Ignoring file selection while {self.job.phase.value}")
            return self.job.phase

        presets = set(self.job.selected_presets)
        self._release(self.job)
        job = self.job = RestorationJob(source_file=source_file, selected_presets=presets)
        self.error = None
        self._set_phase(job, Phase.VALIDATING)

        try:
            validate_source_file(source_file)
        except FileValidationError as exc:
            logger.info(f"Rejected {source_file.name}: {exc.code}")
            job.source_file = None
            self._fail(exc)
            self._set_phase(job, Phase.IDLE)
            return job.phase

        job.preview_handle = create_preview(source_file)
        self._set_phase(job, Phase.UPLOADING)

        job.original_ref = await asyncio.to_thread(to_data_url, source_file)
        dimensions = await asyncio.to_thread(probe_dimensions, source_file.data)
        if job is not self.job:
            return job.phase
        job.dimensions = dimensions

        try:
            result = await asyncio.to_thread(self.client.upload_files, source_file)
        except Exception as exc:
            logger.exception(f"Upload of {source_file.name} failed: {exc}")
            result = {'success': False, 'asset_ids': []}

        if job is not self.job:
            return job.phase

        result = result if isinstance(result, dict) else {}
        asset_ids = result.get('asset_ids')
        if result.get('success') and isinstance(asset_ids, list) and asset_ids:
            job.asset_refs = list(asset_ids)
            self._set_phase(job, Phase.READY)
        else:
            error = result.get('error')
            self._fail(UploadError(error if isinstance(error, str) and error else None))
            self._set_phase(job, Phase.UPLOAD_FAILED)

        return job.phase

    async def restore(self) -> Phase:
        """
        Issue one restoration request for the current job.

        A no-op (returning the current phase) unless the job has asset ids,
        is not uploading or restoring, and has no completed outcome yet.
        """
        if not self.can_restore:
            return self.job.phase

        job = self.job
        self.error = None
        job.progress = 0
        self._set_phase(job, Phase.RESTORING)

        message, applied_presets = build_instruction(job.dimensions, job.active_presets)

        ticker = ProgressTicker(
            lambda value: self._set_progress(job, value),
            interval=self.progress_interval,
        )
        self.progress_ticker = ticker

        response = None
        failure: Optional[RestorationError] = None
        try:
            async with ticker:
                response = await asyncio.to_thread(
                    self.client.call_agent, message, self.agent_id, list(job.asset_refs)
                )
        except Exception as exc:
            logger.exception(f"Restoration call failed for {job}: {exc}")
            failure = TransportError()

        if job is not self.job:
            return job.phase

        job.progress = PROGRESS_DONE
        self._notify()

        if failure is None:
            try:
                job.outcome = interpret_response(response)
            except RestorationError as exc:
                failure = exc

        if failure is not None:
            logger.error(f"Restoration failed for {job}: [{failure.kind.value}] {failure.message}")
            self._fail(failure)
            self._set_phase(job, Phase.FAILED)
            return job.phase

        self.history.append(self._build_entry(job, applied_presets))
        self._set_phase(job, Phase.COMPLETED)
        return job.phase

    def _build_entry(self, job: RestorationJob, presets: List[str]) -> RestorationEntry:
        source = job.source_file
        aspect_ratio = None
        if job.dimensions is not None and job.dimensions.ratio is not None:
            aspect_ratio = round(job.dimensions.ratio, 4)

        return RestorationEntry(
            original_ref=job.original_ref,
            restored_ref=job.outcome.restored_url,
            file_name=source.name if source else "unknown",
            file_size_bytes=source.size if source else 0,
            analysis_text=job.outcome.analysis_text,
            presets=tuple(presets),
            aspect_ratio=aspect_ratio,
        )
