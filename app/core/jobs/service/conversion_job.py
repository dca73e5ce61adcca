import logging
import uuid
from contextlib import ExitStack
from typing import List

from app.core.common.enums import ConversionErrorKind, JobKind, JobState
from app.core.config.settings import EncoderConfig
from app.core.shared_types import TempFile
from ..domain.interfaces import IArgumentBuilder, IFileStager, IProcessSupervisor, IProfileResolver
from ..domain.models import ConversionRequest, ConversionResult, EncodeProfile, ProcessOutcome

logger = logging.getLogger(__name__)

JOB_LABELS = {
    JobKind.VIDEO_TRANSCODE: "Transcoding",
    JobKind.AUDIO_EXTRACTION: "Audio extraction",
}

def describe_budget(seconds: float) -> str:
    """300 -> '5 minutes', 90 -> '90 seconds'."""
    if seconds >= 60 and seconds % 60 == 0:
        minutes = int(seconds // 60)
        return f"{minutes} minute{'s' if minutes != 1 else ''}"
    return f"{seconds:g} second{'s' if seconds != 1 else ''}"

class ConversionJob:
    """
    One request, one encoder run.

    CREATED -> STAGED -> RUNNING -> {COMPLETED | FAILED | TIMED_OUT} -> CLEANED

    Both temp files are held by scoped guards, so they are released on every
    exit path, including exceptions raised while reading the output.
    A job runs once and is then discarded.
    """

    def __init__(
        self,
        request: ConversionRequest,
        config: EncoderConfig,
        stager: IFileStager,
        resolver: IProfileResolver,
        builder: IArgumentBuilder,
        supervisor: IProcessSupervisor,
    ):
        self.id = uuid.uuid4()
        self.request = request
        self.config = config
        self.stager = stager
        self.resolver = resolver
        self.builder = builder
        self.supervisor = supervisor
        self.state = JobState.CREATED
        self.history: List[JobState] = [JobState.CREATED]

    @property
    def label(self) -> str:
        return JOB_LABELS.get(self.request.job_kind, "Conversion")

    def _transition(self, state: JobState) -> None:
        logger.info(f"Job {self.id} [{self.request.job_kind.value}]: {self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)

    def run(self) -> ConversionResult:
        if self.state != JobState.CREATED:
            raise RuntimeError(f"Job {self.id} already ran (state: {self.state.value})")

        try:
            return self._execute()
        except Exception:
            self._transition(JobState.FAILED)
            logger.exception(f"Job {self.id} crashed")
            raise
        finally:
            self._transition(JobState.CLEANED)

    def _execute(self) -> ConversionResult:
        request = self.request
        if not request.source_bytes:
            self._transition(JobState.FAILED)
            return ConversionResult.failure(ConversionErrorKind.NO_INPUT_PROVIDED, "No file uploaded")

        profile = self.resolver.resolve(request.job_kind, request.profile_selector)

        with ExitStack() as guards:
            source = guards.enter_context(self.stager.staged(request.source_bytes, request.source_extension_hint))
            target = guards.enter_context(self.stager.reserved(profile.extension))
            self._transition(JobState.STAGED)

            args = self.builder.build(request.job_kind, source.path, target.path, profile)
            self._transition(JobState.RUNNING)

            outcome = self.supervisor.run(self.config.ffmpeg_binary, args, self.config.timeout_seconds)
            return self._finish(outcome, target, profile)

    def _finish(self, outcome: ProcessOutcome, target: TempFile, profile: EncodeProfile) -> ConversionResult:
        if outcome.spawn_error is not None:
            self._transition(JobState.FAILED)
            return ConversionResult.failure(
                ConversionErrorKind.SPAWN_FAILURE,
                f"{self.label} failed: could not start encoder '{self.config.ffmpeg_binary}' ({outcome.spawn_error})",
            )

        if outcome.timed_out:
            self._transition(JobState.TIMED_OUT)
            return ConversionResult.failure(
                ConversionErrorKind.PROCESS_TIMED_OUT,
                f"{self.label} timed out (took more than {describe_budget(self.config.timeout_seconds)})",
            )

        if not outcome.succeeded:
            self._transition(JobState.FAILED)
            return ConversionResult.failure(
                ConversionErrorKind.PROCESS_EXITED_NON_ZERO,
                f"{self.label} failed (ffmpeg error code {outcome.exit_code})",
                exit_code=outcome.exit_code,
            )

        try:
            data = self.stager.read(target)
        except OSError as e:
            logger.error(f"Job {self.id}: error reading output file {target.path}: {e}")
            self._transition(JobState.FAILED)
            return ConversionResult.failure(
                ConversionErrorKind.OUTPUT_READ_FAILURE,
                f"{self.label} failed: error reading output file ({e})",
            )

        self._transition(JobState.COMPLETED)
        filename = f"{self.request.output_stem}.{profile.extension}"
        logger.info(f"Job {self.id}: produced {len(data)} bytes as {filename}")
        return ConversionResult.success(data, profile.content_type, filename)
