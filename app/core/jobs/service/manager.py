import logging
from functools import lru_cache
from typing import Optional

from app.core.config.settings import EncoderConfig, settings
from ..data.process_supervisor import SubprocessSupervisor
from ..data.temp_stager import TempFileStager
from ..domain.interfaces import IArgumentBuilder, IFileStager, IProcessSupervisor, IProfileResolver
from ..domain.models import ConversionRequest, ConversionResult
from .arguments import FFmpegArgumentBuilder
from .conversion_job import ConversionJob
from .profiles import EncodeProfileResolver

logger = logging.getLogger(__name__)

class ConversionManager:
    """
    Public API for the Jobs Core Module.
    Wires the shared collaborators once; every request gets its own ConversionJob.
    The supervisor (and its admission gate) is shared by all jobs.
    """

    def __init__(
        self,
        config: EncoderConfig,
        stager: Optional[IFileStager] = None,
        resolver: Optional[IProfileResolver] = None,
        builder: Optional[IArgumentBuilder] = None,
        supervisor: Optional[IProcessSupervisor] = None,
    ):
        self.config = config
        self.stager = stager or TempFileStager(config.temp_dir)
        self.resolver = resolver or EncodeProfileResolver()
        self.builder = builder or FFmpegArgumentBuilder()
        self.supervisor = supervisor or SubprocessSupervisor(
            max_concurrent=config.max_concurrent_encodes,
            diagnostic_tail_lines=config.diagnostic_tail_lines,
        )

    def create_job(self, request: ConversionRequest) -> ConversionJob:
        return ConversionJob(
            request=request,
            config=self.config,
            stager=self.stager,
            resolver=self.resolver,
            builder=self.builder,
            supervisor=self.supervisor,
        )

    def convert(self, request: ConversionRequest) -> ConversionResult:
        """
        Runs one conversion end to end.

        Returns:
            ConversionResult: converted bytes, or a failure description.
            Temp files are gone by the time this returns.
        """
        job = self.create_job(request)
        logger.info(
            f"Job {job.id} submitted: {request.job_kind.value}, "
            f"selector={request.profile_selector!r}, {len(request.source_bytes)} bytes"
        )
        result = job.run()
        if result.ok:
            logger.info(f"Job {job.id} Completed successfully.")
        else:
            logger.error(f"Job {job.id} Failed: [{result.error_kind.value}] {result.message}")
        return result

@lru_cache(maxsize=1)
def get_conversion_manager() -> ConversionManager:
    """Process-wide manager built from the startup settings."""
    return ConversionManager(settings.encoder_config())
