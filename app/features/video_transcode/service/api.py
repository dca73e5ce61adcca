from typing import Optional

from app.core.common.enums import JobKind
from app.core.jobs.domain.models import ConversionRequest, ConversionResult
from app.core.jobs.service.manager import ConversionManager, get_conversion_manager

def transcode_video(
    data: bytes,
    filename: str = "input",
    quality: Optional[str] = None,
    manager: Optional[ConversionManager] = None,
) -> ConversionResult:
    """
    Public Service API: Transcode an uploaded video to MP4.

    Args:
        data: Raw bytes of the uploaded file.
        filename: Original upload name; its stem names the output.
        quality: Preset such as '480p'. Missing/unknown means 720p.
        manager: Optional manager override (defaults to the process-wide one).
    """
    request = ConversionRequest(
        source_bytes=data,
        job_kind=JobKind.VIDEO_TRANSCODE,
        profile_selector=quality,
        source_filename=filename,
    )
    return (manager or get_conversion_manager()).convert(request)
