from typing import Optional

from app.core.common.enums import JobKind
from app.core.jobs.domain.models import ConversionRequest, ConversionResult
from app.core.jobs.service.manager import ConversionManager, get_conversion_manager

def extract_audio(
    data: bytes,
    filename: str = "input",
    fmt: Optional[str] = None,
    manager: Optional[ConversionManager] = None,
) -> ConversionResult:
    """
    Standalone API: Extracts the audio track of an uploaded file.
    fmt is mp3 (default), wav or ogg; anything else stream-copies the source audio.
    """
    request = ConversionRequest(
        source_bytes=data,
        job_kind=JobKind.AUDIO_EXTRACTION,
        profile_selector=fmt,
        source_filename=filename,
    )
    return (manager or get_conversion_manager()).convert(request)
