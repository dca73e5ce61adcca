from typing import Optional

from app.core.common.enums import JobKind
from app.features.audio_extraction.domain.models import resolve_audio_profile
from app.features.video_transcode.domain.models import resolve_video_profile
from ..domain.interfaces import IProfileResolver
from ..domain.models import EncodeProfile

class EncodeProfileResolver(IProfileResolver):
    """
    Routes a selector to the feature that owns that job kind's presets.
    Total: unknown selectors resolve to each feature's documented fallback.
    """

    def resolve(self, job_kind: JobKind, selector: Optional[str]) -> EncodeProfile:
        if job_kind == JobKind.VIDEO_TRANSCODE:
            return resolve_video_profile(selector)

        elif job_kind == JobKind.AUDIO_EXTRACTION:
            return resolve_audio_profile(selector)

        raise NotImplementedError(f"No profile table registered for JobKind: {job_kind}")
