from pathlib import Path
from typing import List

from app.core.common.enums import JobKind
from app.features.audio_extraction.data.ffmpeg_adapter import build_extraction_args
from app.features.audio_extraction.domain.models import AudioProfile
from app.features.video_transcode.data.ffmpeg_adapter import build_transcode_args
from app.features.video_transcode.domain.models import VideoProfile
from ..domain.interfaces import IArgumentBuilder
from ..domain.models import EncodeProfile

class FFmpegArgumentBuilder(IArgumentBuilder):
    """
    Routes to the per-feature ffmpeg adapters. Holds no state.
    """

    def build(self, job_kind: JobKind, input_path: Path, output_path: Path, profile: EncodeProfile) -> List[str]:
        if job_kind == JobKind.VIDEO_TRANSCODE:
            if not isinstance(profile, VideoProfile):
                raise TypeError(f"Video transcode needs a VideoProfile, got {type(profile).__name__}")
            return build_transcode_args(input_path, output_path, profile)

        elif job_kind == JobKind.AUDIO_EXTRACTION:
            if not isinstance(profile, AudioProfile):
                raise TypeError(f"Audio extraction needs an AudioProfile, got {type(profile).__name__}")
            return build_extraction_args(input_path, output_path, profile)

        raise NotImplementedError(f"No argument builder registered for JobKind: {job_kind}")
