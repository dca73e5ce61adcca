import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from app.core.jobs.domain.models import EncodeProfile

logger = logging.getLogger(__name__)

# preset -> (target height, video bitrate)
VIDEO_PRESETS: Dict[str, Tuple[int, str]] = {
    "240p": (240, "400k"),
    "360p": (360, "800k"),
    "480p": (480, "1500k"),
    "720p": (720, "3000k"),
    "1080p": (1080, "5000k"),
    "1440p": (1440, "8000k"),
}

DEFAULT_PRESET = "720p"

@dataclass(frozen=True)
class VideoProfile(EncodeProfile):
    """
    Value Object with everything ffmpeg needs for a video transcode.
    Codecs and container are fixed; only height and bitrate vary by preset.
    """
    name: str
    height: int
    video_bitrate: str
    video_codec: str = "libx264"
    encoder_preset: str = "medium"
    audio_codec: str = "aac"
    audio_bitrate: str = "128k"
    container: str = "mp4"

    def __post_init__(self):
        if self.height <= 0:
            raise ValueError(f"Target height must be positive: {self.height}")
        for label, value in (("video_bitrate", self.video_bitrate),
                             ("video_codec", self.video_codec),
                             ("audio_codec", self.audio_codec),
                             ("audio_bitrate", self.audio_bitrate)):
            if not value:
                raise ValueError(f"{label} cannot be empty.")

    @property
    def extension(self) -> str:
        return self.container

    @property
    def content_type(self) -> str:
        return f"video/{self.container}"

def resolve_video_profile(selector: Optional[str]) -> VideoProfile:
    """
    Maps a preset name ('480p', ' 1080P ') to a VideoProfile.
    Missing or unknown presets fall back to 720p.
    """
    key = (selector or "").strip().lower()
    if key not in VIDEO_PRESETS:
        if key:
            logger.info(f"Unknown video preset '{selector}', using {DEFAULT_PRESET}")
        key = DEFAULT_PRESET

    height, bitrate = VIDEO_PRESETS[key]
    return VideoProfile(name=key, height=height, video_bitrate=bitrate)
