import logging
from dataclasses import dataclass
from typing import Optional

from app.core.jobs.domain.models import EncodeProfile, sanitize_extension

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "mp3"

@dataclass(frozen=True)
class AudioProfile(EncodeProfile):
    """
    Value Object describing how to pull the audio track out of a file.
    codec=None means stream-copy: the source codec is kept, nothing is re-encoded.
    """
    container: str
    codec: Optional[str] = None
    quality: Optional[int] = None
    sample_rate_hz: Optional[int] = None
    channels: Optional[int] = None

    def __post_init__(self):
        if not self.container:
            raise ValueError("Audio container cannot be empty.")
        if self.codec is None and any(v is not None for v in (self.quality, self.sample_rate_hz, self.channels)):
            raise ValueError("Stream-copy profiles cannot carry re-encode parameters.")

    @property
    def is_stream_copy(self) -> bool:
        return self.codec is None

    @property
    def extension(self) -> str:
        return self.container

    @property
    def content_type(self) -> str:
        return f"audio/{self.container}"

# Fixed settings per supported target format
AUDIO_FORMATS = {
    "mp3": AudioProfile(container="mp3", codec="libmp3lame", quality=2),
    "wav": AudioProfile(container="wav", codec="pcm_s16le", sample_rate_hz=44100, channels=2),
    "ogg": AudioProfile(container="ogg", codec="libvorbis", quality=5),
}

def resolve_audio_profile(selector: Optional[str]) -> AudioProfile:
    """
    Maps a target format ('mp3', 'WAV') to an AudioProfile.

    Missing selector means mp3. Any other format is not rejected: the
    source audio is stream-copied into a file carrying the requested
    extension, and the caller gets whatever codec the upload had.
    """
    fmt = sanitize_extension((selector or "").strip()) or DEFAULT_FORMAT
    profile = AUDIO_FORMATS.get(fmt)
    if profile is None:
        logger.warning(f"Unsupported audio format '{selector}', stream-copying source audio into .{fmt}")
        profile = AudioProfile(container=fmt)
    return profile
