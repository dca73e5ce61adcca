from pathlib import Path
from typing import List

from ..domain.models import AudioProfile

def build_extraction_args(input_path: Path, output_path: Path, profile: AudioProfile) -> List[str]:
    """
    FFmpeg arguments (without the binary) for audio extraction.
    The output extension must match profile.container; ffmpeg picks the muxer from it.
    """
    # -vn: Disable video
    # -y: Overwrite output
    args = ["-y", "-i", str(input_path), "-vn"]

    if profile.is_stream_copy:
        args += ["-c:a", "copy"]
    else:
        args += ["-acodec", profile.codec]
        if profile.quality is not None:
            args += ["-q:a", str(profile.quality)]  # VBR quality factor
        if profile.sample_rate_hz is not None:
            args += ["-ar", str(profile.sample_rate_hz)]
        if profile.channels is not None:
            args += ["-ac", str(profile.channels)]

    args.append(str(output_path))
    return args
