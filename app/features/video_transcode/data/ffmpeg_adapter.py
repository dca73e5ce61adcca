from pathlib import Path
from typing import List

from ..domain.models import VideoProfile

def build_transcode_args(input_path: Path, output_path: Path, profile: VideoProfile) -> List[str]:
    """
    FFmpeg arguments (without the binary) for a video transcode.

    -y: Overwrite output files without asking
    -vf scale=-2:H: Scale to the target height, keep aspect ratio, even width
    -b:v / -c:v / -preset: Video bitrate, codec and speed/quality trade-off
    -c:a / -b:a: Re-encode audio to a fixed codec and bitrate
    """
    return [
        "-y",
        "-i", str(input_path),
        "-vf", f"scale=-2:{profile.height}",
        "-b:v", profile.video_bitrate,
        "-c:v", profile.video_codec,
        "-preset", profile.encoder_preset,
        "-c:a", profile.audio_codec,
        "-b:a", profile.audio_bitrate,
        str(output_path),
    ]
