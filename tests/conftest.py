# File: tests/conftest.py

import json
import os
import stat
import sys
from pathlib import Path

import pytest

from app.core.config.settings import EncoderConfig
from app.core.jobs.service.manager import ConversionManager

# A stand-in for ffmpeg. Behaviour is picked from the script's own file name
# (fake-ffmpeg-<mode>) and every invocation's argv is recorded next to it.
FAKE_ENCODER_BODY = r'''
import json
import sys
import time
from pathlib import Path

script = Path(sys.argv[0])
mode = script.name.split("fake-ffmpeg-", 1)[1]
args = sys.argv[1:]
script.with_name(script.name + ".args.json").write_text(json.dumps(args))

src = Path(args[args.index("-i") + 1])
out = Path(args[-1])

for i in range(3):
    sys.stderr.write(f"frame={i} fps=0.0 q=28.0 size=0kB time=00:00:0{i}.00\n")
sys.stderr.flush()

if mode == "ok":
    out.write_bytes(b"converted:" + src.read_bytes())
    sys.exit(0)
elif mode == "fail":
    out.write_bytes(b"partial")
    sys.stderr.write("Invalid data found when processing input\n")
    sys.exit(3)
elif mode == "hang":
    out.write_bytes(b"partial")
    time.sleep(60)
elif mode == "no-output":
    sys.exit(0)
elif mode == "chatty":
    # Far more than a pipe buffer of stderr before producing output
    for i in range(20000):
        sys.stderr.write(f"frame={i} fps=25.0 q=28.0 size={i}kB bitrate=1000.0kbits/s speed=1.0x\n")
    out.write_bytes(b"converted:" + src.read_bytes())
    sys.exit(0)
'''


@pytest.fixture
def make_fake_encoder(tmp_path):
    """
    Factory: make_fake_encoder("ok") -> Path of an executable fake ffmpeg.
    Modes: ok, fail, hang, no-output, chatty.
    """
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir(exist_ok=True)

    def _make(mode: str) -> Path:
        script = bin_dir / f"fake-ffmpeg-{mode}"
        script.write_text(f"#!{sys.executable}\n{FAKE_ENCODER_BODY}")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _make


@pytest.fixture
def recorded_args():
    """recorded_args(encoder) -> argv (minus the binary) of the last run of a fake encoder."""

    def _read(encoder: Path) -> list:
        return json.loads(encoder.with_name(encoder.name + ".args.json").read_text())

    return _read


@pytest.fixture
def staging_dir(tmp_path):
    path = tmp_path / "staging"
    path.mkdir()
    return path


@pytest.fixture
def make_manager(staging_dir):
    """Factory: a ConversionManager wired to a given encoder, staging into staging_dir."""

    def _make(encoder, timeout_seconds: float = 30.0, max_concurrent: int = 4) -> ConversionManager:
        config = EncoderConfig(
            ffmpeg_binary=str(encoder),
            temp_dir=staging_dir,
            timeout_seconds=timeout_seconds,
            max_concurrent_encodes=max_concurrent,
        )
        return ConversionManager(config)

    return _make


@pytest.fixture
def sample_video_bytes():
    return os.urandom(4096)
