# File: app/core/config/settings.py

import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class EncoderConfig:
    """
    Immutable snapshot of everything the conversion core needs.
    Built once at startup and handed to the ConversionManager.
    """
    ffmpeg_binary: str
    temp_dir: Path
    timeout_seconds: float = 300.0
    max_concurrent_encodes: int = 2
    diagnostic_tail_lines: int = 200

    def __post_init__(self):
        if not self.ffmpeg_binary:
            raise ValueError("Encoder binary path cannot be empty.")
        if self.timeout_seconds <= 0:
            raise ValueError(f"Timeout must be positive: {self.timeout_seconds}")
        if self.max_concurrent_encodes < 1:
            raise ValueError(f"Need at least one encoder slot: {self.max_concurrent_encodes}")
        if self.diagnostic_tail_lines < 1:
            raise ValueError(f"Diagnostic tail must keep at least one line: {self.diagnostic_tail_lines}")


class Settings:
    # --- Paths ---
    TEMP_DIR: Path = Path(os.getenv("CONVERTER_TEMP_DIR", tempfile.gettempdir()))

    # --- External Tools ---
    # Explicit env var first, then whatever ffmpeg is on PATH, then the bare name
    FFMPEG_BINARY: str = os.getenv("FFMPEG_BINARY_PATH", shutil.which("ffmpeg") or "ffmpeg")

    # --- Encoding Limits ---
    ENCODE_TIMEOUT_SECONDS: float = float(os.getenv("ENCODE_TIMEOUT_SECONDS", "300"))
    MAX_CONCURRENT_ENCODES: int = int(os.getenv("MAX_CONCURRENT_ENCODES", str(os.cpu_count() or 2)))
    DIAGNOSTIC_TAIL_LINES: int = int(os.getenv("DIAGNOSTIC_TAIL_LINES", "200"))

    # --- HTTP ---
    MAX_UPLOAD_BYTES: int = int(os.getenv("MAX_UPLOAD_BYTES", str(500 * 1024 * 1024)))
    HOST: str = os.getenv("CONVERTER_HOST", "127.0.0.1")
    PORT: int = int(os.getenv("PORT", "3000"))

    # --- Logging ---
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    def encoder_config(self) -> EncoderConfig:
        """Freezes the encoder-related settings into an EncoderConfig."""
        return EncoderConfig(
            ffmpeg_binary=self.FFMPEG_BINARY,
            temp_dir=self.TEMP_DIR,
            timeout_seconds=self.ENCODE_TIMEOUT_SECONDS,
            max_concurrent_encodes=self.MAX_CONCURRENT_ENCODES,
            diagnostic_tail_lines=self.DIAGNOSTIC_TAIL_LINES,
        )

    def ensure_dirs(self):
        """Creates the temp directory if it doesn't exist."""
        self.TEMP_DIR.mkdir(parents=True, exist_ok=True)


settings = Settings()
