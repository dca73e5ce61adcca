import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import PurePath
from typing import Optional

from app.core.common.enums import JobKind, ConversionErrorKind
from .errors import ConversionError

_EXTENSION_CHARS = re.compile(r"[^A-Za-z0-9]")


class EncodeProfile(ABC):
    """
    Fully resolved encoder settings for one job.
    Concrete profiles live in their feature (video_transcode, audio_extraction).
    """

    @property
    @abstractmethod
    def extension(self) -> str:
        """File extension (without dot) of the encoder output."""
        pass

    @property
    @abstractmethod
    def content_type(self) -> str:
        """MIME type handed back to the caller on success."""
        pass


def sanitize_extension(raw: Optional[str]) -> str:
    """Keeps ASCII alphanumerics only, lower-cased. May return an empty string."""
    return _EXTENSION_CHARS.sub("", raw or "").lower()


@dataclass(frozen=True)
class ConversionRequest:
    """
    One upload to convert. Immutable once constructed.
    """
    source_bytes: bytes
    job_kind: JobKind
    profile_selector: Optional[str] = None
    source_filename: str = "input"

    @property
    def source_extension_hint(self) -> str:
        # Best effort: "clip.MOV" -> "mov", "noext" -> "noext" (same as split('.').pop())
        name = PurePath(self.source_filename or "input").name
        return sanitize_extension(name.rsplit(".", 1)[-1]) or "bin"

    @property
    def output_stem(self) -> str:
        # ".." would otherwise become "...mp4"
        stem = PurePath(self.source_filename or "").stem.rstrip(".")
        return stem or "output"


@dataclass(frozen=True)
class ProcessOutcome:
    """
    Terminal state of one encoder run.
    Exactly one of: normal exit, timeout, spawn failure.
    """
    exit_code: Optional[int] = None
    timed_out: bool = False
    diagnostic_log: str = ""
    spawn_error: Optional[str] = None

    def __post_init__(self):
        states = [self.exit_code is not None, self.timed_out, self.spawn_error is not None]
        if sum(states) != 1:
            raise ValueError(
                f"ProcessOutcome needs exactly one terminal state "
                f"(exit_code={self.exit_code}, timed_out={self.timed_out}, spawn_error={self.spawn_error!r})"
            )

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


@dataclass(frozen=True)
class ConversionResult:
    """
    Either converted bytes with a content type, or a failure description. Never both.
    """
    data: Optional[bytes] = None
    content_type: Optional[str] = None
    filename: Optional[str] = None
    error_kind: Optional[ConversionErrorKind] = None
    message: Optional[str] = None
    exit_code: Optional[int] = None

    def __post_init__(self):
        if (self.data is None) == (self.error_kind is None):
            raise ValueError("ConversionResult must be either a success or a failure.")
        if self.data is not None and not self.content_type:
            raise ValueError("A successful ConversionResult needs a content type.")

    @classmethod
    def success(cls, data: bytes, content_type: str, filename: str) -> "ConversionResult":
        return cls(data=data, content_type=content_type, filename=filename)

    @classmethod
    def failure(cls, error_kind: ConversionErrorKind, message: str, exit_code: Optional[int] = None) -> "ConversionResult":
        return cls(error_kind=error_kind, message=message, exit_code=exit_code)

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    def raise_for_failure(self) -> "ConversionResult":
        """Returns self on success, raises ConversionError otherwise."""
        if not self.ok:
            raise ConversionError(self.error_kind, self.message, exit_code=self.exit_code)
        return self
