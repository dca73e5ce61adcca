from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from app.core.common.enums import JobKind
from app.core.shared_types import TempFile
from .models import EncodeProfile, ProcessOutcome

class IFileStager(ABC):
    """
    Contract for the temp namespace the encoder reads from and writes to.
    """

    @abstractmethod
    def stage(self, data: bytes, extension: str) -> TempFile:
        """Writes bytes to a fresh, collision-free path and returns it as an INPUT TempFile."""
        pass

    @abstractmethod
    def allocate_output_path(self, extension: str) -> TempFile:
        """Reserves a fresh path for the encoder to create. The file is NOT created."""
        pass

    @abstractmethod
    def read(self, temp_file: TempFile) -> bytes:
        """Reads the whole file into memory. Raises OSError if unreadable."""
        pass

    @abstractmethod
    def release(self, temp_file: TempFile) -> None:
        """
        Deletes the file if present. Idempotent: a missing file is not an error,
        and cleanup errors are logged, never raised.
        """
        pass

    @contextmanager
    def staged(self, data: bytes, extension: str) -> Iterator[TempFile]:
        """Scoped guard: stages the input and always releases it on exit."""
        temp_file = self.stage(data, extension)
        try:
            temp_file.mark_in_use()
            yield temp_file
        finally:
            self.release(temp_file)

    @contextmanager
    def reserved(self, extension: str) -> Iterator[TempFile]:
        """Scoped guard: reserves an output path and always releases it on exit."""
        temp_file = self.allocate_output_path(extension)
        try:
            temp_file.mark_in_use()
            yield temp_file
        finally:
            self.release(temp_file)

class IProfileResolver(ABC):
    @abstractmethod
    def resolve(self, job_kind: JobKind, selector: Optional[str]) -> EncodeProfile:
        """Maps a preset name / format string to concrete settings. Never fails."""
        pass

class IArgumentBuilder(ABC):
    @abstractmethod
    def build(self, job_kind: JobKind, input_path: Path, output_path: Path, profile: EncodeProfile) -> List[str]:
        """Pure: identical inputs always produce identical argument vectors."""
        pass

class IProcessSupervisor(ABC):
    @abstractmethod
    def run(self, executable: str, args: List[str], deadline_seconds: float) -> ProcessOutcome:
        """
        Runs the executable to completion, or kills it once the deadline
        (measured from process start) elapses.

        Returns:
            ProcessOutcome with exactly one of exit_code / timed_out / spawn_error.
        """
        pass
