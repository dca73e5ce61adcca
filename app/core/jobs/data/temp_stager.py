import logging
import secrets
import time
from pathlib import Path

from app.core.common.enums import TempFileRole
from app.core.shared_types import TempFile
from ..domain.interfaces import IFileStager
from ..domain.models import sanitize_extension

logger = logging.getLogger(__name__)

class TempFileStager(IFileStager):
    """
    Stages uploads in a flat temp directory.
    Names are <prefix>-<time_ns>-<random hex>.<ext>, so concurrent jobs never
    collide and no locking is needed.
    """

    def __init__(self, temp_dir: Path):
        self.temp_dir = Path(temp_dir)

    def _unique_path(self, prefix: str, extension: str) -> Path:
        ext = sanitize_extension(extension) or "bin"
        name = f"{prefix}-{time.time_ns()}-{secrets.token_hex(8)}.{ext}"
        return self.temp_dir / name

    def stage(self, data: bytes, extension: str) -> TempFile:
        self.temp_dir.mkdir(parents=True, exist_ok=True)
        path = self._unique_path("upload", extension)

        # "xb" fails loudly instead of clobbering another job's file
        fh = open(path, "xb")
        try:
            with fh:
                fh.write(data)
        except BaseException:
            # A half-written upload (disk full, quota) must not outlive the job
            path.unlink(missing_ok=True)
            raise

        logger.debug(f"Staged {len(data)} bytes at {path}")
        return TempFile(path=path, role=TempFileRole.INPUT)

    def allocate_output_path(self, extension: str) -> TempFile:
        self.temp_dir.mkdir(parents=True, exist_ok=True)
        return TempFile(path=self._unique_path("out", extension), role=TempFileRole.OUTPUT)

    def read(self, temp_file: TempFile) -> bytes:
        return temp_file.path.read_bytes()

    def release(self, temp_file: TempFile) -> None:
        if temp_file.released:
            return

        try:
            temp_file.path.unlink()
            logger.debug(f"Released {temp_file.role.value} temp file {temp_file.path}")
        except FileNotFoundError:
            pass
        except OSError as e:
            # Never surfaced: it would mask a conversion that may have succeeded
            logger.warning(f"Cleanup failed for {temp_file.path}: {e}")
        finally:
            temp_file.mark_released()

