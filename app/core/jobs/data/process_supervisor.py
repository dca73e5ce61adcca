import io
import logging
import subprocess
import threading
from collections import deque
from typing import IO, Deque, List

from ..domain.interfaces import IProcessSupervisor
from ..domain.models import ProcessOutcome

logger = logging.getLogger(__name__)

# How long to wait for the stderr drain thread after the process is gone
DRAIN_JOIN_TIMEOUT_SECONDS = 5.0

# ffmpeg has no line limit of its own; longer runs are split into several tail entries
MAX_DIAGNOSTIC_LINE_CHARS = 1000

class SubprocessSupervisor(IProcessSupervisor):
    """
    Runs one encoder process at a time per admission slot.

    While the process runs, a daemon thread drains stderr (ffmpeg writes
    progress constantly and would block on a full pipe) and the calling
    thread waits for exit with the deadline as timeout. The first of
    {exit, deadline} decides the outcome.
    """

    def __init__(self, max_concurrent: int = 2, diagnostic_tail_lines: int = 200):
        if max_concurrent < 1:
            raise ValueError(f"max_concurrent must be >= 1: {max_concurrent}")
        self._gate = threading.BoundedSemaphore(max_concurrent)
        self._tail_lines = diagnostic_tail_lines

    def run(self, executable: str, args: List[str], deadline_seconds: float) -> ProcessOutcome:
        # Admission wait is not part of the deadline; it starts once the process does
        with self._gate:
            return self._run_admitted(executable, args, deadline_seconds)

    def _run_admitted(self, executable: str, args: List[str], deadline_seconds: float) -> ProcessOutcome:
        cmd = [executable, *args]
        logger.info(f"Spawning encoder: {' '.join(cmd)}")

        try:
            process = subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
            )
        except OSError as e:
            logger.error(f"Encoder spawn failed ({executable}): {e}")
            return ProcessOutcome(spawn_error=f"{type(e).__name__}: {e}")

        tail: Deque[str] = deque(maxlen=self._tail_lines)
        drain = threading.Thread(
            target=self._drain,
            args=(process.stderr, tail),
            name=f"encoder-stderr-{process.pid}",
            daemon=True,
        )
        drain.start()

        timed_out = False
        exit_code = None
        try:
            exit_code = process.wait(timeout=deadline_seconds)
        except subprocess.TimeoutExpired:
            timed_out = True
            logger.error(f"Encoder (pid {process.pid}) exceeded {deadline_seconds}s deadline, killing")
            process.kill()
            process.wait()
        finally:
            # Anything unexpected (KeyboardInterrupt, etc.) must not leave an orphan behind
            if process.poll() is None:
                process.kill()
                process.wait()
            drain.join(timeout=DRAIN_JOIN_TIMEOUT_SECONDS)
            if drain.is_alive():
                logger.warning(f"stderr drain for pid {process.pid} did not finish")
            process.stderr.close()

        diagnostic_log = "\n".join(tail)
        if timed_out:
            return ProcessOutcome(timed_out=True, diagnostic_log=diagnostic_log)

        if exit_code != 0:
            logger.error(f"Encoder exited with code {exit_code}. Last output:\n{diagnostic_log}")
        else:
            logger.info(f"Encoder (pid {process.pid}) finished cleanly")
        return ProcessOutcome(exit_code=exit_code, diagnostic_log=diagnostic_log)

    @staticmethod
    def _drain(stream: IO[bytes], tail: Deque[str]) -> None:
        # Universal newlines: progress updates end in \r, not \n
        text = io.TextIOWrapper(stream, encoding="utf-8", errors="replace", newline=None)
        try:
            for chunk in iter(lambda: text.readline(MAX_DIAGNOSTIC_LINE_CHARS), ""):
                line = chunk.rstrip()
                if line:
                    logger.debug(f"ffmpeg: {line}")
                    tail.append(line)
        except (OSError, ValueError):
            # Pipe closed under us after a failed join; nothing left to read
            return
