# File: app/core/common/enums.py

from enum import Enum, unique

@unique
class JobKind(str, Enum):
    VIDEO_TRANSCODE = "video_transcode"
    AUDIO_EXTRACTION = "audio_extraction"

@unique
class JobState(str, Enum):
    CREATED = "created"
    STAGED = "staged"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    TIMED_OUT = "timed_out"
    CLEANED = "cleaned"

@unique
class TempFileRole(str, Enum):
    INPUT = "input"
    OUTPUT = "output"

@unique
class TempFileState(str, Enum):
    CREATED = "created"
    IN_USE = "in_use"
    RELEASED = "released"

@unique
class ConversionErrorKind(str, Enum):
    NO_INPUT_PROVIDED = "no_input_provided"
    SPAWN_FAILURE = "spawn_failure"
    PROCESS_EXITED_NON_ZERO = "process_exited_non_zero"
    PROCESS_TIMED_OUT = "process_timed_out"
    OUTPUT_READ_FAILURE = "output_read_failure"
