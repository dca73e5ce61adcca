from dataclasses import dataclass, field
from pathlib import Path

from app.core.common.enums import TempFileRole, TempFileState

@dataclass(eq=False)
class TempFile:
    """
    Entity representing one staged file in the temp namespace.
    Owned by exactly one ConversionJob; moves CREATED -> IN_USE -> RELEASED.
    """
    path: Path
    role: TempFileRole
    state: TempFileState = field(default=TempFileState.CREATED)

    def __post_init__(self):
        if str(self.path).strip() == "." or str(self.path).strip() == "":
             raise ValueError("File path cannot be empty.")

    @property
    def released(self) -> bool:
        return self.state == TempFileState.RELEASED

    def exists(self) -> bool:
        return self.path.exists()

    def mark_in_use(self) -> None:
        if self.released:
            raise RuntimeError(f"Temp file already released: {self.path}")
        self.state = TempFileState.IN_USE

    def mark_released(self) -> None:
        self.state = TempFileState.RELEASED
