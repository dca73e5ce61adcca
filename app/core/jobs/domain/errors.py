from typing import Optional

from app.core.common.enums import ConversionErrorKind


class ConversionError(RuntimeError):
    """
    Raised by callers that prefer exceptions over ConversionResult values.
    Carries the failure kind and, for non-zero exits, the encoder's exit code.
    """

    def __init__(self, kind: ConversionErrorKind, message: str, exit_code: Optional[int] = None):
        self.kind = kind
        self.message = message
        self.exit_code = exit_code
        super().__init__(message)
