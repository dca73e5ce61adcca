import re
from typing import Optional
from urllib.parse import quote

from fastapi import HTTPException, UploadFile
from fastapi.responses import Response

from app.core.common.enums import ConversionErrorKind
from app.core.config.settings import settings
from app.core.jobs.domain.models import ConversionResult

HTTP_BAD_REQUEST = 400
HTTP_PAYLOAD_TOO_LARGE = 413
HTTP_INTERNAL_ERROR = 500

# Characters a quoted filename= value cannot carry as-is
_UNSAFE_FILENAME_CHARS = re.compile(r'[^\x20-\x7e]|["\\]')

def read_upload(file: Optional[UploadFile], limit: Optional[int] = None) -> bytes:
    """Reads an upload fully, enforcing the per-file size limit."""
    if file is None:
        raise HTTPException(status_code=HTTP_BAD_REQUEST, detail="No file uploaded")

    limit = settings.MAX_UPLOAD_BYTES if limit is None else limit
    # One extra byte tells us whether the upload is over the limit
    data = file.file.read(limit + 1)
    if len(data) > limit:
        raise HTTPException(
            status_code=HTTP_PAYLOAD_TOO_LARGE,
            detail=f"File too large (limit is {limit} bytes)",
        )
    return data

def content_disposition(filename: str) -> str:
    """attachment header with an ASCII filename= for old clients and the exact name in filename*=."""
    fallback = _UNSAFE_FILENAME_CHARS.sub("_", filename)
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"

def result_to_response(result: ConversionResult) -> Response:
    """Success -> file download; failure -> HTTPException carrying the cause."""
    if not result.ok:
        status = HTTP_BAD_REQUEST if result.error_kind == ConversionErrorKind.NO_INPUT_PROVIDED else HTTP_INTERNAL_ERROR
        raise HTTPException(status_code=status, detail=result.message)

    return Response(
        content=result.data,
        media_type=result.content_type,
        headers={"Content-Disposition": content_disposition(result.filename)},
    )
