import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from app.core.http import read_upload, result_to_response
from app.core.jobs.service.manager import ConversionManager, get_conversion_manager
from .api import transcode_video

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/transcode")
def transcode(
    file: Optional[UploadFile] = File(None),
    quality: Optional[str] = Form(None),
    manager: ConversionManager = Depends(get_conversion_manager),
):
    """Transcode an uploaded video to MP4 at the requested quality preset"""
    data = read_upload(file)
    logger.info(f"POST /transcode: {file.filename} ({len(data)} bytes), quality={quality!r}")

    result = transcode_video(data, filename=file.filename or "input", quality=quality, manager=manager)
    return result_to_response(result)
