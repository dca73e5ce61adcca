import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from app.core.http import read_upload, result_to_response
from app.core.jobs.service.manager import ConversionManager, get_conversion_manager
from .api import extract_audio

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/extract-audio")
def extract_audio_route(
    file: Optional[UploadFile] = File(None),
    format: Optional[str] = Form(None),
    manager: ConversionManager = Depends(get_conversion_manager),
):
    """Extract the audio track of an upload as mp3, wav or ogg"""
    data = read_upload(file)
    logger.info(f"POST /extract-audio: {file.filename} ({len(data)} bytes), format={format!r}")

    result = extract_audio(data, filename=file.filename or "input", fmt=format, manager=manager)
    return result_to_response(result)
