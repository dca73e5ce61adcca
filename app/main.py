import logging

import uvicorn
from fastapi import FastAPI

from app.core.config.settings import settings
from app.core.logging_config import configure_logging
from app.features.audio_extraction.service.routes import router as audio_router
from app.features.video_transcode.service.routes import router as video_router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    configure_logging(settings.LOG_LEVEL)
    settings.ensure_dirs()
    logger.info(f"Using ffmpeg at: {settings.FFMPEG_BINARY}")

    app = FastAPI(
        title="Media Converter",
        description="Transcodes uploaded videos and extracts audio tracks with ffmpeg",
    )
    app.include_router(video_router, tags=["video"])
    app.include_router(audio_router, tags=["audio"])

    @app.get("/health")
    def health():
        return {"status": "ok", "encoder": settings.FFMPEG_BINARY}

    return app


app = create_app()


if __name__ == "__main__":
    logger.info(f"🚀 File Converter server running on http://{settings.HOST}:{settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
