import logging

from fastapi import APIRouter, File, UploadFile

from speechviz.errors import ErrorType
from speechviz.exceptions import AppException
from speechviz.schemas.audio import UploadResponse
from speechviz.services.storage_service import storage_service
from speechviz.services.transcription_service import transcription_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["audio"])


@router.post("/upload", response_model=UploadResponse)
async def upload(audio: UploadFile | None = File(None)):
    """Store an audio recording and transcribe it."""
    if audio is None or not audio.filename:
        raise AppException(ErrorType.INVALID_INPUT, "No audio file uploaded")

    try:
        # 1. Persist to object storage
        audio_url = await storage_service.upload_audio(audio)

        # 2. Transcribe and wait for the job to finish
        transcription = await transcription_service.transcribe(audio_url)
    except AppException as e:
        logger.error(f"Error processing audio: {e.message}")
        raise
    except Exception as e:
        logger.error(f"Error processing audio: {e}")
        raise AppException(ErrorType.INTERNAL_ERROR, "Error processing audio")

    logger.info(f"Transcription: {transcription}")
    return UploadResponse(audio_url=audio_url, transcription=transcription)
