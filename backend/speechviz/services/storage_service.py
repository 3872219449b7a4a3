import asyncio
import logging
import os
import tempfile
from pathlib import Path

import cloudinary
import cloudinary.exceptions
import cloudinary.uploader
from fastapi import UploadFile

from speechviz.config import Config
from speechviz.errors import ErrorType
from speechviz.exceptions import AppException

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


class StorageService:
    """Persists uploaded audio to Cloudinary and returns its public URL."""

    def __init__(self):
        self.configured = bool(
            Config.CLOUDINARY_CLOUD_NAME and Config.CLOUDINARY_API_KEY and Config.CLOUDINARY_API_SECRET
        )
        self.folder = Config.CLOUDINARY_FOLDER
        self.upload_dir = Config.UPLOAD_DIR
        if self.configured:
            cloudinary.config(
                cloud_name=Config.CLOUDINARY_CLOUD_NAME,
                api_key=Config.CLOUDINARY_API_KEY,
                api_secret=Config.CLOUDINARY_API_SECRET,
                secure=True,
            )

    async def _save_temp(self, upload: UploadFile) -> Path:
        suffix = Path(upload.filename or "").suffix
        fd, name = tempfile.mkstemp(suffix=suffix, prefix="audio-", dir=self.upload_dir)
        path = Path(name)
        try:
            with os.fdopen(fd, "wb") as out:
                while True:
                    chunk = await upload.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    await asyncio.to_thread(out.write, chunk)
        except BaseException:
            path.unlink(missing_ok=True)
            raise
        return path

    async def upload_audio(self, upload: UploadFile) -> str:
        """Store the audio and return its secure URL.

        The local temporary copy is removed whether or not the upload succeeds.

        Raises:
            AppException: NOT_CONFIGURED without credentials, API_ERROR on upload failure
        """
        if not self.configured:
            raise AppException(ErrorType.NOT_CONFIGURED, "Cloudinary credentials not configured")

        path = await self._save_temp(upload)
        try:
            options = {"resource_type": "auto"}
            if self.folder:
                options["folder"] = self.folder
            result = await asyncio.to_thread(cloudinary.uploader.upload, str(path), **options)
        except cloudinary.exceptions.Error as e:
            logger.error(f"Cloudinary upload failed: {e}")
            raise AppException(ErrorType.API_ERROR, f"Audio upload failed: {e}")
        finally:
            path.unlink(missing_ok=True)

        audio_url = result["secure_url"]
        logger.info(f"Audio stored at {audio_url}")
        return audio_url


storage_service = StorageService()
