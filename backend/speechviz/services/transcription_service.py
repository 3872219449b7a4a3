"""
Speech-to-text through AssemblyAI's asynchronous transcript API.

A job is submitted with the audio URL and polled until it reaches
``completed`` or ``error``. Polling backs off exponentially and gives up
after a maximum wait.
"""
import logging

import httpx
from pydantic import ValidationError
from tenacity import (
    AsyncRetrying,
    RetryError,
    before_sleep_log,
    retry_if_result,
    stop_before_delay,
    wait_exponential,
)

from speechviz.config import Config
from speechviz.errors import ErrorType
from speechviz.exceptions import AppException
from speechviz.schemas.audio import TranscriptionJob, TranscriptionStatus

logger = logging.getLogger(__name__)


class TranscriptionService:
    def __init__(
        self,
        poll_interval: float | None = None,
        max_poll_interval: float | None = None,
        max_wait: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = Config.ASSEMBLYAI_API_KEY
        self.base_url = Config.ASSEMBLYAI_BASE_URL
        self.timeout = Config.HTTP_TIMEOUT
        self.poll_interval = Config.TRANSCRIPTION_POLL_INTERVAL if poll_interval is None else poll_interval
        self.max_poll_interval = (
            Config.TRANSCRIPTION_MAX_POLL_INTERVAL if max_poll_interval is None else max_poll_interval
        )
        self.max_wait = Config.TRANSCRIPTION_MAX_WAIT if max_wait is None else max_wait
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers={"authorization": self.api_key},
            timeout=self.timeout,
            transport=self._transport,
        )

    async def submit(self, client: httpx.AsyncClient, audio_url: str) -> TranscriptionJob:
        """Create a transcription job for a publicly reachable audio URL."""
        response = await client.post("/transcript", json={"audio_url": audio_url})
        response.raise_for_status()
        job = TranscriptionJob.model_validate(response.json())
        logger.info(f"Transcription job {job.id} submitted ({job.status})")
        return job

    async def fetch(self, client: httpx.AsyncClient, job_id: str) -> TranscriptionJob:
        response = await client.get(f"/transcript/{job_id}")
        response.raise_for_status()
        return TranscriptionJob.model_validate(response.json())

    async def wait_for_completion(self, client: httpx.AsyncClient, job_id: str) -> TranscriptionJob:
        """Poll a job until it reaches a terminal status.

        Raises:
            AppException: TRANSCRIPTION_TIMEOUT if the next poll would start after ``max_wait``
        """
        retrying = AsyncRetrying(
            retry=retry_if_result(lambda job: not job.is_terminal),
            wait=wait_exponential(
                multiplier=self.poll_interval,
                min=self.poll_interval,
                max=self.max_poll_interval,
            ),
            # Stop before a sleep that would run past max_wait
            stop=stop_before_delay(self.max_wait),
            before_sleep=before_sleep_log(logger, logging.DEBUG),
        )
        try:
            return await retrying(self.fetch, client, job_id)
        except RetryError:
            logger.error(f"Transcription job {job_id} still running after {self.max_wait}s")
            raise AppException(
                ErrorType.TRANSCRIPTION_TIMEOUT,
                f"Transcription timed out after {self.max_wait:g} seconds",
            )

    async def transcribe(self, audio_url: str) -> str:
        """Transcribe audio at a URL and return the transcript text.

        Raises:
            AppException: NOT_CONFIGURED, API_ERROR, TRANSCRIPTION_FAILED or TRANSCRIPTION_TIMEOUT
        """
        if not self.api_key:
            raise AppException(ErrorType.NOT_CONFIGURED, "AssemblyAI API key not configured")

        try:
            async with self._client() as client:
                job = await self.submit(client, audio_url)
                job = await self.wait_for_completion(client, job.id)
        except httpx.HTTPError as e:
            logger.error(f"Transcription service error: {e}")
            raise AppException(ErrorType.API_ERROR, f"Transcription service request failed: {e}")
        except ValidationError as e:
            raise AppException(ErrorType.API_ERROR, f"Unexpected transcription service response: {e}")

        if job.status == TranscriptionStatus.ERROR:
            logger.error(f"Transcription job {job.id} failed: {job.error}")
            raise AppException(ErrorType.TRANSCRIPTION_FAILED, f"Transcription failed: {job.error}")

        logger.info(f"Transcription job {job.id} completed")
        return job.text or ""


transcription_service = TranscriptionService()
