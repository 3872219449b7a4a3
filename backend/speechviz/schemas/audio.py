from enum import Enum

from pydantic import BaseModel


class TranscriptionStatus(str, Enum):
    QUEUED = "queued"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class TranscriptionJob(BaseModel):
    id: str
    # Open-ended: any status other than completed/error keeps the job polling
    status: str
    text: str | None = None
    error: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in (TranscriptionStatus.COMPLETED, TranscriptionStatus.ERROR)


class UploadResponse(BaseModel):
    audio_url: str
    transcription: str
