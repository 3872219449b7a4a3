import os


class Config:
    # Database (credentials come from each request)
    DATABASE_DRIVER = os.getenv("DATABASE_DRIVER", "mysql+aiomysql")
    DATABASE_TYPE = os.getenv("DATABASE_TYPE", "MySQL")

    # Gemini
    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

    # Cloudinary (audio storage)
    CLOUDINARY_CLOUD_NAME = os.getenv("CLOUDINARY_CLOUD_NAME", "")
    CLOUDINARY_API_KEY = os.getenv("CLOUDINARY_API_KEY", "")
    CLOUDINARY_API_SECRET = os.getenv("CLOUDINARY_API_SECRET", "")
    CLOUDINARY_FOLDER = os.getenv("CLOUDINARY_FOLDER", "")

    # AssemblyAI (speech-to-text)
    ASSEMBLYAI_API_KEY = os.getenv("ASSEMBLYAI_API_KEY", "")
    ASSEMBLYAI_BASE_URL = os.getenv("ASSEMBLYAI_BASE_URL", "https://api.assemblyai.com/v2")

    # Transcription polling, in seconds
    TRANSCRIPTION_POLL_INTERVAL = float(os.getenv("TRANSCRIPTION_POLL_INTERVAL", "3"))
    TRANSCRIPTION_MAX_POLL_INTERVAL = float(os.getenv("TRANSCRIPTION_MAX_POLL_INTERVAL", "15"))
    TRANSCRIPTION_MAX_WAIT = float(os.getenv("TRANSCRIPTION_MAX_WAIT", "600"))

    HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "30"))

    # Temporary audio files (system temp dir when unset)
    UPLOAD_DIR = os.getenv("UPLOAD_DIR") or None

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
