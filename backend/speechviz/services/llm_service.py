import logging

import google.generativeai as genai

from speechviz.config import Config
from speechviz.errors import ErrorType
from speechviz.exceptions import AppException

logger = logging.getLogger(__name__)


class LLMService:
    def __init__(self):
        if Config.GEMINI_API_KEY:
            genai.configure(api_key=Config.GEMINI_API_KEY)
            self.model = genai.GenerativeModel(Config.GEMINI_MODEL)
        else:
            self.model = None

    async def complete(self, prompt: str) -> str:
        """Send a prompt to Gemini and return the full response text.

        Raises:
            AppException: On any error (not configured, rate limit, API error)
        """
        if not self.model:
            raise AppException(ErrorType.NOT_CONFIGURED, "Gemini API key not configured")

        try:
            response = await self.model.generate_content_async(prompt)
            text = response.text
        except ValueError as e:
            # response.text raises ValueError when the candidate has no text parts
            raise AppException(ErrorType.API_ERROR, f"Empty response from Gemini: {e}")
        except Exception as e:
            error_str = str(e)
            logger.error(f"Gemini error: {error_str}")
            # Detect rate limit errors
            lowered = error_str.lower()
            if "429" in error_str or "quota" in lowered or "rate limit" in lowered:
                raise AppException(ErrorType.RATE_LIMIT, "Rate limit exceeded")
            raise AppException(ErrorType.API_ERROR, error_str)

        logger.debug(f"Gemini response:\n{text}")
        return text


llm_service = LLMService()
