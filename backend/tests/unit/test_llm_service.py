import pytest
from unittest.mock import patch, MagicMock, AsyncMock, PropertyMock
from speechviz.services.llm_service import LLMService
from speechviz.exceptions import AppException
from speechviz.errors import ErrorType


def make_service(mock_config, mock_genai, model):
    mock_config.GEMINI_API_KEY = "test-key"
    mock_config.GEMINI_MODEL = "gemini-2.5-flash"
    mock_genai.GenerativeModel.return_value = model
    return LLMService()


class TestLLMService:
    """Tests for the Gemini client."""

    @pytest.mark.asyncio
    async def test_no_api_key(self):
        """Test that service raises exception when no API key is configured."""
        with patch("speechviz.services.llm_service.Config") as mock_config:
            mock_config.GEMINI_API_KEY = None
            service = LLMService()

            with pytest.raises(AppException) as exc_info:
                await service.complete("Show me sales")

            assert exc_info.value.error_type == ErrorType.NOT_CONFIGURED
            assert "not configured" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_complete_success(self):
        """Test the full response text is returned."""
        mock_response = MagicMock()
        mock_response.text = "```sql\nSELECT 1\n```"

        with patch("speechviz.services.llm_service.Config") as mock_config, \
             patch("speechviz.services.llm_service.genai") as mock_genai:
            mock_model = MagicMock()
            mock_model.generate_content_async = AsyncMock(return_value=mock_response)
            service = make_service(mock_config, mock_genai, mock_model)

            result = await service.complete("prompt")

            assert result == "```sql\nSELECT 1\n```"
            mock_model.generate_content_async.assert_awaited_once_with("prompt")
            mock_genai.configure.assert_called_once_with(api_key="test-key")

    @pytest.mark.asyncio
    async def test_empty_response(self):
        """Test handling when Gemini returns no text parts."""
        mock_response = MagicMock()
        type(mock_response).text = PropertyMock(side_effect=ValueError("no parts"))

        with patch("speechviz.services.llm_service.Config") as mock_config, \
             patch("speechviz.services.llm_service.genai") as mock_genai:
            mock_model = MagicMock()
            mock_model.generate_content_async = AsyncMock(return_value=mock_response)
            service = make_service(mock_config, mock_genai, mock_model)

            with pytest.raises(AppException) as exc_info:
                await service.complete("prompt")

            assert exc_info.value.error_type == ErrorType.API_ERROR

    @pytest.mark.asyncio
    async def test_api_exception(self):
        """Test handling of API exceptions."""
        with patch("speechviz.services.llm_service.Config") as mock_config, \
             patch("speechviz.services.llm_service.genai") as mock_genai:
            mock_model = MagicMock()
            mock_model.generate_content_async = AsyncMock(side_effect=Exception("Failed to generate content"))
            service = make_service(mock_config, mock_genai, mock_model)

            with pytest.raises(AppException) as exc_info:
                await service.complete("prompt")

            assert exc_info.value.error_type == ErrorType.API_ERROR
            assert "Failed to generate content" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_rate_limit_exception(self):
        """Test handling of rate limit errors."""
        with patch("speechviz.services.llm_service.Config") as mock_config, \
             patch("speechviz.services.llm_service.genai") as mock_genai:
            mock_model = MagicMock()
            mock_model.generate_content_async = AsyncMock(side_effect=Exception("429 quota exceeded"))
            service = make_service(mock_config, mock_genai, mock_model)

            with pytest.raises(AppException) as exc_info:
                await service.complete("prompt")

            assert exc_info.value.error_type == ErrorType.RATE_LIMIT
