from enum import Enum


class ErrorType(Enum):
    INVALID_INPUT = "invalid_input"
    RATE_LIMIT = "rate_limit"
    NOT_CONFIGURED = "not_configured"
    API_ERROR = "api_error"
    DB_CONNECTION = "db_connection"
    SCHEMA_ERROR = "schema_error"
    TRANSCRIPTION_FAILED = "transcription_failed"
    TRANSCRIPTION_TIMEOUT = "transcription_timeout"
    QUERY_EXECUTION = "query_execution"
    INTERNAL_ERROR = "internal_error"


# Map error types to HTTP status codes
ERROR_STATUS_MAP = {
    ErrorType.INVALID_INPUT: 400,
    ErrorType.RATE_LIMIT: 429,
    ErrorType.NOT_CONFIGURED: 503,
    ErrorType.API_ERROR: 500,
    ErrorType.DB_CONNECTION: 500,
    ErrorType.SCHEMA_ERROR: 500,
    ErrorType.TRANSCRIPTION_FAILED: 500,
    ErrorType.TRANSCRIPTION_TIMEOUT: 504,
    ErrorType.QUERY_EXECUTION: 500,
    ErrorType.INTERNAL_ERROR: 500,
}
