import logging

from fastapi import Request

from speechviz.schemas.database import DatabaseConfig

logger = logging.getLogger(__name__)


class DatabaseConfigStore:
    """Single overwritable slot holding the last saved database config.

    Only used as a fallback by the schema diagram endpoint. Callers that
    need a specific database should send its config with the request.
    """

    def __init__(self):
        self._config: DatabaseConfig | None = None

    def get(self) -> DatabaseConfig | None:
        return self._config

    def set(self, config: DatabaseConfig):
        self._config = config.model_copy()
        logger.info(f"DB config saved: {config.user}@{config.host}/{config.database}")

    def clear(self):
        self._config = None


def get_config_store(request: Request) -> DatabaseConfigStore:
    return request.app.state.config_store
