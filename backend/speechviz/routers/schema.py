import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from speechviz.db.database import Database
from speechviz.errors import ErrorType
from speechviz.exceptions import AppException
from speechviz.schemas.database import DatabaseConfig, SchemaDiagramRequest, SchemaDiagramResponse
from speechviz.services.config_store import DatabaseConfigStore, get_config_store
from speechviz.services.diagram_service import render_mermaid
from speechviz.services.schema_service import introspect_schema

logger = logging.getLogger(__name__)

router = APIRouter(tags=["schema"])


@router.post("/set-db-config", response_class=PlainTextResponse)
async def set_db_config(
    config: DatabaseConfig | None = None,
    store: DatabaseConfigStore = Depends(get_config_store),
):
    """Save a database config as the default for the schema diagram."""
    if config is None or not config.is_complete():
        missing = config.missing_fields() if config else ["host", "user", "database"]
        logger.warning(f"Incomplete DB config received, missing: {', '.join(missing)}")
        raise AppException(ErrorType.INVALID_INPUT, "Incomplete DB config")

    store.set(config)
    return "DB config saved."


@router.post("/schema-mermaid", response_model=SchemaDiagramResponse)
async def schema_mermaid(
    request: SchemaDiagramRequest | None = None,
    store: DatabaseConfigStore = Depends(get_config_store),
):
    """Render the database schema as a Mermaid ER diagram."""
    config = request.dbConfig if request and request.dbConfig else store.get()
    if config is None or not config.is_complete():
        raise AppException(ErrorType.INVALID_INPUT, "Missing DB config")

    async with Database.from_config(config) as db:
        schema = await introspect_schema(db)

    return SchemaDiagramResponse(mermaid=render_mermaid(schema))
