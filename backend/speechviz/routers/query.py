import logging

from fastapi import APIRouter

from speechviz.db.database import Database
from speechviz.errors import ErrorType
from speechviz.exceptions import AppException
from speechviz.schemas.query import (
    ProcessTranscriptionRequest,
    ProcessTranscriptionResponse,
    VizType,
)
from speechviz.services.llm_service import llm_service
from speechviz.services.query_service import execute_query, generate_query
from speechviz.services.schema_service import introspect_schema
from speechviz.services.viz_service import classify_visualization

logger = logging.getLogger(__name__)

router = APIRouter(tags=["query"])


@router.post("/process-transcription", response_model=ProcessTranscriptionResponse)
async def process_transcription(request: ProcessTranscriptionRequest):
    transcription = (request.transcription or "").strip()
    config = request.dbConfig
    if not transcription or config is None or not config.is_complete():
        message = "Missing transcription or DB config"
        raise AppException(ErrorType.INVALID_INPUT, message, payload={"error": message})

    logger.info(f"Received transcription: {transcription}")

    async with Database.from_config(config) as db:
        # 1. Ground the prompt in this database's schema
        schema = await introspect_schema(db)

        # 2. Generate SQL
        generated = await generate_query(llm_service, schema, transcription)
        if generated.sql is None:
            return ProcessTranscriptionResponse(
                sql_query=None,
                results=None,
                viz_type=generated.viz_hint or VizType.TABLE,
                explanation=generated.raw_output,
            )

        # 3. Execute on the same connection the schema came from
        result = await execute_query(db, generated)

    # 4. Pick a visualization for the results
    decision = await classify_visualization(llm_service, transcription, generated, schema, result)

    return ProcessTranscriptionResponse(
        sql_query=generated.sql,
        results=result.rows,
        viz_type=decision.viz_type,
        explanation=decision.explanation,
    )
