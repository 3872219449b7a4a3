"""
Visualization selection (second model call).
"""
import logging

from speechviz.exceptions import AppException
from speechviz.schemas.database import SchemaDescription
from speechviz.schemas.query import ExecutionResult, GeneratedQuery, VisualizationDecision, VizType
from speechviz.services.llm_service import LLMService
from speechviz.services.prompt_builder import SAMPLE_ROWS, build_viz_prompt
from speechviz.services.response_parser import extract_viz_tag

logger = logging.getLogger(__name__)


async def classify_visualization(
    llm: LLMService,
    utterance: str,
    generated: GeneratedQuery,
    schema: SchemaDescription,
    result: ExecutionResult,
) -> VisualizationDecision:
    """Pick a chart type for executed results.

    Falls back to the tag from the SQL response, then to ``table``. A model
    failure here keeps the results and uses the fallback tag.
    """
    fallback = generated.viz_hint or VizType.TABLE
    prompt = build_viz_prompt(utterance, generated.sql, schema, result.rows[:SAMPLE_ROWS])

    try:
        text = await llm.complete(prompt)
    except AppException as e:
        logger.warning(f"Visualization suggestion failed, using {fallback.value}: {e.message}")
        return VisualizationDecision(viz_type=fallback, explanation=generated.raw_output)

    viz_type = extract_viz_tag(text) or fallback
    logger.info(f"Visualization suggestion: {viz_type.value}")
    return VisualizationDecision(viz_type=viz_type, explanation=text)
