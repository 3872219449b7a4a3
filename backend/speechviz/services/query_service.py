"""
SQL generation (first model call) and execution against the caller's database.
"""
import logging
import re

from sqlalchemy.exc import SQLAlchemyError

from speechviz.db.database import Database, error_detail
from speechviz.exceptions import QueryExecutionError
from speechviz.schemas.database import SchemaDescription
from speechviz.schemas.query import ExecutionResult, GeneratedQuery, VizType
from speechviz.services.llm_service import LLMService
from speechviz.services.prompt_builder import build_sql_prompt
from speechviz.services.response_parser import extract_sql, extract_viz_tag

logger = logging.getLogger(__name__)

WRITE_KEYWORDS = (
    "INSERT", "UPDATE", "DELETE", "DROP", "ALTER", "TRUNCATE",
    "CREATE", "REPLACE", "RENAME", "GRANT", "REVOKE",
)

# First keyword, skipping leading comments and parentheses
_LEADING_KEYWORD = re.compile(r"^(?:\s|--[^\n]*\n|/\*.*?\*/|\()*([A-Za-z]+)", re.DOTALL)


def leading_keyword(sql: str) -> str:
    match = _LEADING_KEYWORD.match(sql)
    return match.group(1).upper() if match else ""


async def generate_query(llm: LLMService, schema: SchemaDescription, utterance: str) -> GeneratedQuery:
    """Ask the model for SQL. ``sql`` is None when the answer has no ```sql block."""
    prompt = build_sql_prompt(schema, utterance)
    text = await llm.complete(prompt)

    generated = GeneratedQuery(
        sql=extract_sql(text),
        raw_output=text,
        viz_hint=extract_viz_tag(text),
    )
    if generated.sql is None:
        logger.info("No SQL found in model response")
    else:
        logger.info(f"Generated SQL: {generated.sql}")
    return generated


async def execute_query(db: Database, generated: GeneratedQuery) -> ExecutionResult:
    """Run generated SQL on the request's connection.

    Raises:
        QueryExecutionError: if the statement is rejected, carrying the SQL
    """
    sql = generated.sql
    viz_type = (generated.viz_hint or VizType.TABLE).value

    keyword = leading_keyword(sql)
    if keyword in WRITE_KEYWORDS:
        logger.warning(f"Refusing to run {keyword} statement: {sql}")
        raise QueryExecutionError(f"Only read queries are allowed, got {keyword}", sql, viz_type)

    try:
        rows = await db.execute_query(sql)
    except SQLAlchemyError as e:
        detail = error_detail(e)
        logger.error(f"SQL query failed: {detail}")
        logger.info(f"Offending SQL: {sql}")
        raise QueryExecutionError(detail, sql, viz_type)

    logger.info(f"Query returned {len(rows)} rows")
    return ExecutionResult(rows=rows, row_count=len(rows))
