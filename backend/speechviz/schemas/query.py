from enum import Enum
from typing import Any

from pydantic import BaseModel

from speechviz.schemas.database import DatabaseConfig


class VizType(str, Enum):
    BAR = "bar"
    PIE = "pie"
    LINE = "line"
    TABLE = "table"
    KPI = "kpi"
    GEOMAP = "geomap"
    HEATMAP = "heatmap"
    TREEMAP = "treemap"
    SCATTER = "scatter"
    BUBBLE = "bubble"
    RADAR = "radar"
    FUNNEL = "funnel"
    TEXT_SUMMARY = "text-summary"


class ProcessTranscriptionRequest(BaseModel):
    transcription: str | None = None
    dbConfig: DatabaseConfig | None = None


class ProcessTranscriptionResponse(BaseModel):
    sql_query: str | None = None
    results: list[dict[str, Any]] | None = None
    viz_type: VizType = VizType.TABLE
    explanation: str = ""


class GeneratedQuery(BaseModel):
    sql: str | None = None
    raw_output: str
    viz_hint: VizType | None = None


class ExecutionResult(BaseModel):
    rows: list[dict[str, Any]]
    row_count: int


class VisualizationDecision(BaseModel):
    viz_type: VizType = VizType.TABLE
    explanation: str = ""
