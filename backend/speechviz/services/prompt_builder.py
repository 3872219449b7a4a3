"""
Prompt templates for SQL generation and visualization selection.

Both builders are pure: same inputs, same prompt text.
"""
import json
from typing import Any

from speechviz.config import Config
from speechviz.schemas.database import SchemaDescription

SAMPLE_ROWS = 5

VIZ_CHOICES = (
    "[bar, pie, line, table, KPI, map, heatmap, hierarchical, text summary, "
    "scatter, bubble, radar, funnel, treemap, geo map]"
)


def describe_tables(schema: SchemaDescription) -> str:
    text = "Tables and columns:\n"
    for table in schema.tables:
        columns = ", ".join(f"{col.name} ({col.type})" for col in table.columns)
        text += f"- {table.name}({columns})\n"
    return text


def describe_relationships(schema: SchemaDescription) -> str:
    text = "Table relationships:\n"
    if not schema.foreign_keys:
        return text + "- No foreign key relationships found.\n"
    for fk in schema.foreign_keys:
        text += f"- {fk.from_table}.{fk.from_column} → {fk.to_table}.{fk.to_column}\n"
    return text


def build_sql_prompt(schema: SchemaDescription, utterance: str, dialect: str | None = None) -> str:
    """Prompt asking the model to turn a spoken request into one SQL query."""
    dialect = dialect or Config.DATABASE_TYPE
    return f"""You are a {dialect} assistant. Convert natural language into SQL queries using ONLY this schema and relationships.

{describe_tables(schema)}
{describe_relationships(schema)}
IMPORTANT:
- Do NOT assume any additional columns or tables.
- Use JOINs only when needed based on relationships.
- If no valid SQL can be generated, return a comment explaining why.
- Return a clean SQL query in this format:

```sql
SELECT ...
```

User request: "{utterance}"
"""


def build_viz_prompt(
    utterance: str,
    sql: str,
    schema: SchemaDescription,
    sample_rows: list[dict[str, Any]],
) -> str:
    """Prompt asking the model to pick a chart type for executed results."""
    sample = json.dumps(sample_rows[:SAMPLE_ROWS], indent=2, default=str)
    return f"""You are a data visualization expert.

Based on the following:
- User request: "{utterance}"
- SQL Query: ```sql
{sql}
```
- Database schema:
{describe_tables(schema)}
{describe_relationships(schema)}
- Query result sample:
{sample}

Choose the most suitable visualization from this list:
{VIZ_CHOICES}

Guidelines:
- Use pie for proportions or categorical breakdowns.
- Use bar for comparisons across categories.
- Use line for trends over time.
- Use KPI for single summary metrics (e.g., total users, revenue).
- Use heatmap for matrix-like data comparisons.
- Use hierarchical/treemap for parent-child category breakdowns.
- Use scatter for correlation between two numeric fields.
- Use bubble if there's a third dimension (size) on top of scatter.
- Use radar for comparing several metrics across a few items.
- Use funnel for step-wise processes (e.g., sales funnel).
- Use map/geo map for geographic data with coordinates or region fields.
- Use table as fallback for complex, multidimensional queries.
- Use text summary if data is too complex to visualize or better explained in words.

Return only this format:
```viz
<best_chart_type>
```

Then explain why you chose that chart.
"""
