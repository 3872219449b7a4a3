"""
Parsing of free-form model output.

The model is asked to answer with fenced blocks such as::

    ```sql
    SELECT ...
    ```

Only the first block of a given kind is used.
"""
import re

from speechviz.schemas.query import VizType

SQL_BLOCK = re.compile(r"```sql\b[ \t]*(.*?)```", re.IGNORECASE | re.DOTALL)
VIZ_BLOCK = re.compile(r"```viz\b[ \t]*(.*?)```", re.IGNORECASE | re.DOTALL)

VIZ_ALIASES = {
    "map": VizType.GEOMAP,
    "geo map": VizType.GEOMAP,
    "geo_map": VizType.GEOMAP,
    "geo-map": VizType.GEOMAP,
    "hierarchical": VizType.TREEMAP,
    "text summary": VizType.TEXT_SUMMARY,
    "text_summary": VizType.TEXT_SUMMARY,
    "summary": VizType.TEXT_SUMMARY,
}


def extract_sql(text: str) -> str | None:
    """Return the trimmed contents of the first ```sql block, or None."""
    match = SQL_BLOCK.search(text or "")
    if not match:
        return None
    sql = match.group(1).strip()
    return sql or None


def normalize_viz_type(tag: str) -> VizType | None:
    """Map a model-written tag onto the fixed vocabulary; None if unknown."""
    key = " ".join(tag.strip().lower().split())
    if not key:
        return None
    try:
        return VizType(key)
    except ValueError:
        return VIZ_ALIASES.get(key)


def extract_viz_tag(text: str) -> VizType | None:
    """Return the visualization tag from the first ```viz block, or None."""
    match = VIZ_BLOCK.search(text or "")
    if not match:
        return None
    return normalize_viz_type(match.group(1))
