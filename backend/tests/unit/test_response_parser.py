import pytest
from speechviz.schemas.query import VizType
from speechviz.services.response_parser import extract_sql, extract_viz_tag, normalize_viz_type


class TestExtractSQL:
    """Tests for pulling SQL out of model output."""

    def test_single_block(self):
        text = "Here you go:\n```sql\nSELECT COUNT(*) FROM orders;\n```\nThis counts orders."
        assert extract_sql(text) == "SELECT COUNT(*) FROM orders;"

    def test_tag_is_case_insensitive(self):
        assert extract_sql("```SQL\nSELECT 1\n```") == "SELECT 1"

    def test_first_block_wins(self):
        text = "```sql\nSELECT 1\n```\nor maybe\n```sql\nSELECT 2\n```"
        assert extract_sql(text) == "SELECT 1"

    def test_multiline_content_kept_verbatim(self):
        sql = "SELECT c.name, COUNT(o.id) AS orders\nFROM customers c\nJOIN orders o ON o.customer_id = c.id\nGROUP BY c.name"
        assert extract_sql(f"```sql\n  {sql}  \n```") == sql

    def test_refencing_extracted_sql_round_trips(self):
        first = extract_sql("noise ```sql\n\tSELECT * FROM orders WHERE total > 10\n\n``` trailing")
        assert extract_sql(f"```sql\n{first}\n```") == first

    @pytest.mark.parametrize("text", [
        "",
        "-- The schema has no table with jokes, so no query can be written.",
        "```\nSELECT 1\n```",
        "```sqlite\nSELECT 1\n```",
        "```sql\nSELECT 1",
        "```sql\n   \n```",
    ])
    def test_missing_or_malformed_block(self, text):
        assert extract_sql(text) is None

    def test_none_input(self):
        assert extract_sql(None) is None


class TestVizTag:
    """Tests for visualization tag parsing."""

    def test_plain_tag(self):
        assert extract_viz_tag("```viz\nbar\n```\nBars compare categories.") == VizType.BAR

    def test_uppercase_tag(self):
        assert extract_viz_tag("```VIZ\nKPI\n```") == VizType.KPI

    @pytest.mark.parametrize("tag,expected", [
        ("map", VizType.GEOMAP),
        ("Geo Map", VizType.GEOMAP),
        ("geomap", VizType.GEOMAP),
        ("hierarchical", VizType.TREEMAP),
        ("treemap", VizType.TREEMAP),
        ("text summary", VizType.TEXT_SUMMARY),
        ("text-summary", VizType.TEXT_SUMMARY),
        ("  Scatter ", VizType.SCATTER),
    ])
    def test_aliases(self, tag, expected):
        assert normalize_viz_type(tag) == expected

    def test_unknown_tag(self):
        assert extract_viz_tag("```viz\nsankey\n```") is None

    def test_no_block(self):
        assert extract_viz_tag("I would use a bar chart.") is None
