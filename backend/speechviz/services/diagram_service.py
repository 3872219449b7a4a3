import re

from speechviz.schemas.database import KeyRole, SchemaDescription

# Database type names mapped to Mermaid-safe attribute types
MERMAID_TYPES = {
    "VARCHAR": "string",
    "TEXT": "string",
    "CHAR": "string",
    "INT": "int",
    "INTEGER": "int",
    "SMALLINT": "int",
    "TINYINT": "int",
    "MEDIUMINT": "int",
    "BIGINT": "bigint",
    "DECIMAL": "decimal",
    "NUMERIC": "decimal",
    "FLOAT": "float",
    "REAL": "float",
    "DOUBLE": "double",
    "DATE": "date",
    "DATETIME": "datetime",
    "TIMESTAMP": "timestamp",
    "TIME": "time",
    "BOOLEAN": "boolean",
    "BOOL": "boolean",
    "JSON": "json",
}

KEY_MARKERS = {
    KeyRole.PRIMARY: " PK",
    KeyRole.UNIQUE: " UK",
    KeyRole.FOREIGN: " FK",
    KeyRole.NONE: "",
}


def sanitize_identifier(name: str) -> str:
    """Replace anything Mermaid can't take in an identifier with '_'."""
    return re.sub(r"[^A-Za-z0-9_]", "_", name)


def mermaid_type(raw_type: str) -> str:
    """Map a raw column type such as 'varchar(255)' to a Mermaid type."""
    cleaned = re.sub(r"\(.*?\)", "", raw_type).strip().upper()
    base = cleaned.split()[0] if cleaned else ""
    return MERMAID_TYPES.get(base, "string")


def render_mermaid(schema: SchemaDescription) -> str:
    """Render a schema as a Mermaid erDiagram."""
    lines = ["erDiagram"]

    for table in schema.tables:
        lines.append(f"    {sanitize_identifier(table.name)} {{")
        for col in table.columns:
            lines.append(
                f"        {mermaid_type(col.type)} {sanitize_identifier(col.name)}"
                f"{KEY_MARKERS[col.key_role]}"
            )
        lines.append("    }")

    for fk in schema.foreign_keys:
        lines.append(
            f"    {sanitize_identifier(fk.to_table)} ||--o{{ {sanitize_identifier(fk.from_table)} : "
            f"\"references {sanitize_identifier(fk.to_column)}\""
        )

    return "\n".join(lines) + "\n"
