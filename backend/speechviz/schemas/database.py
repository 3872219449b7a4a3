from enum import Enum

from pydantic import BaseModel


class DatabaseConfig(BaseModel):
    host: str | None = None
    user: str | None = None
    password: str | None = None
    database: str | None = None
    port: int | None = None

    def missing_fields(self) -> list[str]:
        """Names of required fields that are absent or empty."""
        return [name for name in ("host", "user", "database") if not getattr(self, name)]

    def is_complete(self) -> bool:
        return not self.missing_fields()


class KeyRole(str, Enum):
    NONE = "none"
    PRIMARY = "primary"
    UNIQUE = "unique"
    FOREIGN = "foreign"


class Column(BaseModel):
    name: str
    type: str
    key_role: KeyRole = KeyRole.NONE


class Table(BaseModel):
    name: str
    columns: list[Column]


class ForeignKeyEdge(BaseModel):
    from_table: str
    from_column: str
    to_table: str
    to_column: str


class SchemaDescription(BaseModel):
    tables: list[Table]
    foreign_keys: list[ForeignKeyEdge] = []

    def table_names(self) -> list[str]:
        return [table.name for table in self.tables]


class SchemaDiagramRequest(BaseModel):
    dbConfig: DatabaseConfig | None = None


class SchemaDiagramResponse(BaseModel):
    mermaid: str
