"""
Schema introspection: read tables, columns, key roles and foreign keys
from a live database connection.
"""
import logging

from sqlalchemy import inspect
from sqlalchemy.exc import CompileError, SQLAlchemyError

from speechviz.db.database import Database, error_detail
from speechviz.errors import ErrorType
from speechviz.exceptions import AppException
from speechviz.schemas.database import (
    Column,
    ForeignKeyEdge,
    KeyRole,
    SchemaDescription,
    Table,
)

logger = logging.getLogger(__name__)


def _type_name(col_type, dialect) -> str:
    try:
        return col_type.compile(dialect=dialect)
    except CompileError:
        return type(col_type).__name__.upper()


def _unique_columns(inspector, table_name: str) -> set[str]:
    """Columns covered on their own by a unique constraint or unique index."""
    unique = set()
    for constraint in inspector.get_unique_constraints(table_name):
        if len(constraint["column_names"]) == 1:
            unique.add(constraint["column_names"][0])
    for index in inspector.get_indexes(table_name):
        columns = [c for c in index["column_names"] if c is not None]
        if index.get("unique") and len(columns) == 1:
            unique.add(columns[0])
    return unique


def _read_schema(sync_conn) -> SchemaDescription:
    inspector = inspect(sync_conn)
    dialect = sync_conn.dialect

    tables = []
    edges = []
    table_names = set(inspector.get_table_names())
    view_names = set(inspector.get_view_names()) - table_names
    for table_name in sorted(table_names | view_names):
        if table_name in view_names:
            # Views carry no key constraints
            primary, unique, foreign_keys = set(), set(), []
        else:
            primary = set(inspector.get_pk_constraint(table_name).get("constrained_columns") or [])
            unique = _unique_columns(inspector, table_name)
            foreign_keys = inspector.get_foreign_keys(table_name)
        foreign = {col for fk in foreign_keys for col in fk["constrained_columns"]}

        columns = []
        for col in inspector.get_columns(table_name):
            name = col["name"]
            if name in primary:
                role = KeyRole.PRIMARY
            elif name in unique:
                role = KeyRole.UNIQUE
            elif name in foreign:
                role = KeyRole.FOREIGN
            else:
                role = KeyRole.NONE
            columns.append(Column(name=name, type=_type_name(col["type"], dialect), key_role=role))
        tables.append(Table(name=table_name, columns=columns))

        for fk in foreign_keys:
            for from_col, to_col in zip(fk["constrained_columns"], fk["referred_columns"]):
                edges.append(ForeignKeyEdge(
                    from_table=table_name,
                    from_column=from_col,
                    to_table=fk["referred_table"],
                    to_column=to_col,
                ))

    return SchemaDescription(tables=tables, foreign_keys=edges)


async def introspect_schema(db: Database) -> SchemaDescription:
    """Describe every table and view visible on the connection.

    Raises:
        AppException: SCHEMA_ERROR if the metadata queries fail
    """
    try:
        schema = await db.run_sync(_read_schema)
    except SQLAlchemyError as e:
        detail = error_detail(e)
        logger.error(f"Schema extraction error: {detail}")
        raise AppException(ErrorType.SCHEMA_ERROR, f"Failed to extract DB schema: {detail}")

    logger.info(
        f"Extracted schema: {len(schema.tables)} tables, "
        f"{len(schema.foreign_keys)} foreign keys"
    )
    return schema
