"""
Database utilities for the metrics store.

This module provides utilities for working with DuckDB, including:
- Query execution with parameter binding
- Row to dictionary conversion
- Transaction management
"""

from typing import Any, Dict, List, Optional, Sequence, Union

import duckdb
from loguru import logger


def execute_query(
    conn: duckdb.DuckDBPyConnection,
    query: str,
    params: Optional[Union[Sequence[Any], Dict[str, Any]]] = None,
    fetch: bool = True,
) -> List[Dict[str, Any]]:
    """
    Execute a SQL query with parameters and return the results.

    Args:
        conn: DuckDB connection.
        query: SQL query string.
        params: Query parameters.
        fetch: Whether to fetch and return results. Set to False for INSERT, UPDATE, etc.

    Returns:
        List of dictionaries with query results.
    """
    try:
        if params:
            conn.execute(query, params)
        else:
            conn.execute(query)

        if not fetch:
            return []
        column_names = [desc[0] for desc in conn.description]
        return [dict(zip(column_names, row)) for row in conn.fetchall()]
    except Exception as e:
        logger.error(f"Error executing query: {str(e)}")
        logger.debug(f"Query: {query}")
        logger.debug(f"Params: {params}")
        raise


class transaction:
    """
    Context manager for database transactions.

    Example:
        with transaction(conn) as txn:
            execute_query(txn, "INSERT INTO ...", params=(...), fetch=False)
            execute_query(txn, "UPDATE ...", params=(...), fetch=False)
    """

    def __init__(self, conn: duckdb.DuckDBPyConnection):
        self.conn = conn

    def __enter__(self) -> duckdb.DuckDBPyConnection:
        self.conn.begin()
        return self.conn

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is None:
            self.conn.commit()
        else:
            self.conn.rollback()
        return False  # Re-raise any exceptions
