"""
Query utilities for the program catalog database.

Reads back row counts after a load so the run can report what the store
holds.
"""

# Connection imported for type annotation
from psycopg import Connection, Error

from .errors import PersistenceError
from .load_data import create_connection

COUNT_QUERIES = {
    "colleges": "SELECT COUNT(*) FROM college;",
    "departments": "SELECT COUNT(*) FROM department;",
    "majors": "SELECT COUNT(*) FROM major;",
}


def fetch_value(connection, query):
    """Run a SQL query and return a single scalar value.

    :param connection: An open psycopg3 database connection.
    :type connection: psycopg.Connection
    :param query: SQL query expected to return a single value.
    :type query: str
    :returns: The scalar result, or ``None`` if no rows were returned.
    """
    with connection.cursor() as cursor:
        cursor.execute(query)
        result = cursor.fetchone()
    return result[0] if result is not None else None


def _count_rows(connection: Connection) -> dict:
    return {
        table: fetch_value(connection, query) or 0
        for table, query in COUNT_QUERIES.items()
    }


def get_row_counts(connection=None):
    """Return the number of rows in each catalog table.

    :param connection: Open connection to use; a new one is created if omitted.
    :type connection: psycopg.Connection or None
    :returns: Mapping with keys ``colleges``, ``departments``, ``majors``.
    :rtype: dict[str, int]
    :raises PersistenceError: If no connection can be made or a query fails.
    """
    if connection is None:
        connection = create_connection()

    if connection is None:
        raise PersistenceError("Failed to connect to the database.")

    try:
        with connection:
            return _count_rows(connection)
    except Error as e:
        raise PersistenceError(f"Database read failed: {e}") from e
