"""
Persistence utilities for the scraped program catalog.

Writes the flattened records to a pretty-printed JSON file and upserts
them into the ``college`` / ``department`` / ``major`` tables of a
PostgreSQL database.
"""

# Used to write the JSON file sink
import json

# Used to read database credentials from environment variables
import os

# Used for optional return type annotation on create_connection
from typing import Optional

# PostgreSQL database adapter for Python (psycopg3)
import psycopg

# sql module for safe SQL composition
from psycopg import sql

# Connection used as a typed parameter; Error is the base of all psycopg errors
from psycopg import Connection, Error, OperationalError

from .errors import PersistenceError
from .paths import OUTPUT_FILE


CREATE_TABLES = sql.SQL("""
    CREATE TABLE IF NOT EXISTS college (
      id SERIAL PRIMARY KEY,
      name TEXT NOT NULL UNIQUE
    );
    CREATE TABLE IF NOT EXISTS department (
      id SERIAL PRIMARY KEY,
      name TEXT NOT NULL,
      college_id INTEGER NOT NULL REFERENCES college(id),
      UNIQUE (name, college_id)
    );
    CREATE TABLE IF NOT EXISTS major (
      id SERIAL PRIMARY KEY,
      name TEXT NOT NULL,
      url TEXT NOT NULL,
      description TEXT NOT NULL,
      department_id INTEGER NOT NULL REFERENCES department(id),
      UNIQUE (name, department_id)
    );
""")

# No-op update on conflict so RETURNING yields the existing id
UPSERT_COLLEGE = sql.SQL("""
    INSERT INTO college (name) VALUES (%s)
    ON CONFLICT (name) DO UPDATE SET name = EXCLUDED.name
    RETURNING id;
""")

UPSERT_DEPARTMENT = sql.SQL("""
    INSERT INTO department (name, college_id) VALUES (%s, %s)
    ON CONFLICT (name, college_id) DO UPDATE SET name = EXCLUDED.name
    RETURNING id;
""")

UPSERT_MAJOR = sql.SQL("""
    INSERT INTO major (name, url, description, department_id) VALUES (%s, %s, %s, %s)
    ON CONFLICT (name, department_id)
    DO UPDATE SET url = EXCLUDED.url, description = EXCLUDED.description
    RETURNING id;
""")


def create_connection(
    db_name=None,
    db_user=None,
    db_password=None,
    db_host=None,
    db_port=None,
) -> Optional[Connection]:
    """Create and return a psycopg3 connection to the PostgreSQL database.

    Each credential is resolved from the explicit argument first, then
    the matching environment variable (``DB_NAME``, ``DB_USER``,
    ``DB_PASSWORD``, ``DB_HOST``, ``DB_PORT``), then a non-secret default.
    There is no default password.

    :returns: An open psycopg3 connection, or ``None`` on failure.
    :rtype: psycopg.Connection or None
    """
    resolved_name = db_name or os.environ.get("DB_NAME", "cpp_catalog")
    resolved_user = db_user or os.environ.get("DB_USER", "postgres")
    resolved_password = db_password or os.environ.get("DB_PASSWORD", "")
    resolved_host = db_host or os.environ.get("DB_HOST", "127.0.0.1")
    resolved_port = db_port or os.environ.get("DB_PORT", "5432")

    try:
        # Note: psycopg3 uses 'dbname' not 'database'.
        return psycopg.connect(
            dbname=resolved_name,
            user=resolved_user,
            password=resolved_password,
            host=resolved_host,
            port=resolved_port,
        )
    except OperationalError as e:
        print(f"DB connection error: {e}")
        return None


def save_data(records, path=OUTPUT_FILE):
    """Write the enriched records to disk as formatted JSON.

    Any existing file at ``path`` is replaced.

    :param records: Records to save.
    :type records: list[cpp_catalog.enrich.MajorRecord]
    :param path: Output file path.
    :type path: str
    """
    with open(path, "w", encoding="utf-8") as f:
        json.dump([r.as_dict() for r in records], f, indent=2, ensure_ascii=False)
    print(f"Data saved to {path}")


def _returned_id(cur):
    row = cur.fetchone()
    return row[0]


def _execute_upserts(conn: Connection, records: list) -> None:
    """Create the tables if needed and upsert every record in order.

    For each record the college, then the department, then the major is
    upserted. An existing major has its ``url`` and ``description``
    replaced with the record's values.

    :param conn: An open psycopg3 database connection.
    :type conn: psycopg.Connection
    :param records: Records to persist.
    :type records: list[cpp_catalog.enrich.MajorRecord]
    """
    with conn.cursor() as cur:
        cur.execute(CREATE_TABLES)

        for r in records:
            cur.execute(UPSERT_COLLEGE, (r.college,))
            college_id = _returned_id(cur)

            cur.execute(UPSERT_DEPARTMENT, (r.department, college_id))
            department_id = _returned_id(cur)

            cur.execute(
                UPSERT_MAJOR,
                (r.major, r.url, r.description, department_id),
            )


def upsert_records(records, conn=None):
    """Upsert all records into the relational store in a single transaction.

    Replaying the same records leaves the row counts unchanged. On any
    database error the transaction is rolled back and nothing is stored.

    :param records: Records to persist.
    :type records: list[cpp_catalog.enrich.MajorRecord]
    :param conn: Open connection to use; a new one is created if omitted.
    :type conn: psycopg.Connection or None
    :raises PersistenceError: If no connection can be made or a statement fails.
    """
    if conn is None:
        conn = create_connection()

    if conn is None:
        raise PersistenceError("Failed to connect to the database.")

    try:
        # Commits on success, rolls back on exception, then closes.
        with conn:
            _execute_upserts(conn, records)
    except Error as e:
        raise PersistenceError(f"Database write failed: {e}") from e
