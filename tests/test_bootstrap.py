from __future__ import annotations

from attendance_tracker.database.bootstrap import SCHEMA_PATH, _iter_sql_statements, _strip_create_db_and_use


def test_splitter_ignores_semicolons_in_quotes_and_comments():
    sql = """
    -- header; not a statement
    CREATE TABLE a (note VARCHAR(10) DEFAULT 'x;y');
    INSERT INTO a VALUES ("it;s");
    SELECT 1
    """

    statements = list(_iter_sql_statements(sql))

    assert len(statements) == 3
    assert statements[0].endswith("DEFAULT 'x;y')")
    assert statements[2] == "SELECT 1"


def test_schema_file_has_one_statement_per_table():
    sql = _strip_create_db_and_use(SCHEMA_PATH.read_text(encoding="utf-8"))

    statements = list(_iter_sql_statements(sql))

    assert len(statements) == 8
    assert all(s.upper().startswith("CREATE TABLE IF NOT EXISTS") for s in statements)
    assert any("UNIQUE" in s and "attendance_records" in s for s in statements)
