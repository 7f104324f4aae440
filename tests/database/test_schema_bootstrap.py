from pathlib import Path

from src.training_attendance.training_attendance.database.bootstrap import clean_schema, iter_sql_statements

SCHEMA = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def test_schema_file_yields_both_tables():
    statements = list(iter_sql_statements(clean_schema(SCHEMA.read_text(encoding="utf-8"))))

    assert len(statements) == 2
    assert statements[0].startswith("CREATE TABLE IF NOT EXISTS attendance_sessions")
    assert statements[1].startswith("CREATE TABLE IF NOT EXISTS attendance_records")


def test_database_directives_and_comments_are_removed():
    sql = "-- header\nCREATE DATABASE IF NOT EXISTS other;\nUSE other;\nCREATE TABLE t (id INT);\n"

    assert list(iter_sql_statements(clean_schema(sql))) == ["CREATE TABLE t (id INT)"]


def test_semicolons_inside_literals_do_not_split():
    sql = "INSERT INTO t VALUES ('a;b'); INSERT INTO t VALUES (\"c;d\"); SELECT 1"

    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("c;d")',
        "SELECT 1",
    ]


def test_escaped_quote_stays_inside_literal():
    sql = r"INSERT INTO t VALUES ('it\'s; fine');"

    assert list(iter_sql_statements(sql)) == [r"INSERT INTO t VALUES ('it\'s; fine')"]


def _column(statement: str, name: str) -> str:
    return next(line.strip() for line in statement.splitlines() if line.strip().startswith(name + " "))


def test_identity_columns_compare_case_sensitively():
    sessions, records = iter_sql_statements(clean_schema(SCHEMA.read_text(encoding="utf-8")))

    assert "COLLATE utf8mb4_bin" in _column(sessions, "session_token")
    assert "COLLATE utf8mb4_bin" in _column(records, "session_token")
    assert "COLLATE utf8mb4_bin" in _column(records, "trainee_id")
