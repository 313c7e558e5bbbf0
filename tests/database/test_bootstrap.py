from src.timeclock.timeclock.database.bootstrap import _strip_create_db_and_use, iter_sql_statements


def test_splitter_ignores_comments_and_quoted_semicolons():
    sql = """
    -- sessions; one per clock-in
    CREATE TABLE a (id INT);
    INSERT INTO a VALUES ('x;y');
    CREATE TABLE b (id INT)
    """

    statements = list(iter_sql_statements(sql))

    assert len(statements) == 3
    assert statements[1] == "INSERT INTO a VALUES ('x;y')"
    assert statements[2] == "CREATE TABLE b (id INT)"


def test_configured_database_wins_over_schema_file():
    sql = "CREATE DATABASE IF NOT EXISTS timeclock_db;\nUSE timeclock_db;\nCREATE TABLE a (id INT);"

    assert list(iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE a (id INT)"]
