from __future__ import annotations

from datetime import date, datetime

import pytest

from attendance_tracker.database.connection import DBConfig
from attendance_tracker.database.mysql_base import db_cursor, normalize_mysql_date, normalize_mysql_datetime


class FakeCursor:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self):
        self.cursor_obj = FakeCursor()
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self.cursor_obj

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnFactory:
    def __init__(self):
        self.conn = FakeConnection()

    def connect(self):
        return self.conn


def test_db_cursor_commits_and_releases():
    factory = FakeConnFactory()

    with db_cursor(factory) as (_, cur):
        assert cur is factory.conn.cursor_obj

    assert factory.conn.committed and not factory.conn.rolled_back
    assert factory.conn.closed and factory.conn.cursor_obj.closed


def test_db_cursor_rolls_back_on_error():
    factory = FakeConnFactory()

    with pytest.raises(RuntimeError):
        with db_cursor(factory):
            raise RuntimeError("boom")

    assert factory.conn.rolled_back and not factory.conn.committed
    assert factory.conn.closed


def test_normalize_date_values():
    assert normalize_mysql_date(None) is None
    assert normalize_mysql_date(date(2024, 12, 5)) == date(2024, 12, 5)
    assert normalize_mysql_date(datetime(2024, 12, 5, 8, 30)) == date(2024, 12, 5)
    assert normalize_mysql_date("2024-12-05") == date(2024, 12, 5)
    with pytest.raises(TypeError):
        normalize_mysql_date(20241205)


def test_normalize_datetime_values():
    assert normalize_mysql_datetime("2024-12-05 08:30:00") == datetime(2024, 12, 5, 8, 30)
    assert normalize_mysql_datetime(date(2024, 12, 5)) == datetime(2024, 12, 5)


def test_db_config_defaults():
    cfg = DBConfig.from_dict({"host": "db", "port": "3307"})

    assert (cfg.host, cfg.port, cfg.database, cfg.pool_size) == ("db", 3307, "attendance_tracker", 5)
