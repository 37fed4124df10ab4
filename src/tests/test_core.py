from unittest.mock import patch

from pydantic import ValidationError
import pytest
from sqlalchemy import DateTime
from sqlmodel import SQLModel

from core.config import FraudConfig, Settings
from core.db import build_engine
import models  # noqa: F401


def test_all_datetime_columns_are_timezone_aware():
    columns = [
        column
        for table in SQLModel.metadata.tables.values()
        for column in table.columns
        if isinstance(column.type, DateTime)
    ]

    assert len(columns) == 14
    assert [f"{c.table.name}.{c.name}" for c in columns if not c.type.timezone] == []


@pytest.mark.parametrize("speed", [0, -250])
def test_fraud_config_requires_positive_reading_speed(speed):
    with pytest.raises(ValidationError):
        FraudConfig(max_reading_speed=speed)


def test_settings_reject_non_positive_reading_speed():
    with pytest.raises(ValidationError):
        Settings(FRAUD_MAX_READING_SPEED=0)


def test_settings_build_fraud_config():
    settings = Settings(FRAUD_MAX_READING_SPEED=250)

    assert settings.fraud_config == FraudConfig(max_reading_speed=250)


@patch("core.db.create_engine")
def test_postgres_engine_sets_statement_timeout(mock_create_engine):
    build_engine("postgresql+psycopg2://reader:pw@db:5432/beta", statement_timeout_seconds=2.5)

    connect_args = mock_create_engine.call_args.kwargs["connect_args"]
    assert connect_args == {"options": "-c statement_timeout=2500"}


@patch("core.db.create_engine")
def test_sqlite_engine_has_no_statement_timeout(mock_create_engine):
    build_engine("sqlite://")

    connect_args = mock_create_engine.call_args.kwargs["connect_args"]
    assert connect_args == {"check_same_thread": False}
