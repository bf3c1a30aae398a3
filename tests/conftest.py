"""Shared fixtures: an in-memory database with DAOs and services wired the
way ``main.py`` wires them. Nothing here imports the UI."""

from __future__ import annotations

from datetime import date

import pytest

from database.category_dao import CategoryDAO
from database.db_manager import DatabaseManager
from database.transaction_dao import TransactionDAO
from models.transaction import TransactionFormData
from services.category_service import CategoryService
from services.events import TransactionEvents
from services.report_service import ReportService
from services.series_service import SeriesService
from services.settings_service import SettingsService
from services.transaction_service import TransactionService


@pytest.fixture
def db():
    manager = DatabaseManager(":memory:")
    manager.initialize()
    yield manager
    manager.close()


@pytest.fixture
def tx_dao(db) -> TransactionDAO:
    return TransactionDAO(db)


@pytest.fixture
def category_dao(db) -> CategoryDAO:
    return CategoryDAO(db)


@pytest.fixture
def series_service(tx_dao) -> SeriesService:
    return SeriesService(tx_dao)


@pytest.fixture
def events() -> TransactionEvents:
    return TransactionEvents()


@pytest.fixture
def tx_service(tx_dao, series_service, events) -> TransactionService:
    return TransactionService(tx_dao, series_service, events)


@pytest.fixture
def category_service(category_dao) -> CategoryService:
    return CategoryService(category_dao)


@pytest.fixture
def report_service(tx_dao, category_dao) -> ReportService:
    return ReportService(tx_dao, category_dao)


@pytest.fixture
def settings_service(db) -> SettingsService:
    return SettingsService(db)


@pytest.fixture
def user_id() -> str:
    return "alice"


@pytest.fixture
def category(category_service, user_id):
    return category_service.create(user_id, "Eletrônicos", "#336699")


@pytest.fixture
def make_form(category):
    """Build a TransactionFormData with sensible defaults; override any field."""

    def _make(**overrides) -> TransactionFormData:
        fields = dict(
            description="Notebook",
            value=500.0,
            type="expense",
            category_id=category.id,
            date=date(2024, 1, 15),
        )
        fields.update(overrides)
        return TransactionFormData(**fields)

    return _make
