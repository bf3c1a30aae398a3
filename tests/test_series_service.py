from datetime import date

import pytest

from models.series import INSTALLMENT
from utils.errors import ValidationError
from utils.series_tags import classify


def test_generate_installments_count_and_full_value(series_service):
    drafts = series_service.generate_installments(
        "Notebook", 500.0, "expense", 1, date(2024, 1, 15), 3
    )
    assert [d.description for d in drafts] == [
        "Notebook (1/3)", "Notebook (2/3)", "Notebook (3/3)",
    ]
    assert [d.value for d in drafts] == [500.0, 500.0, 500.0]
    assert [d.date for d in drafts] == ["2024-01-15", "2024-02-15", "2024-03-15"]
    assert all(d.type == "expense" and d.category_id == 1 for d in drafts)


def test_generate_recurring_income_tags(series_service):
    drafts = series_service.generate_recurring_income(
        "Salário", 3000.0, "income", 2, date(2024, 11, 5), 3
    )
    assert [d.description for d in drafts] == [
        "Salário (Mês 1/3)", "Salário (Mês 2/3)", "Salário (Mês 3/3)",
    ]
    assert [d.date for d in drafts] == ["2024-11-05", "2024-12-05", "2025-01-05"]


def test_month_end_is_clamped_and_not_carried(series_service):
    drafts = series_service.generate_installments(
        "Curso", 100.0, "expense", 1, date(2023, 1, 31), 4
    )
    assert [d.date for d in drafts] == [
        "2023-01-31", "2023-02-28", "2023-03-31", "2023-04-30",
    ]


def test_leap_year_february(series_service):
    drafts = series_service.generate_installments(
        "Curso", 100.0, "expense", 1, date(2024, 1, 30), 2
    )
    assert drafts[1].date == "2024-02-29"


def test_generated_tags_round_trip(series_service):
    drafts = series_service.generate_installments(
        "Geladeira", 250.0, "expense", 1, date(2024, 3, 1), 12
    )
    for k, d in enumerate(drafts, start=1):
        info = classify(d.description)
        assert info.kind == INSTALLMENT
        assert (info.base, info.position, info.total) == ("Geladeira", k, 12)


@pytest.mark.parametrize("count", [0, 1, -3])
def test_series_shorter_than_two_is_rejected(series_service, count):
    with pytest.raises(ValidationError):
        series_service.generate_installments(
            "TV", 100.0, "expense", 1, date(2024, 1, 1), count
        )
