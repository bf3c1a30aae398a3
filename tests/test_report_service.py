from datetime import date

from utils.constants import UNKNOWN_CATEGORY_COLOR, UNKNOWN_CATEGORY_NAME


def test_monthly_summary(report_service, tx_service, make_form, user_id):
    tx_service.add(user_id, make_form(description="Salário", type="income", value=3000.0))
    tx_service.add(user_id, make_form(description="Mercado", value=450.0))
    tx_service.add(user_id, make_form(description="Outro mês", value=99.0, date=date(2024, 2, 1)))

    assert report_service.get_summary(user_id, "2024-01") == {
        "income": 3000.0, "expense": 450.0, "balance": 2550.0,
    }


def test_empty_month_summary(report_service, user_id):
    assert report_service.get_summary(user_id, "2030-06") == {
        "income": 0, "expense": 0, "balance": 0,
    }


def test_annual_summary_spreads_series(report_service, tx_service, make_form, user_id):
    tx_service.add(user_id, make_form(is_installment=True, installments=3))
    tx_service.add(
        user_id,
        make_form(description="Salário", type="income", value=1000.0,
                  is_fixed_income=True, fixed_income_months=2, date=date(2024, 2, 5)),
    )

    rows = report_service.get_annual_summary(user_id, 2024)

    assert [r["month"] for r in rows][:3] == ["2024-01", "2024-02", "2024-03"]
    assert len(rows) == 12
    assert rows[0]["label"] == "Jan"
    assert (rows[0]["income"], rows[0]["expense"]) == (0, 500.0)
    assert rows[1]["balance"] == 500.0
    assert rows[2]["balance"] == 500.0
    assert rows[3]["expense"] == 0


def test_category_breakdown(report_service, tx_service, category_service, make_form, category, user_id):
    casa = category_service.create(user_id, "Casa", "#228B22")
    tx_service.add(user_id, make_form(value=100.0))
    tx_service.add(user_id, make_form(value=50.0))
    tx_service.add(user_id, make_form(value=300.0, category_id=casa.id))
    tx_service.add(user_id, make_form(type="income", value=999.0))

    breakdown = report_service.get_category_breakdown(user_id, "2024-01")

    assert breakdown == [
        {"category": "Casa", "color": "#228B22", "total": 300.0},
        {"category": category.name, "color": category.color, "total": 150.0},
    ]
    income = report_service.get_category_breakdown(user_id, "2024-01", "income")
    assert [e["total"] for e in income] == [999.0]


def test_deleted_category_reported_as_unknown(report_service, tx_service, category_service,
                                              make_form, category, user_id):
    tx_service.add(user_id, make_form(value=80.0))
    category_service.delete(user_id, category.id)

    breakdown = report_service.get_category_breakdown(user_id, "2024-01")

    assert breakdown == [
        {"category": UNKNOWN_CATEGORY_NAME, "color": UNKNOWN_CATEGORY_COLOR, "total": 80.0},
    ]
