import pytest

from models.series import INSTALLMENT, RECURRING_INCOME, SeriesInfo
from utils import series_tags


def test_tag_installment_and_recurring_income():
    assert series_tags.tag_installment("Notebook", 2, 10) == "Notebook (2/10)"
    assert series_tags.tag_recurring_income("Salário", 3, 12) == "Salário (Mês 3/12)"
    assert series_tags.tag(INSTALLMENT, "TV", 1, 3) == "TV (1/3)"
    assert series_tags.tag(RECURRING_INCOME, "Aluguel", 1, 6) == "Aluguel (Mês 1/6)"


def test_tag_rejects_unknown_kind():
    with pytest.raises(ValueError):
        series_tags.tag("weekly", "x", 1, 2)


def test_classify_installment():
    assert series_tags.classify("Notebook (2/10)") == SeriesInfo(INSTALLMENT, "Notebook", 2, 10)


def test_classify_recurring_income_is_its_own_kind():
    assert series_tags.classify("Salário (Mês 3/12)") == SeriesInfo(
        RECURRING_INCOME, "Salário", 3, 12
    )


def test_classify_keeps_inner_parentheses_in_base():
    info = series_tags.classify("Sofa (sala) (1/4)")
    assert info == SeriesInfo(INSTALLMENT, "Sofa (sala)", 1, 4)


@pytest.mark.parametrize(
    "description",
    ["Groceries", "", "Notebook (2/)", "Notebook(2/10)", "Notebook (a/b)", "Notebook (2/10) extra"],
)
def test_classify_plain_descriptions(description):
    assert series_tags.classify(description) is None
    assert not series_tags.is_series_tagged(description)


def test_tag_then_classify_recovers_position():
    for k in (1, 7, 12):
        info = series_tags.classify(series_tags.tag_installment("Geladeira", k, 12))
        assert (info.base, info.position, info.total) == ("Geladeira", k, 12)


def test_series_prefix_per_kind():
    assert series_tags.series_prefix(SeriesInfo(INSTALLMENT, "TV", 2, 3)) == "TV ("
    assert series_tags.series_prefix(SeriesInfo(RECURRING_INCOME, "Bolsa", 2, 3)) == "Bolsa (Mês "


def test_prefix_upper_bound_covers_every_position():
    prefix = "Notebook ("
    upper = series_tags.prefix_upper_bound(prefix)
    for k in (1, 2, 10, 12, 360):
        tagged = series_tags.tag_installment("Notebook", k, 360)
        assert prefix <= tagged < upper
    assert not ("Notebook 2" >= prefix and "Notebook 2" < upper)
