import pytest

from utils.constants import DEFAULT_CATEGORIES
from utils.errors import ValidationError


def test_create_and_list_sorted_by_name(category_service, user_id):
    category_service.create(user_id, "Viagem", "#123456")
    category_service.create(user_id, "  Academia ", "#abcdef")

    names = [c.name for c in category_service.get_all(user_id)]
    assert names == ["Academia", "Viagem"]


@pytest.mark.parametrize(
    "name, color, field",
    [
        ("", "#123456", "name"),
        ("   ", "#123456", "name"),
        ("x" * 51, "#123456", "name"),
        ("Ok", "123456", "color"),
        ("Ok", "#12345G", "color"),
        ("Ok", "#1234", "color"),
    ],
)
def test_invalid_category(category_service, user_id, name, color, field):
    with pytest.raises(ValidationError) as exc_info:
        category_service.create(user_id, name, color)
    assert exc_info.value.field == field
    assert category_service.get_all(user_id) == []


def test_names_are_unique_per_user_ignoring_case(category_service, user_id):
    category_service.create(user_id, "Lazer", "#FF6347")
    with pytest.raises(ValidationError):
        category_service.create(user_id, "lazer", "#000000")
    category_service.create("bob", "Lazer", "#FF6347")


def test_update_keeps_own_name(category_service, user_id):
    cat = category_service.create(user_id, "Lazer", "#FF6347")
    updated = category_service.update(user_id, cat.id, "Lazer", "#000000")
    assert updated.color == "#000000"


def test_update_to_existing_name_is_refused(category_service, user_id):
    category_service.create(user_id, "Lazer", "#FF6347")
    other = category_service.create(user_id, "Saúde", "#8A2BE2")
    with pytest.raises(ValidationError):
        category_service.update(user_id, other.id, "LAZER", "#8A2BE2")


def test_defaults_seeded_once(category_service, user_id):
    created = category_service.ensure_defaults(user_id)
    assert len(created) == len(DEFAULT_CATEGORIES)
    assert category_service.ensure_defaults(user_id) == []
    assert len(category_service.get_all(user_id)) == len(DEFAULT_CATEGORIES)


def test_defaults_skipped_when_user_has_categories(category_service, user_id):
    category_service.create(user_id, "Própria", "#101010")
    assert category_service.ensure_defaults(user_id) == []
    assert [c.name for c in category_service.get_all(user_id)] == ["Própria"]


def test_delete_leaves_transactions_in_place(category_service, tx_service, make_form, category, user_id):
    tx = tx_service.add(user_id, make_form())[0]

    category_service.delete(user_id, category.id)

    assert category_service.get_by_id(user_id, category.id) is None
    kept = tx_service.get_by_id(user_id, tx.id)
    assert kept is not None
    assert kept.category_id == category.id
