import pytest

from utils.errors import PersistenceError, ValidationError


def test_defaults(settings_service):
    settings = settings_service.get_app_settings()
    assert settings.system_name == "Gestor Financeiro"
    assert settings.allow_new_registrations is True
    assert settings.contact_whatsapp == "5584999999999"


def test_partial_update_keeps_other_fields(settings_service):
    updated = settings_service.update_app_settings(allow_new_registrations=False)
    assert updated.allow_new_registrations is False
    assert updated.system_name == "Gestor Financeiro"

    updated = settings_service.update_app_settings(system_name="  Minhas Contas ")
    assert updated.system_name == "Minhas Contas"
    assert updated.allow_new_registrations is False


def test_empty_system_name_rejected(settings_service):
    with pytest.raises(ValidationError):
        settings_service.update_app_settings(system_name="  ")
    assert settings_service.get_app_settings().system_name == "Gestor Financeiro"


def test_display_settings_seeded(db):
    assert db.get_setting("currency_symbol") == "R$"
    assert db.get_setting("date_format") == "DD/MM/YYYY"
    assert db.get_setting("missing", "fallback") == "fallback"


def test_initialize_is_idempotent(db):
    db.set_setting("currency_symbol", "US$")
    db.initialize()
    assert db.get_setting("currency_symbol") == "US$"


def test_transaction_rolls_back_and_wraps_errors(db):
    with pytest.raises(PersistenceError):
        with db.transaction() as conn:
            conn.execute("INSERT INTO app_settings(key, value) VALUES ('k', 'v')")
            conn.execute("INSERT INTO no_such_table VALUES (1)")
    assert db.get_setting("k", "absent") == "absent"
