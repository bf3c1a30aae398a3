from database.db_manager import DatabaseManager
from models.settings import AppSettings
from utils.constants import DEFAULT_APP_SETTINGS
from utils.errors import ValidationError


class SettingsService:
    """Admin-level settings kept as key/value rows in app_settings."""

    def __init__(self, db: DatabaseManager):
        self._db = db

    def get_app_settings(self) -> AppSettings:
        get = self._db.get_setting
        return AppSettings(
            system_name=get("system_name", DEFAULT_APP_SETTINGS["system_name"]),
            allow_new_registrations=get(
                "allow_new_registrations", DEFAULT_APP_SETTINGS["allow_new_registrations"]
            ) == "1",
            contact_whatsapp=get("contact_whatsapp", DEFAULT_APP_SETTINGS["contact_whatsapp"]),
        )

    def update_app_settings(
        self,
        system_name: str | None = None,
        allow_new_registrations: bool | None = None,
        contact_whatsapp: str | None = None,
    ) -> AppSettings:
        """Write only the fields that were passed."""
        if system_name is not None:
            if not system_name.strip():
                raise ValidationError("System name cannot be empty.", field="system_name")
            self._db.set_setting("system_name", system_name.strip())
        if allow_new_registrations is not None:
            self._db.set_setting("allow_new_registrations", "1" if allow_new_registrations else "0")
        if contact_whatsapp is not None:
            self._db.set_setting("contact_whatsapp", contact_whatsapp.strip())
        return self.get_app_settings()
