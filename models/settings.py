from dataclasses import dataclass


@dataclass
class AppSettings:
    system_name: str
    allow_new_registrations: bool
    contact_whatsapp: str
