APP_NAME = "Gestor Financeiro"
APP_WIDTH = 1200
APP_HEIGHT = 750
DB_FILE = "gestor.db"

DATE_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"

TRANSACTION_TYPES = ["income", "expense"]
DELETE_TYPES = ["single", "future"]

DESCRIPTION_MAX_LENGTH = 100
CATEGORY_NAME_MAX_LENGTH = 50
MIN_SERIES_LENGTH = 2
MAX_SERIES_LENGTH = 360  # one record is materialized per month

UNKNOWN_CATEGORY_NAME = "Unknown category"
UNKNOWN_CATEGORY_COLOR = "#888888"
DEFAULT_CATEGORY_COLOR = "#CCCCCC"

DEFAULT_CATEGORIES = [
    {"name": "Alimentação", "color": "#FFD700"},
    {"name": "Transporte",  "color": "#4682B4"},
    {"name": "Moradia",     "color": "#228B22"},
    {"name": "Lazer",       "color": "#FF6347"},
    {"name": "Saúde",       "color": "#8A2BE2"},
    {"name": "Educação",    "color": "#D2691E"},
    {"name": "Outros",      "color": "#A9A9A9"},
]

DEFAULT_APP_SETTINGS = {
    "system_name": APP_NAME,
    "allow_new_registrations": "1",
    "contact_whatsapp": "5584999999999",
}

TYPE_COLORS = {
    "income":  "#4CAF50",
    "expense": "#F44336",
}
