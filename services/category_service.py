import re

from database.category_dao import CategoryDAO
from models.category import Category
from utils.constants import CATEGORY_NAME_MAX_LENGTH, DEFAULT_CATEGORIES
from utils.errors import ValidationError
from utils.logging_setup import get_logger

logger = get_logger("categories")

_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


class CategoryService:
    def __init__(self, category_dao: CategoryDAO):
        self._dao = category_dao

    def get_all(self, user_id: str) -> list[Category]:
        return self._dao.get_all(user_id)

    def get_by_id(self, user_id: str, category_id: int) -> Category | None:
        return self._dao.get_by_id(user_id, category_id)

    def create(self, user_id: str, name: str, color: str) -> Category:
        name = self._validate(user_id, name, color)
        return self._dao.create(user_id, name, color)

    def update(self, user_id: str, category_id: int, name: str, color: str) -> Category:
        name = self._validate(user_id, name, color, exclude_id=category_id)
        return self._dao.update(user_id, category_id, name, color)

    def delete(self, user_id: str, category_id: int):
        """Remove the category. Its transactions keep the now-dangling id."""
        self._dao.delete(user_id, category_id)

    def ensure_defaults(self, user_id: str) -> list[Category]:
        """Seed the default categories in one batch when the user has none."""
        if self._dao.get_all(user_id):
            return []
        created = self._dao.create_batch(
            user_id, [(c["name"], c["color"]) for c in DEFAULT_CATEGORIES]
        )
        logger.info("Seeded %d default categories for %s", len(created), user_id)
        return created

    def _validate(self, user_id: str, name: str, color: str, exclude_id: int | None = None) -> str:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Category name cannot be empty.", field="name")
        if len(name) > CATEGORY_NAME_MAX_LENGTH:
            raise ValidationError("Category name is too long.", field="name")
        if not _COLOR_RE.match(color or ""):
            raise ValidationError("Color must be a hex value like #A1B2C3.", field="color")
        existing = [c for c in self._dao.get_all(user_id) if c.id != exclude_id]
        if any(c.name.lower() == name.lower() for c in existing):
            raise ValidationError(f"A category named '{name}' already exists.", field="name")
        return name
