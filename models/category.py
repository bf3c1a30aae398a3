from dataclasses import dataclass

from utils.constants import DEFAULT_CATEGORY_COLOR


@dataclass
class Category:
    id: int
    user_id: str
    name: str
    color: str = DEFAULT_CATEGORY_COLOR     # '#RRGGBB'
