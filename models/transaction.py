from dataclasses import dataclass
from datetime import date as date_type
from typing import Optional


@dataclass
class Transaction:
    id: int
    user_id: str
    description: str
    value: float
    type: str               # 'income' | 'expense'
    category_id: Optional[int]
    date: str               # 'YYYY-MM-DD'
    category_name: str = ""
    category_color: str = ""


@dataclass
class TransactionDraft:
    """A transaction not yet written; the store assigns the id."""
    description: str
    value: float
    type: str
    category_id: Optional[int]
    date: str


@dataclass
class TransactionFormData:
    """Validated input from the add/edit form."""
    description: str
    value: float
    type: str
    category_id: Optional[int]
    date: date_type
    is_installment: bool = False
    installments: Optional[int] = None
    is_fixed_income: bool = False
    fixed_income_months: Optional[int] = None
