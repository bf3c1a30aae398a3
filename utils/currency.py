def format_currency(amount: float, symbol: str = "R$") -> str:
    """Format a float as currency string, e.g. 'R$ 1,234.56'."""
    return f"{symbol} {amount:,.2f}"


def format_signed(amount: float, type_: str, symbol: str = "R$") -> str:
    """Prefix with + for income and - for expense."""
    sign = "+" if type_ == "income" else "-"
    return f"{sign}{format_currency(abs(amount), symbol)}"
