"""
Summary Models

Totals derived from the ledger. These are value objects: they are
computed on demand and never stored in the ledger document.
"""

from pydantic import BaseModel, ConfigDict, Field


def format_currency(value: float, symbol: str = "£") -> str:
    """
    Format a monetary value for display.

    Two decimal places with thousands grouping; the sign goes before
    the currency symbol.

    Example:
        format_currency(-1234.5) -> "-£1,234.50"
    """
    sign = "-" if value < 0 and round(abs(value), 2) != 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


class LedgerSummary(BaseModel):
    """
    Headline figures for the summary cards.

    Sums keep full float precision; rounding only happens in ``formatted``.
    """
    model_config = ConfigDict(frozen=True)

    total_income: float = Field(..., description="Sum of income amounts")
    total_expenses: float = Field(..., description="Sum of expense amounts")
    total_assets: float = Field(..., description="Sum of asset values")
    total_liabilities: float = Field(..., description="Sum of liability amounts")

    @property
    def balance(self) -> float:
        """Income minus expenses."""
        return self.total_income - self.total_expenses

    @property
    def net_wealth(self) -> float:
        """Assets minus liabilities."""
        return self.total_assets - self.total_liabilities

    def formatted(self, symbol: str = "£") -> dict[str, str]:
        """All six figures as display strings."""
        return {
            "total_income": format_currency(self.total_income, symbol),
            "total_expenses": format_currency(self.total_expenses, symbol),
            "balance": format_currency(self.balance, symbol),
            "total_assets": format_currency(self.total_assets, symbol),
            "total_liabilities": format_currency(self.total_liabilities, symbol),
            "net_wealth": format_currency(self.net_wealth, symbol),
        }
