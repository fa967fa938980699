"""
Typed argument contracts for every tool the reasoning engine can call.

These Pydantic models are the single source of truth for tool arguments:
the tool registry binds them as ``args_schema`` (so the engine sees them), and
the dispatch boundary validates and coerces incoming arguments against them
before any tool body runs. Field names match the wire names the engine emits,
which is why the purchase contract keeps camelCase.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

Period = Literal["annual", "quarterly", "ttm"]
Operator = Literal["eq", "gt", "gte", "lt", "lte"]
Currency = Literal["USD", "EUR", "GBP", "JPY", "CHF", "AUD", "CAD", "SEK"]
FilingType = Literal["10-K", "10-Q", "8-K", "4", "144"]


class FinancialStatementsInput(BaseModel):
    ticker: str = Field(description="The ticker of the stock. Example: 'AAPL'")
    period: Period = Field(
        default="annual",
        description="The time period of the statements. Example: 'annual'",
    )
    limit: int = Field(
        default=5,
        gt=0,
        description="The number of statements to return. Example: 5",
    )


class TickerInput(BaseModel):
    ticker: str = Field(description="The ticker of the company. Example: 'AAPL'")


class SearchFilter(BaseModel):
    field: str = Field(
        description="The financial metric field to filter on. E.g. 'revenue', 'net_income'."
    )
    operator: Operator = Field(description="The comparison operator.")
    value: float = Field(description="The value to compare against.")


class FinancialsSearchInput(BaseModel):
    filters: list[SearchFilter] = Field(description="An array of filter objects.")
    period: Period = Field(default="ttm", description="Time period for financial data.")
    limit: int = Field(default=100, ge=1, le=100, description="Maximum number of results.")
    order_by: Optional[str] = Field(
        default=None,
        description="Field to order results by (e.g. 'ticker', '-revenue').",
    )
    currency: Optional[Currency] = Field(default=None, description="Currency for financial data.")
    historical: bool = Field(default=False, description="Whether to return historical data.")


class SecFilingsInput(BaseModel):
    ticker: Optional[str] = Field(
        default=None, description="The ticker symbol of the company (e.g. AAPL)."
    )
    cik: Optional[str] = Field(
        default=None, description="The Central Index Key (CIK) of the company."
    )
    filing_type: Optional[FilingType] = Field(default=None, description="The type of filing.")

    @model_validator(mode="after")
    def _require_identifier(self) -> "SecFilingsInput":
        if not self.ticker and not self.cik:
            raise ValueError("Either 'ticker' or 'cik' must be provided.")
        return self


class NoInput(BaseModel):
    pass


class WebSearchInput(BaseModel):
    query: str = Field(description="Free-text search query.")


class PurchaseStockInput(BaseModel):
    ticker: Optional[str] = Field(
        default=None, description="The ticker of the stock. Example: 'AAPL'"
    )
    companyName: Optional[str] = Field(
        default=None,
        description=(
            "The name of the company. This field should be populated if you "
            "do not know the ticker."
        ),
    )
    quantity: int = Field(
        default=1, ge=1, description="The quantity of stock to purchase. Defaults to 1."
    )
    maxPurchasePrice: float = Field(
        gt=0, description="The max price per share at which to purchase the stock."
    )


class TickerExtraction(BaseModel):
    """Extract the ticker symbol of a company from the provided context."""

    ticker: str = Field(description="The ticker symbol of the company")
