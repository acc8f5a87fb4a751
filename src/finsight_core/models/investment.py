"""Investment growth data models."""

from decimal import Decimal

from pydantic import BaseModel, Field, computed_field, field_validator


class InvestmentInputs(BaseModel):
    """Fixed assumptions for a compound growth projection."""

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "initial_amount": "1000",
                    "monthly_contribution": "500",
                    "annual_return_percent": "7",
                    "time_horizon_years": 30,
                }
            ]
        }
    }

    initial_amount: Decimal = Field(default=Decimal("0"), ge=0)
    monthly_contribution: Decimal = Field(default=Decimal("0"), ge=0)
    annual_return_percent: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Annual return in percent (7 means 7%)",
    )
    time_horizon_years: int = Field(default=1, ge=1)

    @computed_field
    @property
    def monthly_rate(self) -> Decimal:
        """Periodic growth rate as a fraction."""
        return self.annual_return_percent / Decimal(100) / Decimal(12)

    @field_validator(
        "initial_amount", "monthly_contribution", "annual_return_percent", mode="before"
    )
    @classmethod
    def coerce_to_decimal(cls, v):
        """Coerce string and float amounts to Decimal."""
        if isinstance(v, (str, float)):
            return Decimal(str(v))
        return v


class YearlySnapshot(BaseModel):
    """Displayed state of an investment at the end of a year.

    Values are rounded to whole currency units; the projection keeps its
    running totals unrounded.
    """

    year: int = Field(ge=0)
    balance: Decimal
    contributions_this_year: Decimal
    earnings: Decimal
    cumulative_contributions: Decimal


class InvestmentSummary(BaseModel):
    """Headline figures taken from the final year of a projection."""

    total_balance: Decimal = Decimal("0")
    total_contributions: Decimal = Decimal("0")
    total_earnings: Decimal = Decimal("0")
