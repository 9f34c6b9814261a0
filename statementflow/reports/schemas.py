"""Pydantic schemas for records crossing the package boundary."""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from statementflow.categorize.categories import Category
from statementflow.insights.models import InsightType, Severity


class TransactionSchema(BaseModel):
    """Pydantic schema for transaction records supplied by callers."""
    date: str = Field(description="Transaction date in MM/DD format")
    description: str = Field(min_length=1, description="Transaction description")
    amount: str = Field(description="Signed amount, negative for expenses")
    category: Optional[Category] = Field(default=None, description="Canonical category key")

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_as_text(cls, value: Union[str, int, float, Decimal]) -> str:
        if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("category", mode="before")
    @classmethod
    def _blank_category(cls, value):
        return value or None


class InsightDataSchema(BaseModel):
    """Pydantic schema for insight figures."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    current_amount: float
    previous_amount: Optional[float] = None
    change_percent: Optional[float] = None
    suggested_budget: Optional[float] = None
    threshold: Optional[float] = None


class InsightSchema(BaseModel):
    """Pydantic schema for serialized insights."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    type: InsightType
    category: str
    message: str
    severity: Severity
    data: InsightDataSchema
    actionable: bool
    timestamp: datetime


class InsightsResponse(BaseModel):
    """Pydantic schema for an insights export."""
    insights: List[InsightSchema]
