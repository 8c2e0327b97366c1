"""
Input validation schemas using Pydantic for the JSON API.
Field aliases keep the camelCase keys the web client sends.
"""
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from marathon.utilities.constants import (
    MIN_DAYS, MAX_DAYS, MIN_START_WAGER, MAX_PLAN_NAME_LENGTH, MIN_PASSWORD_LENGTH,
)

EMAIL_PATTERN = r'^[^@\s]+@[^@\s]+\.[^@\s]+$'


class RegisterInput(BaseModel):
    """Schema for account registration."""
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=254)
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)

    @field_validator('name', 'email', mode='before')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v


class LoginInput(BaseModel):
    email: str = Field(..., pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=1)


class PlanCreateInput(BaseModel):
    """Schema for a new plan. Bounds mirror the stored column sizes."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=MAX_PLAN_NAME_LENGTH)
    start_wager: Decimal = Field(..., alias='startWager', ge=MIN_START_WAGER,
                                 max_digits=12, decimal_places=2)
    odds: Decimal = Field(..., gt=1, max_digits=4, decimal_places=2)
    days: int = Field(..., ge=MIN_DAYS, le=MAX_DAYS)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Plan name cannot be empty')
        return v.strip()


class DayResultInput(BaseModel):
    result: Literal['win', 'loss']


class RestartInput(BaseModel):
    day: int = Field(..., ge=1)
