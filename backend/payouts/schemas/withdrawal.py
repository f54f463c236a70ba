"""Withdrawal Schemas — Pydantic models for withdrawal API boundaries.

Invariants:
    - WithdrawalCreate.amount: finite, > 0 (numeric strings coerced, booleans refused)
    - WithdrawalReject.rejection_reason: optional, stripped, <= 1000 chars,
      blank treated as absent
"""

from pydantic import BaseModel, Field, field_validator


class WithdrawalCreate(BaseModel):
    """Restaurant withdrawal request body."""
    amount: float = Field(gt=0, allow_inf_nan=False)

    @field_validator("amount", mode="before")
    @classmethod
    def refuse_boolean(cls, v):
        if isinstance(v, bool):
            raise ValueError("amount must be a number")
        return v


class WithdrawalReject(BaseModel):
    """Admin rejection body. Reason is optional."""
    rejection_reason: str | None = Field(None, max_length=1000)

    @field_validator("rejection_reason")
    @classmethod
    def strip_reason(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(
            page=page, limit=limit, total=total,
            pages=(total + limit - 1) // limit,
        )
