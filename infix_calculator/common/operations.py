"""Pydantic models for arithmetic operation requests and their outcomes."""
from pydantic import BaseModel, Field, field_validator


class OperationRequest(BaseModel):
    """Represents a single arithmetic expression to evaluate."""

    expression: str = Field(..., description="Arithmetic expression as a string")

    @field_validator("expression")
    def expression_must_not_be_empty(cls, v: str) -> str:
        """Ensure that the expression is not empty."""
        if not v.strip():
            raise ValueError("Expression cannot be empty")
        return v


class OperationResult(BaseModel):
    """Represents the result of an evaluated arithmetic operation."""

    expression: str = Field(..., description="Original arithmetic expression")
    result: float = Field(..., description="Evaluated numeric result of the expression")

    def __str__(self) -> str:
        return f"{self.expression} = {self.result}"


class OperationFailure(BaseModel):
    """Represents an arithmetic operation that could not be evaluated."""

    expression: str = Field(..., description="Original arithmetic expression")
    error: str = Field(..., description="Reason the evaluation failed")

    def __str__(self) -> str:
        return f"{self.expression} -> ERROR: {self.error}"
