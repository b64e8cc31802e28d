"""Base validator classes for CLI input."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from scriptengine.exceptions import ValidationError

T = TypeVar("T")

__all__ = ["ValidationError", "Validator"]


class Validator(ABC, Generic[T]):
    """Base class for input validators."""

    @abstractmethod
    def validate(self, value: Any) -> T:
        """Validate input value.

        Args:
            value: Value to validate

        Returns:
            Validated value, possibly transformed

        Raises:
            ValidationError: If validation fails
        """

    def validate_required(self, value: Any, field_name: str) -> Any:
        """Validate that a value is not None or empty."""
        if value is None:
            raise ValidationError(
                f"{field_name} is required", details={"field": field_name}
            )
        if isinstance(value, str) and not value.strip():
            raise ValidationError(
                f"{field_name} cannot be empty", details={"field": field_name}
            )
        return value
