"""
Order Request Validator

Turns an untrusted submission into a well-typed OrderRequest. Every rule is
checked and every violation is reported, so a caller can show all problems
in one response.
"""

import json
import logging
import math
from typing import Any, List

from .models import OrderLineItem, OrderRequest, ValidationResult

logger = logging.getLogger(__name__)

INVALID_JSON = "Request body must be valid JSON"
NOT_AN_OBJECT = "Request body must be a JSON object"


def _is_finite_number(value: Any) -> bool:
    # bool is an int subclass but never a valid amount
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # int beyond float range
        return False


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


class RequestValidator:
    """Validates raw order submissions"""

    def __init__(self, reject_non_positive_items: bool = False):
        """
        Args:
            reject_non_positive_items: Also reject zero or negative price/quantity
        """
        self.reject_non_positive_items = reject_non_positive_items

    def decode(self, raw: Any) -> ValidationResult:
        """Decode a JSON string or bytes body, passing dicts through"""
        if isinstance(raw, (str, bytes, bytearray)):
            try:
                raw = json.loads(raw)
            except ValueError:
                return ValidationResult(errors=[INVALID_JSON])
        return self.validate(raw)

    def validate(self, raw: Any) -> ValidationResult:
        """
        Validate a decoded submission.

        Args:
            raw: Decoded JSON value

        Returns:
            ValidationResult with a request on success, or the ordered errors
        """
        if not isinstance(raw, dict):
            return ValidationResult(errors=[NOT_AN_OBJECT])

        errors: List[str] = []

        if not _is_non_empty_string(raw.get("orderId")):
            errors.append("orderId is required and must be a non-empty string")
        if not _is_non_empty_string(raw.get("userId")):
            errors.append("userId is required and must be a non-empty string")

        items = raw.get("items")
        if not isinstance(items, list):
            errors.append("items is required and must be an array")
        elif not items:
            errors.append("items must contain at least one item")
        else:
            for index, item in enumerate(items):
                errors.extend(self._validate_item(index, item))

        if errors:
            logger.debug(f"Rejected order submission: {errors}")
            return ValidationResult(errors=errors)

        request = OrderRequest(
            order_id=raw["orderId"],
            user_id=raw["userId"],
            items=[OrderLineItem(price=item["price"], quantity=item["quantity"]) for item in items],
        )
        return ValidationResult(request=request)

    def _validate_item(self, index: int, item: Any) -> List[str]:
        if not isinstance(item, dict):
            return [f"items[{index}] must be an object"]

        errors = []
        for field in ("price", "quantity"):
            value = item.get(field)
            if not _is_finite_number(value):
                errors.append(f"items[{index}].{field} must be a finite number")
            elif self.reject_non_positive_items and value <= 0:
                errors.append(f"items[{index}].{field} must be greater than zero")
        return errors
