from __future__ import annotations

import logging
from dataclasses import dataclass

from .parsing import parse_float, parse_int, trim_space
from .schemas import Receipt

log = logging.getLogger(__name__)

RETAILER_REQUIRED = "retailer field is required"
INVALID_DATE = "Invalid purchaseDate. Expected format: YYYY-MM-DD"
INVALID_TIME = "Invalid purchaseTime. Expected format: HH:MM"
ITEMS_REQUIRED = "items list must contain at least one item"
INVALID_DESCRIPTION = "all items must have a valid shortDescription"
INVALID_PRICE = "all items must have a valid price in the format '0.00'"


class ReceiptValidationError(ValueError):
	def __init__(self, field: str, reason: str) -> None:
		super().__init__(f"Invalid receipt: {reason}")
		self.field = field
		self.reason = reason


@dataclass(frozen=True)
class ValidationResult:
	ok: bool
	field: str | None = None
	reason: str | None = None


VALID = ValidationResult(ok=True)


def is_valid_date(date: str) -> bool:
	"""YYYY-MM-DD with day in 1..31; month lengths are not checked."""
	if len(date) != 10 or date[4] != "-" or date[7] != "-":
		return False
	year = parse_int(date[:4])
	month = parse_int(date[5:7])
	day = parse_int(date[8:10])
	if year is None or month is None or day is None:
		return False
	return year >= 1 and 1 <= month <= 12 and 1 <= day <= 31


def is_valid_time(time: str) -> bool:
	if len(time) != 5 or time[2] != ":":
		return False
	hour = parse_int(time[:2])
	minute = parse_int(time[3:])
	if hour is None or minute is None:
		return False
	return 0 <= hour <= 23 and 0 <= minute <= 59


def validate_receipt(receipt: Receipt) -> ValidationResult:
	"""Run the checks in order and report the first failure."""
	if not trim_space(receipt.retailer):
		return ValidationResult(False, "retailer", RETAILER_REQUIRED)

	if not is_valid_date(receipt.purchaseDate):
		return ValidationResult(False, "purchaseDate", INVALID_DATE)

	if not is_valid_time(receipt.purchaseTime):
		return ValidationResult(False, "purchaseTime", INVALID_TIME)

	if len(receipt.items) < 1:
		return ValidationResult(False, "items", ITEMS_REQUIRED)

	for i, item in enumerate(receipt.items):
		if not trim_space(item.shortDescription):
			return ValidationResult(
				False, f"items[{i}].shortDescription", INVALID_DESCRIPTION
			)
		if parse_float(item.price) is None:
			return ValidationResult(False, f"items[{i}].price", INVALID_PRICE)

	return VALID


def ensure_valid(receipt: Receipt) -> None:
	result = validate_receipt(receipt)
	if not result.ok:
		log.info(
			"receipt rejected",
			extra={"field": result.field, "reason": result.reason},
		)
		raise ReceiptValidationError(result.field or "", result.reason or "")
