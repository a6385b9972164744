"""Loyalty points for a validated receipt.

Each rule is a pure function of the receipt returning a non-negative
contribution; the score is their sum. Rules parse the string fields
themselves and contribute zero when a field does not parse, so scoring
never fails.

* retailer: one point per ASCII letter or digit in the retailer name
* round total: 50 points if the total has no cents
* quarter total: 25 points if the total is a multiple of 0.25
* item pairs: 5 points for every two items
* descriptions: ``ceil(price * 0.2)`` for each item whose trimmed
  description length in UTF-8 bytes is a multiple of 3
* odd day: 6 points if the last two characters of the date are an odd number
* afternoon: 10 points if the purchase hour is 14 or 15
"""

from __future__ import annotations

import math
from typing import Callable

from .parsing import parse_float, parse_int, trim_space
from .schemas import Receipt

Rule = Callable[[Receipt], int]


def retailer_points(receipt: Receipt) -> int:
	return sum(1 for ch in receipt.retailer if ch.isascii() and ch.isalnum())


def round_total_points(receipt: Receipt) -> int:
	total = parse_float(receipt.total)
	if total is None or not math.isfinite(total):
		return 0
	return 50 if math.fmod(total, 1) == 0 else 0


def quarter_total_points(receipt: Receipt) -> int:
	total = parse_float(receipt.total)
	if total is None or not math.isfinite(total):
		return 0
	return 25 if math.fmod(total, 0.25) == 0 else 0


def item_pair_points(receipt: Receipt) -> int:
	return (len(receipt.items) // 2) * 5


def description_points(receipt: Receipt) -> int:
	points = 0
	for item in receipt.items:
		# length in UTF-8 bytes; an all-whitespace description trims to 0,
		# which still counts
		description = trim_space(item.shortDescription)
		if len(description.encode("utf-8")) % 3 != 0:
			continue
		price = parse_float(item.price)
		if price is None or not math.isfinite(price):
			continue
		points += max(math.ceil(price * 0.2), 0)
	return points


def odd_day_points(receipt: Receipt) -> int:
	date = receipt.purchaseDate
	if len(date) < 10:
		return 0
	# taken from the end of the string, not from a parsed date
	day = parse_int(date[-2:])
	return 6 if day is not None and day % 2 != 0 else 0


def afternoon_points(receipt: Receipt) -> int:
	time = receipt.purchaseTime
	if len(time) < 5:
		return 0
	hour = parse_int(time[:2])
	minute = parse_int(time[3:])
	if hour is None or minute is None:
		return 0
	if (hour == 14 and minute >= 0) or (hour == 15 and minute < 60):
		return 10
	return 0


RULES: tuple[tuple[str, Rule], ...] = (
	("retailer", retailer_points),
	("round_total", round_total_points),
	("quarter_total", quarter_total_points),
	("item_pairs", item_pair_points),
	("descriptions", description_points),
	("odd_day", odd_day_points),
	("afternoon", afternoon_points),
)


def points_breakdown(receipt: Receipt) -> dict[str, int]:
	return {name: rule(receipt) for name, rule in RULES}


def calculate_points(receipt: Receipt) -> int:
	return sum(points_breakdown(receipt).values())
