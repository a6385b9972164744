from __future__ import annotations

import logging

from opentelemetry import trace

from .config import Settings
from .points import points_breakdown
from .schemas import Receipt
from .store import MemoryReceiptStore, ReceiptStore
from .validation import ensure_valid

log = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class ReceiptNotFound(KeyError):
	def __init__(self, receipt_id: str) -> None:
		super().__init__(receipt_id)
		self.receipt_id = receipt_id


class PointsService:
	def __init__(self, settings: Settings, store: ReceiptStore | None = None) -> None:
		self.settings = settings
		self.store = store if store is not None else MemoryReceiptStore()

	def process(self, receipt: Receipt) -> str:
		with tracer.start_as_current_span("service.process") as span:
			span.set_attribute("items.count", len(receipt.items))

			ensure_valid(receipt)

			breakdown = points_breakdown(receipt)
			points = sum(breakdown.values())
			log.debug("points breakdown", extra={"breakdown": breakdown})

			receipt_id = self.store.put(points)
			span.set_attribute("receipt.points", points)

		log.info(
			"processed receipt",
			extra={"receipt_id": receipt_id, "points": points},
		)
		return receipt_id

	def points(self, receipt_id: str) -> int:
		with tracer.start_as_current_span("service.points") as span:
			points = self.store.get(receipt_id)
			span.set_attribute("receipt.found", points is not None)

		if points is None:
			log.info("receipt not found", extra={"receipt_id": receipt_id})
			raise ReceiptNotFound(receipt_id)

		log.info(
			"retrieved points",
			extra={"receipt_id": receipt_id, "points": points},
		)
		return points
