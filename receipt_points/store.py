from __future__ import annotations

import logging
import os
import secrets
import threading
from typing import Dict, Protocol

log = logging.getLogger(__name__)

ID_BYTES = 16


def generate_id() -> str:
	try:
		return secrets.token_hex(ID_BYTES)
	except (OSError, NotImplementedError) as e:
		# fatal for the whole process
		log.critical("failed to generate unique id", extra={"error": str(e)})
		os._exit(1)


class ReceiptStore(Protocol):
	def put(self, points: int) -> str: ...
	def get(self, receipt_id: str) -> int | None: ...
	def __len__(self) -> int: ...


class MemoryReceiptStore:
	"""Process-lifetime id -> points map. No update or delete."""

	def __init__(self) -> None:
		self._lock = threading.Lock()
		self._points: Dict[str, int] = {}

	def put(self, points: int) -> str:
		with self._lock:
			receipt_id = generate_id()
			while receipt_id in self._points:
				receipt_id = generate_id()
			self._points[receipt_id] = points
		return receipt_id

	def get(self, receipt_id: str) -> int | None:
		with self._lock:
			return self._points.get(receipt_id)

	def __len__(self) -> int:
		with self._lock:
			return len(self._points)
