from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import Any

from opentelemetry import trace
from pythonjsonlogger import jsonlogger

from .config import SERVICE_NAME

# extras attached by the service and validator when a receipt is handled
RECEIPT_FIELDS = ("receipt_id", "points", "field", "reason")


class LokiJSONFormatter(jsonlogger.JsonFormatter):
	"""JSON lines for Loki; receipt extras are grouped under ``receipt``."""

	def add_fields(
		self,
		log_record: dict[str, Any],
		record: logging.LogRecord,
		message_dict: dict[str, Any],
	):
		super().add_fields(log_record, record, message_dict)

		log_record["timestamp"] = datetime.fromtimestamp(
			record.created, timezone.utc
		).isoformat(timespec="milliseconds")
		log_record["level"] = record.levelname.lower()
		log_record["service"] = log_record.get("service") or SERVICE_NAME

		for key in ("levelname", "color_message", "asctime"):
			log_record.pop(key, None)

		receipt = {
			key: log_record.pop(key) for key in RECEIPT_FIELDS if key in log_record
		}
		if receipt:
			log_record["receipt"] = receipt

		ctx = trace.get_current_span().get_span_context()
		if ctx.is_valid:
			log_record["trace_id"] = f"{ctx.trace_id:032x}"
			log_record["span_id"] = f"{ctx.span_id:016x}"

		return log_record


class ReceiptTextFormatter(logging.Formatter):
	"""Plain lines for local runs, with receipt extras as ``key=value``."""

	def format(self, record: logging.LogRecord) -> str:
		line = super().format(record)
		pairs = [
			f"{key}={getattr(record, key)}"
			for key in RECEIPT_FIELDS
			if hasattr(record, key)
		]
		return f"{line} {' '.join(pairs)}" if pairs else line


def configure_logging(
	service: str, json_mode: bool, level: str = "INFO"
) -> logging.Logger:
	root = logging.getLogger()
	if root.handlers:
		return logging.getLogger(__name__)

	handler = logging.StreamHandler(sys.stdout)
	if json_mode:
		handler.setFormatter(
			LokiJSONFormatter(
				"%(timestamp)s %(level)s %(service)s %(name)s %(message)s",
				static_fields={"service": service},
			)
		)
	else:
		handler.setFormatter(
			ReceiptTextFormatter(fmt="%(levelname)s %(name)s - %(message)s")
		)

	root.setLevel(level.upper())
	root.addHandler(handler)

	for name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
		ul = logging.getLogger(name)
		ul.handlers = [handler]
		ul.propagate = False

	return logging.getLogger(__name__)
