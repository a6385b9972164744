from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Callable

SERVICE_NAME = "receipt-points"


def _env(name: str, default: Any, cast: Callable[[str], Any]):
	raw = os.getenv(name)
	if raw is None:
		return default
	try:
		return cast(raw)
	except Exception as e:
		raise ValueError(
			f"env var {name!r}={raw!r} not valid for {cast.__name__}"
		) from e


@dataclass(frozen=True)
class Settings:
	service: str = SERVICE_NAME
	log_level: str = "INFO"
	json_logs: bool = False
	otlp_endpoint: str | None = None
	host: str = "0.0.0.0"
	port: int = 8080
	json_content_type: str = "application/json"


def load_settings() -> Settings:
	# read at call time so tests and the CLI see the current environment
	otlp_endpoint = _env("OTLP_ENDPOINT", None, str)
	loki_url = _env("LOKI_URL", None, str)  # presence toggles json logs, no direct emission
	return Settings(
		log_level=_env("LOG_LEVEL", "INFO", str),
		json_logs=bool(otlp_endpoint or loki_url),
		otlp_endpoint=otlp_endpoint,
		host=_env("HOST", "0.0.0.0", str).strip(),
		port=_env("PORT", 8080, int),
	)
