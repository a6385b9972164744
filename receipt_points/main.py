from __future__ import annotations

from .app import create_app
from .config import SERVICE_NAME, load_settings
from .logging import configure_logging

# entry point for `uvicorn receipt_points.main:app`
settings = load_settings()
log = configure_logging(
	service=SERVICE_NAME, json_mode=settings.json_logs, level=settings.log_level
)

app = create_app(settings)
