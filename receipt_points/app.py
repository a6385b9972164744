from __future__ import annotations

import argparse
import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from .config import SERVICE_NAME, Settings, load_settings
from .logging import configure_logging
from .service import PointsService
from .store import ReceiptStore
from .transport.rest import build_router, install_error_handlers
from .version import get_version_info

log = logging.getLogger(__name__)


def setup_tracing(app: FastAPI, settings: Settings) -> None:
	if not settings.otlp_endpoint:
		log.info("tracing disabled (no OTLP_ENDPOINT)")
		return

	resource = Resource.create({"service.name": settings.service})
	provider = TracerProvider(resource=resource)
	exporter = OTLPSpanExporter(endpoint=settings.otlp_endpoint, insecure=True)
	provider.add_span_processor(BatchSpanProcessor(exporter))
	trace.set_tracer_provider(provider)
	FastAPIInstrumentor.instrument_app(app, tracer_provider=provider)
	log.info("tracing enabled", extra={"otlp_endpoint": settings.otlp_endpoint})


def create_app(
	settings: Settings | None = None, store: ReceiptStore | None = None
) -> FastAPI:
	settings = settings or load_settings()
	svc = PointsService(settings, store)

	@asynccontextmanager
	async def lifespan(app: FastAPI):
		log.info("starting service", extra=get_version_info())
		yield
		log.info("stopping service", extra={"receipts": len(svc.store)})

	app = FastAPI(
		title=SERVICE_NAME, version=get_version_info()["version"], lifespan=lifespan
	)
	app.state.service = svc
	install_error_handlers(app)
	app.include_router(build_router(settings, svc))
	setup_tracing(app, settings)
	return app


def main() -> None:
	settings = load_settings()
	configure_logging(
		service=SERVICE_NAME, json_mode=settings.json_logs, level=settings.log_level
	)

	parser = argparse.ArgumentParser(
		prog=SERVICE_NAME, description="Receipt loyalty points HTTP service"
	)
	parser.add_argument(
		"--host",
		default=settings.host,
		help=f"bind address (default: {settings.host})",
	)
	parser.add_argument(
		"--port",
		type=int,
		default=settings.port,
		help=f"HTTP port (default: {settings.port})",
	)
	args = parser.parse_args()

	try:
		app = create_app(settings)
		log.info("listening", extra={"host": args.host, "port": args.port})
		uvicorn.run(app, host=args.host, port=args.port, log_config=None)
	except Exception as e:
		log.error("Server failed to start", extra={"error": str(e)})
		sys.exit(1)


if __name__ == "__main__":
	main()
