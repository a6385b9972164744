from __future__ import annotations

import json
import logging

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..config import Settings
from ..schemas import (
	ErrorBody,
	ErrorResponse,
	Health,
	PointsResponse,
	ProcessResponse,
	Receipt,
)
from ..service import PointsService, ReceiptNotFound
from ..validation import ReceiptValidationError

log = logging.getLogger(__name__)


def http_error(
	code: str, message: str, status: int, details: dict | None = None
) -> JSONResponse:
	return JSONResponse(
		status_code=status,
		content=ErrorResponse(
			error=ErrorBody(code=code, message=message, details=details or {})
		).model_dump(),
	)


_STATUS_CODES = {
	404: ("NOT_FOUND", "Endpoint not found"),
	405: ("METHOD_NOT_ALLOWED", "Method not allowed"),
}


async def http_exception_handler(
	request: Request, exc: StarletteHTTPException
) -> JSONResponse:
	code, message = _STATUS_CODES.get(exc.status_code, ("HTTP_ERROR", str(exc.detail)))
	resp = http_error(code, message, exc.status_code, {"path": request.url.path})
	if exc.headers:
		resp.headers.update(exc.headers)
	return resp


def install_error_handlers(app: FastAPI) -> None:
	app.add_exception_handler(StarletteHTTPException, http_exception_handler)


def build_router(settings: Settings, svc: PointsService) -> APIRouter:
	router = APIRouter()

	@router.get("/health", response_model=Health)
	async def health() -> Health:
		return Health()

	@router.post("/receipts/process", response_model=ProcessResponse)
	async def process(request: Request) -> JSONResponse:
		log.info(
			"received receipt",
			extra={"method": request.method, "path": request.url.path},
		)

		if request.headers.get("content-type") != settings.json_content_type:
			return http_error(
				"UNSUPPORTED_MEDIA_TYPE",
				f"Content-Type must be {settings.json_content_type}",
				415,
			)

		body = await request.body()
		try:
			payload = json.loads(body)
		except ValueError as e:
			return http_error("INVALID_JSON", f"Invalid JSON payload: {e}", 400)

		try:
			receipt = Receipt.model_validate(payload)
		except ValidationError as e:
			return http_error(
				"INVALID_JSON",
				"Invalid JSON payload: receipt has the wrong shape",
				400,
				{
					"errors": e.errors(
						include_url=False, include_context=False, include_input=False
					)
				},
			)

		try:
			receipt_id = svc.process(receipt)
		except ReceiptValidationError as e:
			return http_error("VALIDATION_ERROR", str(e), 400, {"field": e.field})
		except Exception:
			log.exception("process failed")
			return http_error("INTERNAL", "failed to process receipt", 500)

		return JSONResponse(ProcessResponse(id=receipt_id).model_dump())

	@router.get("/receipts/{receipt_id}/points", response_model=PointsResponse)
	async def points(receipt_id: str) -> JSONResponse:
		try:
			value = svc.points(receipt_id)
		except ReceiptNotFound:
			return http_error("NOT_FOUND", "Receipt not found", 404)
		except Exception:
			log.exception("points lookup failed")
			return http_error("INTERNAL", "failed to look up receipt", 500)

		return JSONResponse(PointsResponse(points=value).model_dump())

	return router
