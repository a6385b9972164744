from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# amounts stay strings on the wire and are parsed where they are scored


class Item(BaseModel):
	model_config = ConfigDict(frozen=True)

	shortDescription: str = ""
	price: str = ""


class Receipt(BaseModel):
	model_config = ConfigDict(frozen=True)

	retailer: str = ""
	purchaseDate: str = ""
	purchaseTime: str = ""
	items: list[Item] = Field(default_factory=list)
	total: str = ""


class ProcessResponse(BaseModel):
	id: str


class PointsResponse(BaseModel):
	points: int


class Health(BaseModel):
	status: str = "ok"


class ErrorBody(BaseModel):
	code: str
	message: str
	details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
	error: ErrorBody
