import pytest
from fastapi.testclient import TestClient

from receipt_points.app import create_app
from receipt_points.config import Settings
from receipt_points.schemas import Item, Receipt
from receipt_points.store import MemoryReceiptStore


@pytest.fixture
def store():
	return MemoryReceiptStore()


@pytest.fixture
def client(store):
	with TestClient(create_app(Settings(), store)) as c:
		yield c


@pytest.fixture
def target_receipt() -> Receipt:
	return Receipt(
		retailer="Target",
		purchaseDate="2022-01-01",
		purchaseTime="13:01",
		items=[Item(shortDescription="Mountain Dew 12PK", price="6.49")],
		total="35.35",
	)


@pytest.fixture
def target_payload(target_receipt) -> dict:
	return target_receipt.model_dump()
