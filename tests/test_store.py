import re
from concurrent.futures import ThreadPoolExecutor

import pytest

from receipt_points import store as store_module
from receipt_points.store import MemoryReceiptStore, generate_id


def test_generate_id_is_128_bit_hex():
	receipt_id = generate_id()
	assert re.fullmatch(r"[0-9a-f]{32}", receipt_id)
	assert generate_id() != receipt_id


def test_put_then_get_round_trip(store):
	for points in (0, 1, 12, 98, 10**9):
		receipt_id = store.put(points)
		assert store.get(receipt_id) == points


def test_unknown_id_is_missing(store):
	store.put(5)
	assert store.get("not-an-id") is None
	assert store.get("") is None


def test_concurrent_puts_keep_every_entry():
	store = MemoryReceiptStore()
	with ThreadPoolExecutor(max_workers=8) as pool:
		ids = list(pool.map(store.put, range(500)))

	assert len(set(ids)) == 500
	assert len(store) == 500
	assert [store.get(i) for i in ids] == list(range(500))


def test_entropy_failure_exits_process(monkeypatch):
	def no_entropy(nbytes):
		raise OSError("entropy source exhausted")

	def fake_exit(code):
		raise SystemExit(code)

	monkeypatch.setattr(store_module.secrets, "token_hex", no_entropy)
	monkeypatch.setattr(store_module.os, "_exit", fake_exit)

	with pytest.raises(SystemExit) as exc_info:
		generate_id()
	assert exc_info.value.code == 1


def test_gets_run_alongside_puts():
	store = MemoryReceiptStore()
	seeded = {store.put(n): n for n in range(100)}

	def put_then_get(points):
		receipt_id = store.put(points)
		return store.get(receipt_id)

	with ThreadPoolExecutor(max_workers=8) as pool:
		writes = [pool.submit(put_then_get, 1000 + n) for n in range(300)]
		reads = [pool.submit(store.get, rid) for rid in list(seeded) * 3]
		written = [f.result() for f in writes]
		read = [f.result() for f in reads]

	assert written == [1000 + n for n in range(300)]
	assert read == list(seeded.values()) * 3
	assert len(store) == 400
