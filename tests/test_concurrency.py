# tests/test_concurrency.py
import asyncio
import httpx
from fastapi.testclient import TestClient
from app.main import app
from app.database import reset_store

client = TestClient(app)


async def _send(method, url, **kwargs):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        return await ac.request(method, url, **kwargs)


async def _gather(*calls):
    return await asyncio.gather(*calls)


def test_concurrent_deletes_only_one_wins():
    reset_store()
    r = client.post("/api/products", json={"product_name": "last", "price": "1.00", "quantity": 1})
    pid = r.json()["id"]

    results = asyncio.run(_gather(*[_send("DELETE", f"/api/products/{pid}") for _ in range(5)]))
    statuses = sorted(r.status_code for r in results)
    assert statuses == [204, 404, 404, 404, 404]


def test_concurrent_creates_get_distinct_ids():
    reset_store()
    payload = {"product_name": "bulk", "price": "2.50", "quantity": 3}
    results = asyncio.run(_gather(*[_send("POST", "/api/products", json=payload) for _ in range(10)]))
    ids = [r.json()["id"] for r in results]
    assert len(set(ids)) == 10
    assert len(client.get("/api/products").json()) == 10


def test_update_racing_delete_never_resurrects():
    reset_store()
    pid = client.post("/api/products", json={"product_name": "x", "price": "1", "quantity": 1}).json()["id"]
    body = {"product_name": "y", "price": "1", "quantity": 1}

    results = asyncio.run(_gather(
        _send("DELETE", f"/api/products/{pid}"),
        _send("PUT", f"/api/products/{pid}", json=body),
    ))
    assert results[0].status_code == 204
    assert results[1].status_code in (200, 404)
    assert client.get("/api/products").json() == []
