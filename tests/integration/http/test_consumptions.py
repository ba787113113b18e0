from __future__ import annotations

from decimal import Decimal

import pytest

BASE = "/api/v1/feeding/consumptions"


async def _record(client, feed_item_id: int, quantity: str, shed: str = "G1", day: str = "2025-06-10"):
    return await client.post(
        BASE,
        json={"shed": shed, "feed_item_id": feed_item_id, "quantity": quantity, "date": day},
    )


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/api/v1/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_consumption_lifecycle_keeps_stock_in_step(client, seed_feed_item, feed_stock):
    feed_id = await seed_feed_item(stock="100", unit_cost="2")

    created = await _record(client, feed_id, "30")
    assert created.status_code == 201, created.text
    body = created.json()
    consumption_id = body["id"]
    assert Decimal(body["quantity"]) == Decimal("30")
    assert Decimal(body["cost"]) == Decimal("60")
    assert body["feed_item"]["name"] == "Alfalfa"
    assert Decimal(body["feed_item"]["stock"]) == Decimal("70")
    assert await feed_stock(feed_id) == Decimal("70")

    updated = await client.put(f"{BASE}/{consumption_id}", json={"quantity": "50"})
    assert updated.status_code == 200, updated.text
    assert Decimal(updated.json()["quantity"]) == Decimal("50")
    assert await feed_stock(feed_id) == Decimal("50")

    deleted = await client.delete(f"{BASE}/{consumption_id}")
    assert deleted.status_code == 200
    assert deleted.json() == {"deleted": True}
    assert await feed_stock(feed_id) == Decimal("100")

    missing = await client.get(f"{BASE}/{consumption_id}")
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_insufficient_stock_rejects_and_leaves_stock(client, seed_feed_item, feed_stock):
    feed_id = await seed_feed_item(stock="5")

    resp = await _record(client, feed_id, "10")

    assert resp.status_code == 400
    body = resp.json()
    assert body["code"] == "insufficient_stock"
    assert "Available: 5 kg" in body["message"]
    assert "requested: 10 kg" in body["message"]
    assert await feed_stock(feed_id) == Decimal("5")
    assert (await client.get(BASE)).json() == []


@pytest.mark.asyncio
async def test_failed_update_rolls_back_stock_and_record(client, seed_feed_item, feed_stock):
    feed_id = await seed_feed_item(stock="100")
    consumption_id = (await _record(client, feed_id, "30")).json()["id"]

    resp = await client.put(f"{BASE}/{consumption_id}", json={"quantity": "500"})

    assert resp.status_code == 400
    assert resp.json()["code"] == "insufficient_stock"
    assert await feed_stock(feed_id) == Decimal("70")
    current = (await client.get(f"{BASE}/{consumption_id}")).json()
    assert Decimal(current["quantity"]) == Decimal("30")


@pytest.mark.asyncio
async def test_update_can_switch_feed_item(client, seed_feed_item, feed_stock):
    alfalfa = await seed_feed_item(name="Alfalfa", stock="100")
    maize = await seed_feed_item(name="Maiz", stock="20")
    consumption_id = (await _record(client, alfalfa, "30")).json()["id"]

    resp = await client.put(
        f"{BASE}/{consumption_id}", json={"feed_item_id": maize, "quantity": "15"}
    )

    assert resp.status_code == 200, resp.text
    assert resp.json()["feed_item"]["name"] == "Maiz"
    assert await feed_stock(alfalfa) == Decimal("100")
    assert await feed_stock(maize) == Decimal("5")


@pytest.mark.asyncio
async def test_unknown_records_and_feed_items(client, seed_feed_item):
    feed_id = await seed_feed_item()

    assert (await _record(client, 999, "1")).status_code == 404
    update = await client.put(f"{BASE}/999", json={"quantity": "1"})
    assert update.status_code == 404
    assert update.json()["code"] == "not_found"
    deleted = await client.delete(f"{BASE}/999")
    assert deleted.status_code == 200
    assert deleted.json() == {"deleted": False}

    consumption_id = (await _record(client, feed_id, "1")).json()["id"]
    moved = await client.put(f"{BASE}/{consumption_id}", json={"feed_item_id": 999})
    assert moved.status_code == 404


@pytest.mark.asyncio
async def test_invalid_payloads_are_rejected(client, seed_feed_item, feed_stock):
    feed_id = await seed_feed_item(stock="10")

    for payload in (
        {"shed": "G1", "feed_item_id": feed_id, "quantity": "0"},
        {"shed": "G1", "feed_item_id": feed_id, "quantity": "-2"},
        {"shed": "G1", "feed_item_id": "abc", "quantity": "1"},
        {"shed": "", "feed_item_id": feed_id, "quantity": "1"},
    ):
        resp = await client.post(BASE, json=payload)
        assert resp.status_code == 422, payload
        assert resp.json()["code"] == "validation_error"

    assert (await client.get(f"{BASE}/abc")).status_code == 422
    assert await feed_stock(feed_id) == Decimal("10")


@pytest.mark.asyncio
async def test_quantities_beyond_three_decimals_are_rejected(client, seed_feed_item, feed_stock):
    feed_id = await seed_feed_item(stock="100")

    for _ in range(3):
        resp = await _record(client, feed_id, "0.0004")
        assert resp.status_code == 422
        assert resp.json()["code"] == "validation_error"
    assert await feed_stock(feed_id) == Decimal("100")

    created = await _record(client, feed_id, "1.250")
    assert created.status_code == 201, created.text
    consumption_id = created.json()["id"]

    resp = await client.put(f"{BASE}/{consumption_id}", json={"quantity": "1.0005"})
    assert resp.status_code == 422
    assert Decimal((await client.get(f"{BASE}/{consumption_id}")).json()["quantity"]) == Decimal("1.25")
    assert await feed_stock(feed_id) == Decimal("98.75")

    assert (await client.delete(f"{BASE}/{consumption_id}")).json() == {"deleted": True}
    assert await feed_stock(feed_id) == Decimal("100")


@pytest.mark.asyncio
async def test_listing_filters_by_shed_and_date(client, seed_feed_item):
    feed_id = await seed_feed_item(stock="100")
    await _record(client, feed_id, "1", shed="G1", day="2025-06-01")
    await _record(client, feed_id, "2", shed="G2", day="2025-06-05")
    await _record(client, feed_id, "3", shed="G1", day="2025-06-09")

    everything = (await client.get(BASE)).json()
    assert [row["date"] for row in everything] == ["2025-06-09", "2025-06-05", "2025-06-01"]

    shed = (await client.get(f"{BASE}/shed/G1")).json()
    assert {row["shed"] for row in shed} == {"G1"}
    assert len(shed) == 2

    ranged = (
        await client.get(BASE, params={"date_from": "2025-06-02", "date_to": "2025-06-08"})
    ).json()
    assert [Decimal(row["quantity"]) for row in ranged] == [Decimal("2")]

    inverted = await client.get(BASE, params={"date_from": "2025-06-09", "date_to": "2025-06-01"})
    assert inverted.status_code == 422


@pytest.mark.asyncio
async def test_statistics(client, seed_feed_item):
    alfalfa = await seed_feed_item(name="Alfalfa", stock="100", unit_cost="2")
    maize = await seed_feed_item(name="Maiz", stock="100", unit_cost="0.5")
    await _record(client, alfalfa, "10", shed="G1")
    await _record(client, alfalfa, "5", shed="G2")
    await _record(client, maize, "4", shed="G1")

    resp = await client.get(f"{BASE}/statistics")

    assert resp.status_code == 200
    body = resp.json()
    assert body["total_count"] == 3
    assert Decimal(body["total_cost"]) == Decimal("32")
    assert Decimal(body["by_shed"]["G1"]["cost"]) == Decimal("22")
    assert Decimal(body["by_shed"]["G2"]["quantity"]) == Decimal("5")
    assert Decimal(body["by_feed_item"]["Alfalfa"]["quantity"]) == Decimal("15")
    assert body["by_feed_item"]["Maiz"]["unit"] == "kg"
