from __future__ import annotations

from uuid import uuid4

import pytest

API = "/api/v1"
SECRET_HEADER = {"X-Manager-Secret": "shepherd-override"}


async def create_group(client, name: str) -> dict:
    resp = await client.post(f"{API}/groups/", json={"name": name})
    assert resp.status_code == 201, resp.text
    return resp.json()


async def create_ewe(client, tag: str, group_id: str | None, **extra) -> dict:
    body = {"tag": tag, "sex": "female", "group_id": group_id, **extra}
    resp = await client.post(f"{API}/animals/", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


async def create_batch(client, name: str = "SPRING-24", **extra) -> dict:
    body = {"name": name, "start_date": "2024-11-20", **extra}
    resp = await client.post(f"{API}/breeding/batches/", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


async def record(client, batch_id: str, ewe_id: str, cycle: int, result: str, headers=None):
    return await client.post(
        f"{API}/breeding/batches/{batch_id}/ewes/{ewe_id}/cycles/{cycle}",
        json={"result": result},
        headers=headers or {},
    )


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get(f"{API}/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_spring_batch_end_to_end(client):
    vazias = await create_group(client, "VAZIAS")
    sire_id = str(uuid4())
    ewes = [await create_ewe(client, f"E-{i}", vazias["id"]) for i in range(3)]
    batch = await create_batch(client, sire_id=sire_id)
    assert batch["status"] == "open"

    resp = await client.get(f"{API}/breeding/batches/{batch['id']}/candidates")
    assert {a["id"] for a in resp.json()} == {e["id"] for e in ewes}

    for ewe in ewes:
        resp = await client.post(
            f"{API}/breeding/batches/{batch['id']}/enrollments", json={"ewe_id": ewe["id"]}
        )
        assert resp.status_code == 201, resp.text

    groups = {g["name"]: g["id"] for g in (await client.get(f"{API}/groups/")).json()}
    assert "EM MONTA" in groups
    animal = (await client.get(f"{API}/animals/{ewes[0]['id']}")).json()
    assert animal["group_id"] == groups["EM MONTA"]

    # E-0 pregnant on cycle 2, E-1 empty three times, E-2 still in progress
    assert (await record(client, batch["id"], ewes[0]["id"], 1, "empty")).status_code == 200
    resp = await record(client, batch["id"], ewes[0]["id"], 2, "pregnant")
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["enrollment"]["finalized"] is True
    assert body["enrollment"]["attempt_count"] == 2
    assert body["pregnancy_record"]["due_date"] == "2025-04-19"
    assert body["pregnancy_record"]["sire_id"] == sire_id

    for n in (1, 2, 3):
        resp = await record(client, batch["id"], ewes[1]["id"], n, "empty")
        assert resp.status_code == 200, resp.text

    summary = (await client.get(f"{API}/breeding/batches/{batch['id']}/summary")).json()
    assert summary == {
        "batch_id": batch["id"],
        "enrolled": 3,
        "pregnant": 1,
        "final_empty": 1,
        "in_progress": 1,
    }

    pregnancies = (await client.get(f"{API}/pregnancies/", params={"ewe_id": ewes[0]["id"]})).json()
    assert len(pregnancies) == 1
    assert (await client.get(f"{API}/animals/{ewes[0]['id']}")).json()["is_pregnant"] is True

    resp = await client.post(
        f"{API}/pregnancies/{pregnancies[0]['id']}/outcome",
        json={"outcome": "birth", "actual_date": "2025-04-17"},
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["outcome"] == "birth"
    assert (await client.get(f"{API}/animals/{ewes[0]['id']}")).json()["is_pregnant"] is False

    resp = await client.delete(f"{API}/breeding/batches/{batch['id']}")
    assert resp.status_code == 200, resp.text
    assert len(resp.json()["released_ewe_ids"]) == 3
    assert (await client.get(f"{API}/breeding/batches/{batch['id']}")).status_code == 404

    for ewe in ewes:
        animal = (await client.get(f"{API}/animals/{ewe['id']}")).json()
        assert animal["group_id"] == vazias["id"]
    # Closed outcomes survive the batch
    history = (await client.get(f"{API}/pregnancies/", params={"ewe_id": ewes[0]["id"]})).json()
    assert [r["outcome"] for r in history] == ["birth"]
    assert history[0]["origin_batch_id"] is None


@pytest.mark.asyncio
async def test_override_requires_manager_secret(client):
    vazias = await create_group(client, "Matrizes Vazias")
    ewe = await create_ewe(client, "E-OVR", vazias["id"])
    batch = await create_batch(client)
    await client.post(f"{API}/breeding/batches/{batch['id']}/enrollments", json={"ewe_id": ewe["id"]})
    assert (await record(client, batch["id"], ewe["id"], 1, "pregnant")).status_code == 200

    # Same value again is a retry
    assert (await record(client, batch["id"], ewe["id"], 1, "pregnant")).status_code == 200
    assert len((await client.get(f"{API}/pregnancies/")).json()) == 1

    resp = await record(client, batch["id"], ewe["id"], 1, "empty")
    assert resp.status_code == 403
    assert resp.json()["code"] == "forbidden"

    resp = await record(
        client, batch["id"], ewe["id"], 1, "empty", headers={"X-Manager-Secret": "nope"}
    )
    assert resp.status_code == 403

    resp = await record(client, batch["id"], ewe["id"], 1, "empty", headers=SECRET_HEADER)
    assert resp.status_code == 200, resp.text
    assert resp.json()["enrollment"]["finalized"] is False
    assert resp.json()["pregnancy_record"] is None
    assert (await client.get(f"{API}/pregnancies/")).json() == []


@pytest.mark.asyncio
async def test_enrollment_rules(client):
    vazias = await create_group(client, "VAZIAS")
    lactating = await create_group(client, "LACTATING")
    ewe = await create_ewe(client, "E-1", vazias["id"])
    outsider = await create_ewe(client, "E-2", lactating["id"])
    first = await create_batch(client, "SPRING-24")
    second = await create_batch(client, "AUTUMN-24")

    resp = await client.post(
        f"{API}/breeding/batches/{first['id']}/enrollments", json={"ewe_id": outsider["id"]}
    )
    assert resp.status_code == 422

    resp = await client.post(
        f"{API}/breeding/batches/{first['id']}/enrollments", json={"ewe_id": ewe["id"]}
    )
    assert resp.status_code == 201
    enrollment_id = resp.json()["id"]

    resp = await client.post(
        f"{API}/breeding/batches/{second['id']}/enrollments", json={"ewe_id": ewe["id"]}
    )
    assert resp.status_code == 409
    assert resp.json()["code"] == "conflict"

    resp = await record(client, first["id"], ewe["id"], 2, "empty")
    assert resp.status_code == 422

    resp = await client.delete(
        f"{API}/breeding/batches/{first['id']}/enrollments/{enrollment_id}",
        params={"ewe_id": ewe["id"]},
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["enrollment_removed"] is True
    assert (await client.get(f"{API}/animals/{ewe['id']}")).json()["group_id"] == vazias["id"]

    resp = await client.post(
        f"{API}/breeding/batches/{second['id']}/enrollments", json={"ewe_id": ewe["id"]}
    )
    assert resp.status_code == 201


@pytest.mark.asyncio
async def test_closed_batch_rejects_changes(client):
    vazias = await create_group(client, "VAZIAS")
    ewe = await create_ewe(client, "E-1", vazias["id"])
    batch = await create_batch(client)

    resp = await client.post(f"{API}/breeding/batches/{batch['id']}/close")
    assert resp.status_code == 200
    assert resp.json()["status"] == "closed"

    resp = await client.post(
        f"{API}/breeding/batches/{batch['id']}/enrollments", json={"ewe_id": ewe["id"]}
    )
    assert resp.status_code == 422

    listed = (await client.get(f"{API}/breeding/batches/", params={"status": "closed"})).json()
    assert [b["id"] for b in listed] == [batch["id"]]
    assert (await client.get(f"{API}/breeding/batches/", params={"status": "bogus"})).status_code == 422


@pytest.mark.asyncio
async def test_due_date_projection(client):
    resp = await client.get(f"{API}/pregnancies/due-date", params={"covering_date": "2024-09-01"})
    assert resp.status_code == 200
    assert resp.json() == {
        "covering_date": "2024-09-01",
        "due_date": "2025-01-29",
        "gestation_days": 150,
    }


@pytest.mark.asyncio
async def test_duplicate_group_name_conflicts(client):
    await create_group(client, "VAZIAS")
    resp = await client.post(f"{API}/groups/", json={"name": " vazias "})
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_removal_with_unknown_enrollment_keeps_live_enrollment(client):
    vazias = await create_group(client, "VAZIAS")
    ewe = await create_ewe(client, "E-1", vazias["id"])
    first = await create_batch(client, "SPRING-24")
    second = await create_batch(client, "AUTUMN-24")
    await client.post(f"{API}/breeding/batches/{second['id']}/enrollments", json={"ewe_id": ewe["id"]})
    assert (await record(client, second["id"], ewe["id"], 1, "pregnant")).status_code == 200

    resp = await client.delete(
        f"{API}/breeding/batches/{first['id']}/enrollments/{uuid4()}",
        params={"ewe_id": ewe["id"]},
    )
    assert resp.status_code == 409

    animal = (await client.get(f"{API}/animals/{ewe['id']}")).json()
    assert animal["is_pregnant"] is True
    assert animal["group_id"] != vazias["id"]
