from __future__ import annotations

import copy

import pytest

BASE = "/api/v1/registrations"


async def _create(client, payload, registration_id=None, timestamp=None):
    body = copy.deepcopy(payload)
    if registration_id:
        body["id"] = registration_id
    if timestamp:
        body["timestamp"] = timestamp
    resp = await client.post(BASE, json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.mark.asyncio
async def test_create_and_get_registration(client, registration_payload):
    created = await _create(client, registration_payload)

    assert created["id"].startswith("reg-")
    assert created["status"] == "Completed"
    assert created["synced"] is False
    assert created["is_sample"] is False
    assert created["analysis_outcome"] == "success"
    animal = created["animals"][0]
    assert animal["id"].startswith("animal-")
    assert animal["ai_result"]["breed_name"] == "Murrah"
    assert animal["ai_result"]["reasoning"] == {"en": "Tightly curled horns", "hi": "मुड़े हुए सींग"}

    resp = await client.get(f"{BASE}/{created['id']}")
    assert resp.status_code == 200
    assert resp.json() == created


@pytest.mark.asyncio
async def test_creating_without_ids_never_overwrites(client, registration_payload):
    ids = {(await _create(client, registration_payload))["id"] for _ in range(3)}

    assert len(ids) == 3
    assert (await client.get(BASE)).json()["total"] == 3


@pytest.mark.asyncio
async def test_list_is_newest_first_and_searchable(client, registration_payload):
    await _create(client, registration_payload, "reg-old", "2024-05-01T08:00:00Z")
    other = copy.deepcopy(registration_payload)
    other["owner"]["name"] = "Mohan Lal"
    other["owner"]["state"] = "Rajasthan"
    await _create(client, other, "reg-new", "2024-05-09T08:00:00Z")

    resp = await client.get(BASE)
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 2
    assert [r["id"] for r in data["items"]] == ["reg-new", "reg-old"]

    resp = await client.get(BASE, params={"search": "rajasthan"})
    assert [r["id"] for r in resp.json()["items"]] == ["reg-new"]

    resp = await client.get(BASE, params={"search": "murrah"})
    assert resp.json()["total"] == 2


@pytest.mark.asyncio
async def test_resubmitting_a_draft_completes_it(client, registration_payload):
    draft = copy.deepcopy(registration_payload)
    draft["status"] = "Draft"
    draft["animals"] = []
    saved = await _create(client, draft, "reg-draft", "2024-05-02T10:00:00Z")
    assert saved["status"] == "Draft"

    completed = copy.deepcopy(registration_payload)
    completed["id"] = "reg-draft"
    resp = await client.post(BASE, json=completed)

    assert resp.status_code == 201
    body = resp.json()
    assert body["status"] == "Completed"
    assert body["timestamp"].startswith("2024-05-02T10:00:00")
    listed = (await client.get(BASE)).json()
    assert listed["total"] == 1


@pytest.mark.asyncio
async def test_update_registration(client, registration_payload):
    created = await _create(client, registration_payload, "reg-1")
    update = {
        "status": "Completed",
        "owner": dict(registration_payload["owner"], village="Nilokheri"),
        "animals": created["animals"],
    }

    resp = await client.put(f"{BASE}/reg-1", json=update)

    assert resp.status_code == 200
    body = resp.json()
    assert body["owner"]["village"] == "Nilokheri"
    assert body["timestamp"] == created["timestamp"]
    assert body["animals"][0]["id"] == created["animals"][0]["id"]


@pytest.mark.asyncio
async def test_unknown_registration_returns_not_found(client, registration_payload):
    resp = await client.get(f"{BASE}/reg-missing")
    assert resp.status_code == 404
    assert resp.json()["code"] == "not_found"

    resp = await client.put(
        f"{BASE}/reg-missing",
        json={"owner": registration_payload["owner"], "animals": []},
    )
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_invalid_payload_returns_validation_error(client, registration_payload):
    body = copy.deepcopy(registration_payload)
    body["animals"][0]["species"] = "Goat"

    resp = await client.post(BASE, json=body)

    assert resp.status_code == 422
    data = resp.json()
    assert data["code"] == "validation_error"
    assert data["details"]["errors"]


@pytest.mark.asyncio
async def test_vaccination_lifecycle(client, registration_payload):
    created = await _create(client, registration_payload, "reg-1")
    animal_id = created["animals"][0]["id"]
    url = f"{BASE}/reg-1/animals/{animal_id}/vaccinations"

    resp = await client.post(
        url,
        json={
            "vaccine_name": "HS Vaccine",
            "administered_date": "2024-05-01",
            "due_date": "2025-05-01",
            "notes": "Pre-monsoon",
        },
    )
    assert resp.status_code == 201
    vaccinations = resp.json()["animals"][0]["vaccinations"]
    assert len(vaccinations) == 1
    assert vaccinations[0]["vaccine_name"] == "HS Vaccine"
    vaccination_id = vaccinations[0]["id"]

    resp = await client.post(
        url,
        json={"vaccine_name": "FMD", "administered_date": "2024-05-01", "due_date": "2024-04-01"},
    )
    assert resp.status_code == 422
    assert resp.json()["message"] == "Due date must be after the administered date"

    resp = await client.delete(f"{url}/{vaccination_id}")
    assert resp.status_code == 200
    assert resp.json()["animals"][0]["vaccinations"] == []

    resp = await client.delete(f"{url}/{vaccination_id}")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_vaccination_suggestions(client, registration_payload, fake_gateway):
    created = await _create(client, registration_payload, "reg-1")
    animal_id = created["animals"][0]["id"]

    resp = await client.post(f"{BASE}/reg-1/animals/{animal_id}/vaccination-suggestions")

    assert resp.status_code == 200
    data = resp.json()
    assert data["error"] is None
    assert data["suggestions"][0]["vaccine_name"] == "FMD Vaccine"
    assert fake_gateway.calls[-1] == ("get_vaccination_schedule", ("Murrah", "Buffalo"))


@pytest.mark.asyncio
async def test_registration_report_pdf(client, registration_payload):
    await _create(client, registration_payload, "reg-1")

    resp = await client.get(f"{BASE}/reg-1/report.pdf")

    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert 'filename="reg-1.pdf"' in resp.headers["content-disposition"]
    assert resp.content.startswith(b"%PDF")
