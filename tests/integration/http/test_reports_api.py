from __future__ import annotations

import copy
import csv
import io

import pytest

from pashuvision.infrastructure.reports.csv_exporter import CSV_HEADERS


@pytest.mark.asyncio
async def test_registrations_csv_export(client, registration_payload):
    for registration_id, status, timestamp in (
        ("reg-old", "Completed", "2024-05-01T08:00:00Z"),
        ("reg-new", "Completed", "2024-05-09T08:00:00.123Z"),
        ("reg-draft", "Draft", "2024-05-10T08:00:00Z"),
    ):
        body = copy.deepcopy(registration_payload)
        body.update(id=registration_id, status=status, timestamp=timestamp)
        resp = await client.post("/api/v1/registrations", json=body)
        assert resp.status_code == 201

    resp = await client.get("/api/v1/reports/registrations.csv")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert 'filename="pashuvision_registrations.csv"' in resp.headers["content-disposition"]
    assert "\r\n" in resp.text
    rows = list(csv.reader(io.StringIO(resp.text, newline="")))
    assert rows[0] == CSV_HEADERS
    assert [row[0] for row in rows[1:]] == ["reg-new", "reg-old"]
    assert rows[1][1] == "2024-05-09T08:00:00.123Z"
    assert rows[1][3] == "Sita Devi"
    assert rows[1][14] == "Murrah"
    assert rows[1][17] == "Tightly curled horns"


@pytest.mark.asyncio
async def test_empty_export_has_header_only(client):
    resp = await client.get("/api/v1/reports/registrations.csv")

    assert resp.status_code == 200
    assert resp.text == ",".join(CSV_HEADERS) + "\r\n"
