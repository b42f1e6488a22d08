"""Tests for the /tasks endpoints."""
import pytest
from httpx import AsyncClient


async def _create_task(client: AsyncClient, headers: dict, **fields) -> dict:
    payload = {"type": "DELIVER", **fields}
    response = await client.post("/tasks", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def _create_client(client: AsyncClient, headers: dict, name="Acme", street="Acme St") -> dict:
    response = await client.post(
        "/clients",
        json={"name": name, "address": {"street": street, "city": "CABA"}},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_create_and_get_task(client: AsyncClient, headers_for, admin_a):
    headers = headers_for(admin_a)
    acme = await _create_client(client, headers)

    created = await _create_task(
        client, headers, client_id=acme["id"], reference_number="R-100", priority="URGENT"
    )
    assert created["status"] == "PENDING"
    assert created["organization_id"] == str(admin_a.organization_id)
    assert created["client_name"] == "Acme"
    assert created["address"]["street"] == "Acme St"

    response = await client.get(f"/tasks/{created['id']}", headers=headers)
    assert response.status_code == 200
    assert response.json()["reference_number"] == "R-100"


@pytest.mark.asyncio
async def test_create_with_client_and_provider_is_400(client: AsyncClient, headers_for, admin_a):
    headers = headers_for(admin_a)
    acme = await _create_client(client, headers)
    provider = await client.post("/providers", json={"name": "Prov"}, headers=headers)

    response = await client.post(
        "/tasks",
        json={"type": "RETIRE", "client_id": acme["id"], "provider_id": provider.json()["id"]},
        headers=headers,
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_duplicate_reference_number_is_409(client: AsyncClient, headers_for, admin_a, admin_b):
    await _create_task(client, headers_for(admin_a), reference_number="R1")

    duplicate = await client.post(
        "/tasks", json={"type": "DELIVER", "reference_number": "R1"}, headers=headers_for(admin_a)
    )
    assert duplicate.status_code == 409

    await _create_task(client, headers_for(admin_b), reference_number="R1")


@pytest.mark.asyncio
async def test_unknown_and_malformed_ids(client: AsyncClient, headers_for, admin_a):
    headers = headers_for(admin_a)
    missing = await client.get("/tasks/00000000-0000-0000-0000-000000000000", headers=headers)
    assert missing.status_code == 404

    malformed_path = await client.get("/tasks/not-a-uuid", headers=headers)
    assert malformed_path.status_code == 422

    malformed_body = await client.post(
        "/tasks", json={"type": "DELIVER", "client_id": "nope"}, headers=headers
    )
    assert malformed_body.status_code == 400


@pytest.mark.asyncio
async def test_other_organization_gets_403(client: AsyncClient, headers_for, admin_a, admin_b):
    task = await _create_task(client, headers_for(admin_a))
    intruder = headers_for(admin_b)

    assert (await client.get(f"/tasks/{task['id']}", headers=intruder)).status_code == 403
    assert (
        await client.put(f"/tasks/{task['id']}", json={"notes": "x"}, headers=intruder)
    ).status_code == 403
    assert (await client.delete(f"/tasks/{task['id']}", headers=intruder)).status_code == 403


@pytest.mark.asyncio
async def test_partial_update(client: AsyncClient, headers_for, admin_a):
    headers = headers_for(admin_a)
    task = await _create_task(client, headers, reference_number="R1", contact="Juan")

    response = await client.put(
        f"/tasks/{task['id']}", json={"notes": "Fragile", "freight_cert": True}, headers=headers
    )
    assert response.status_code == 200, response.text
    data = response.json()
    assert data["notes"] == "Fragile"
    assert data["freight_cert"] is True
    assert data["reference_number"] == "R1"
    assert data["contact"] == "Juan"


@pytest.mark.asyncio
async def test_status_change_is_recorded_in_history(client: AsyncClient, headers_for, admin_a):
    headers = headers_for(admin_a)
    task = await _create_task(client, headers)

    response = await client.patch(
        f"/tasks/{task['id']}/status", json={"status": "CONFIRMED"}, headers=headers
    )
    assert response.status_code == 200
    assert response.json()["status"] == "CONFIRMED"

    history = await client.get("/task-history", params={"task_id": task["id"]}, headers=headers)
    assert history.status_code == 200
    new_statuses = sorted(entry["new_status"] for entry in history.json())
    assert new_statuses == ["CONFIRMED", "PENDING"]


@pytest.mark.asyncio
async def test_list_filters(client: AsyncClient, headers_for, admin_a, admin_b):
    headers = headers_for(admin_a)
    courier = await client.post(
        "/couriers", json={"name": "Pedro", "phone_number": "1155550000"}, headers=headers
    )
    assigned = await _create_task(client, headers, courier_id=courier.json()["id"])
    confirmed = await _create_task(client, headers, status="CONFIRMED")
    await _create_task(client, headers_for(admin_b))

    everything = await client.get("/tasks", headers=headers)
    assert {t["id"] for t in everything.json()} == {assigned["id"], confirmed["id"]}

    unassigned = await client.get("/tasks", params={"unassigned": "true"}, headers=headers)
    assert [t["id"] for t in unassigned.json()] == [confirmed["id"]]

    by_courier = await client.get(
        "/tasks", params={"courier_id": courier.json()["id"]}, headers=headers
    )
    assert [t["id"] for t in by_courier.json()] == [assigned["id"]]
    assert by_courier.json()[0]["courier_name"] == "Pedro"

    by_status = await client.get(
        "/tasks", params=[("status", "CONFIRMED"), ("status", "COMPLETED")], headers=headers
    )
    assert [t["id"] for t in by_status.json()] == [confirmed["id"]]


@pytest.mark.asyncio
async def test_courier_updates_but_cannot_create_or_delete(
    client: AsyncClient, headers_for, admin_a, courier_user_a
):
    task = await _create_task(client, headers_for(admin_a))
    courier = headers_for(courier_user_a)

    create = await client.post("/tasks", json={"type": "DELIVER"}, headers=courier)
    assert create.status_code == 403

    update = await client.put(
        f"/tasks/{task['id']}", json={"courier_notes": "Delivered to doorman"}, headers=courier
    )
    assert update.status_code == 200
    assert update.json()["courier_notes"] == "Delivered to doorman"

    delete = await client.delete(f"/tasks/{task['id']}", headers=courier)
    assert delete.status_code == 403


@pytest.mark.asyncio
async def test_receipt_photo_upload_sets_task_url(
    client: AsyncClient, headers_for, admin_a, courier_user_a
):
    task = await _create_task(client, headers_for(admin_a))

    response = await client.post(
        f"/tasks/{task['id']}/photo",
        files={"photo": ("receipt.jpg", b"\xff\xd8\xff-jpeg", "image/jpeg")},
        headers=headers_for(courier_user_a),
    )
    assert response.status_code == 200, response.text
    data = response.json()
    assert data["photo_type"] == "RECEIPT"
    assert data["photo_id"] is None
    assert data["photo_url"].startswith(f"/media/tasks/{task['id']}/receipt/")

    fetched = await client.get(f"/tasks/{task['id']}", headers=headers_for(admin_a))
    assert fetched.json()["receipt_photo_url"] == data["photo_url"]


@pytest.mark.asyncio
async def test_additional_photo_upload_creates_photo_row(client: AsyncClient, headers_for, admin_a):
    headers = headers_for(admin_a)
    task = await _create_task(client, headers)

    response = await client.post(
        f"/tasks/{task['id']}/photo",
        files={"photo": ("door.png", b"\x89PNG-bytes", "image/png")},
        data={"photo_type": "ADDITIONAL"},
        headers=headers,
    )
    assert response.status_code == 200, response.text
    photo_id = response.json()["photo_id"]
    assert photo_id

    photos = await client.get("/task-photos", params={"task_id": task["id"]}, headers=headers)
    assert [p["id"] for p in photos.json()] == [photo_id]


@pytest.mark.asyncio
async def test_photo_upload_rejects_non_images(client: AsyncClient, headers_for, admin_a):
    headers = headers_for(admin_a)
    task = await _create_task(client, headers)

    response = await client.post(
        f"/tasks/{task['id']}/photo",
        files={"photo": ("notes.txt", b"hello", "text/plain")},
        headers=headers,
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_photo_upload_to_other_organization_is_403(
    client: AsyncClient, headers_for, admin_a, admin_b
):
    task = await _create_task(client, headers_for(admin_a))
    response = await client.post(
        f"/tasks/{task['id']}/photo",
        files={"photo": ("receipt.jpg", b"jpeg", "image/jpeg")},
        headers=headers_for(admin_b),
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_delete_task(client: AsyncClient, headers_for, admin_a):
    headers = headers_for(admin_a)
    task = await _create_task(client, headers, address_override={"street": "Override St"})

    response = await client.delete(f"/tasks/{task['id']}", headers=headers)
    assert response.status_code == 204
    assert (await client.get(f"/tasks/{task['id']}", headers=headers)).status_code == 404
