"""Tests for the /users endpoints."""
import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_orgadmin_creates_user_in_own_organization(client: AsyncClient, headers_for, admin_a):
    response = await client.post(
        "/users",
        json={"name": "Ana", "email": "ANA@Mensajeria.com.ar", "password": "secret123"},
        headers=headers_for(admin_a),
    )
    assert response.status_code == 201, response.text
    data = response.json()
    assert data["email"] == "ana@mensajeria.com.ar"
    assert data["role"] == "COURIER"
    assert data["organization_id"] == str(admin_a.organization_id)
    assert "password_hash" not in data


@pytest.mark.asyncio
async def test_duplicate_email_is_409(client: AsyncClient, headers_for, admin_a, courier_user_a):
    response = await client.post(
        "/users",
        json={"name": "Copy", "email": courier_user_a.email.upper(), "password": "secret123"},
        headers=headers_for(admin_a),
    )
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_only_superadmin_grants_superadmin(
    client: AsyncClient, headers_for, admin_a, courier_user_a, superadmin
):
    payload = {
        "name": "Root",
        "email": "root@mensajeria.com.ar",
        "password": "secret123",
        "role": "SUPERADMIN",
    }
    assert (await client.post("/users", json=payload, headers=headers_for(admin_a))).status_code == 403

    promote = await client.put(
        f"/users/{courier_user_a.id}", json={"role": "SUPERADMIN"}, headers=headers_for(admin_a)
    )
    assert promote.status_code == 403

    created = await client.post("/users", json=payload, headers=headers_for(superadmin))
    assert created.status_code == 201


@pytest.mark.asyncio
async def test_courier_reads_only_itself(
    client: AsyncClient, headers_for, courier_user_a, admin_a
):
    headers = headers_for(courier_user_a)

    me = await client.get("/users/me", headers=headers)
    assert me.status_code == 200
    assert me.json()["id"] == str(courier_user_a.id)

    assert (await client.get(f"/users/{courier_user_a.id}", headers=headers)).status_code == 200
    assert (await client.get(f"/users/{admin_a.id}", headers=headers)).status_code == 403
    assert (await client.get("/users", headers=headers)).status_code == 403
    assert (
        await client.put(f"/users/{courier_user_a.id}", json={"name": "x"}, headers=headers)
    ).status_code == 403


@pytest.mark.asyncio
async def test_password_change_allows_new_login(
    client: AsyncClient, headers_for, admin_a, courier_user_a
):
    response = await client.put(
        f"/users/{courier_user_a.id}", json={"password": "brand-new-pass"}, headers=headers_for(admin_a)
    )
    assert response.status_code == 200

    login = await client.post(
        "/auth/login", json={"email": courier_user_a.email, "password": "brand-new-pass"}
    )
    assert login.status_code == 200


@pytest.mark.asyncio
async def test_deactivated_user_token_stops_working(
    client: AsyncClient, headers_for, admin_a, courier_user_a
):
    courier_headers = headers_for(courier_user_a)
    response = await client.put(
        f"/users/{courier_user_a.id}", json={"is_active": False}, headers=headers_for(admin_a)
    )
    assert response.status_code == 200

    assert (await client.get("/users/me", headers=courier_headers)).status_code == 401


@pytest.mark.asyncio
async def test_password_over_bcrypt_byte_limit_is_400(
    client: AsyncClient, headers_for, admin_a, courier_user_a
):
    # 40 characters, 80 bytes in UTF-8
    long_password = "é" * 40
    created = await client.post(
        "/users",
        json={"name": "Eva", "email": "eva@mensajeria.com.ar", "password": long_password},
        headers=headers_for(admin_a),
    )
    assert created.status_code == 400, created.text

    updated = await client.put(
        f"/users/{courier_user_a.id}",
        json={"password": long_password},
        headers=headers_for(admin_a),
    )
    assert updated.status_code == 400, updated.text


@pytest.mark.asyncio
async def test_list_filters_by_email_and_role(
    client: AsyncClient, headers_for, admin_a, courier_user_a, admin_b
):
    headers = headers_for(admin_a)

    by_role = await client.get("/users", params={"role": "COURIER"}, headers=headers)
    assert by_role.status_code == 200
    assert [u["id"] for u in by_role.json()] == [str(courier_user_a.id)]

    by_email = await client.get(
        "/users", params={"email": courier_user_a.email.upper()}, headers=headers
    )
    assert [u["id"] for u in by_email.json()] == [str(courier_user_a.id)]

    other_tenant = await client.get("/users", params={"email": admin_b.email}, headers=headers)
    assert other_tenant.json() == []

    bad_role = await client.get("/users", params={"role": "DRIVER"}, headers=headers)
    assert bad_role.status_code == 422
