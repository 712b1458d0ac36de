"""Account CRUD routes (auth gate overridden to test_user)."""

import uuid

import pytest


@pytest.mark.asyncio
async def test_create_and_list_accounts(client, test_user):
    r = await client.post(
        "/api/accounts",
        json={
            "report": "Balance Sheet",
            "accountClass": "Assets",
            "caption": "Cash and equivalents",
            "fsLine": "1000",
            "currency": "EUR",
        },
    )
    assert r.status_code == 201
    account = r.json()
    assert account["accountClass"] == "Assets"
    assert account["fsLine"] == "1000"
    assert account["userId"] == str(test_user.id)

    r = await client.get("/api/accounts")
    assert r.status_code == 200
    assert [a["caption"] for a in r.json()] == ["Cash and equivalents"]


@pytest.mark.asyncio
async def test_delete_account(client):
    r = await client.post("/api/accounts", json={"caption": "Suspense"})
    account_id = r.json()["id"]

    r = await client.delete(f"/api/accounts/{account_id}")
    assert r.status_code == 200
    assert r.json() == {"message": "Account deleted"}

    r = await client.get("/api/accounts")
    assert r.json() == []


@pytest.mark.asyncio
async def test_delete_missing_account(client):
    r = await client.delete(f"/api/accounts/{uuid.uuid4()}")
    assert r.status_code == 404
    assert r.json() == {"error": "Account not found"}
