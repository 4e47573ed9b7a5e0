"""Share, Profile & Health Routes — HTTP contract outside the task body.

Tests cover:
    - owner grants, changes and revokes roles (204 each)
    - editor lists shares; viewer cannot (403); stranger gets 404
    - non-owner share / revoke -> 403; viewer delete / share / revoke -> 403
    - unknown email -> 404, sharing with the owner -> 400
    - revoke of a missing share is still 204
    - GET /me returns the provisioned user, 404 for an unprovisioned id
    - liveness and readiness checks; readiness 503 when the tasks table is missing
"""

from uuid import uuid4

import pytest

from taskshare.models.task import Task


@pytest.fixture
async def task_id(client, users):
    res = await client.post(
        "/api/v1/tasks", json={"title": "Shared doc"}, headers=users.owner.headers,
    )
    return res.json()["id"]


def _share_url(task_id) -> str:
    return f"/api/v1/tasks/{task_id}/share"


async def _grant(client, actor, task_id, email, role):
    return await client.post(
        _share_url(task_id), json={"user_email": email, "role": role}, headers=actor.headers,
    )


# ─── grant / list ────────────────────────────────────────────────

async def test_owner_grants_and_lists(client, users, task_id):
    assert (await _grant(client, users.owner, task_id, users.editor.email, "editor")).status_code == 204
    assert (await _grant(client, users.owner, task_id, users.viewer.email, "viewer")).status_code == 204

    res = await client.get(_share_url(task_id), headers=users.owner.headers)
    assert res.status_code == 200
    roles = {s["email"]: s["role"] for s in res.json()}
    assert roles == {users.editor.email: "editor", users.viewer.email: "viewer"}


async def test_regrant_changes_role(client, users, task_id):
    await _grant(client, users.owner, task_id, users.viewer.email, "viewer")
    await _grant(client, users.owner, task_id, users.viewer.email, "editor")

    res = await client.get(_share_url(task_id), headers=users.owner.headers)
    assert [(s["email"], s["role"]) for s in res.json()] == [(users.viewer.email, "editor")]


async def test_editor_lists_but_viewer_cannot(client, users, task_id):
    await _grant(client, users.owner, task_id, users.editor.email, "editor")
    await _grant(client, users.owner, task_id, users.viewer.email, "viewer")

    assert (await client.get(_share_url(task_id), headers=users.editor.headers)).status_code == 200
    assert (await client.get(_share_url(task_id), headers=users.viewer.headers)).status_code == 403
    assert (await client.get(_share_url(task_id), headers=users.stranger.headers)).status_code == 404


async def test_editor_cannot_grant(client, users, task_id):
    await _grant(client, users.owner, task_id, users.editor.email, "editor")
    res = await _grant(client, users.editor, task_id, users.stranger.email, "viewer")
    assert res.status_code == 403


async def test_grant_unknown_email_is_404(client, users, task_id):
    res = await _grant(client, users.owner, task_id, "nobody@example.com", "viewer")
    assert res.status_code == 404


async def test_grant_to_owner_is_400(client, users, task_id):
    res = await _grant(client, users.owner, task_id, users.owner.email, "editor")
    assert res.status_code == 400


async def test_grant_owner_role_is_400(client, users, task_id):
    res = await _grant(client, users.owner, task_id, users.editor.email, "owner")
    assert res.status_code == 400


# ─── revoke ──────────────────────────────────────────────────────

async def test_revoke_removes_access(client, users, task_id):
    await _grant(client, users.owner, task_id, users.viewer.email, "viewer")

    res = await client.delete(
        _share_url(task_id), params={"user_email": users.viewer.email},
        headers=users.owner.headers,
    )
    assert res.status_code == 204

    res = await client.get(f"/api/v1/tasks/{task_id}", headers=users.viewer.headers)
    assert res.status_code == 404


async def test_revoke_missing_share_is_204(client, users, task_id):
    res = await client.delete(
        _share_url(task_id), params={"user_email": users.stranger.email},
        headers=users.owner.headers,
    )
    assert res.status_code == 204


async def test_editor_cannot_revoke(client, users, task_id):
    await _grant(client, users.owner, task_id, users.editor.email, "editor")
    await _grant(client, users.owner, task_id, users.viewer.email, "viewer")
    res = await client.delete(
        _share_url(task_id), params={"user_email": users.viewer.email},
        headers=users.editor.headers,
    )
    assert res.status_code == 403


# ─── profile & health checks ────────────────────────────────────────────

async def test_me_returns_provisioned_user(client, users):
    res = await client.get("/api/v1/me", headers=users.viewer.headers)
    assert res.status_code == 200
    assert res.json() == {
        "id": str(users.viewer.id), "email": users.viewer.email, "display_name": "Viewer",
    }


async def test_me_unprovisioned_is_404(client, users):
    res = await client.get("/api/v1/me", headers={"X-User-Id": str(uuid4())})
    assert res.status_code == 404


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_with_database(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"
    assert res.json()["checks"]["schema"] == "migrated"


async def test_readiness_without_tasks_table_is_503(client, test_engine):
    async with test_engine.begin() as conn:
        await conn.run_sync(Task.__table__.drop)

    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json() == {"status": "not_ready", "reason": "schema_missing"}


# ─── viewer limits ───────────────────────────────────────────────

async def test_viewer_cannot_delete_or_manage_shares(client, users, task_id):
    await _grant(client, users.owner, task_id, users.viewer.email, "viewer")

    res = await client.delete(f"/api/v1/tasks/{task_id}", headers=users.viewer.headers)
    assert res.status_code == 403
    res = await _grant(client, users.viewer, task_id, users.stranger.email, "viewer")
    assert res.status_code == 403
    res = await client.delete(
        _share_url(task_id), params={"user_email": users.viewer.email},
        headers=users.viewer.headers,
    )
    assert res.status_code == 403

    res = await client.get(f"/api/v1/tasks/{task_id}", headers=users.viewer.headers)
    assert res.status_code == 200
