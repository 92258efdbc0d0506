"""Dependency API tests: traversal, edge gate, batch add, auto-resolve, removal and graph views."""

import pytest
from httpx import AsyncClient


async def _create(client: AsyncClient, name: str) -> str:
    module, type = name.split(".")
    response = await client.post(
        "/api/v1/permissions",
        json={"name": name, "display_name": name.title(), "module": module, "type": type},
    )
    assert response.status_code == 201, response.text
    return response.json()["id"]


async def _add(client: AsyncClient, permission_id: str, *dependency_ids: str, **extra) -> dict:
    response = await client.post(
        f"/api/v1/permissions/{permission_id}/dependencies",
        json={"dependency_ids": list(dependency_ids), **extra},
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
async def chain(client: AsyncClient) -> dict[str, str]:
    """Three permissions where a requires b and b requires c."""
    ids = {
        "a": await _create(client, "chain.a"),
        "b": await _create(client, "chain.b"),
        "c": await _create(client, "chain.c"),
    }
    await _add(client, ids["a"], ids["b"])
    await _add(client, ids["b"], ids["c"])
    return ids


async def test_check_rejects_cycle_with_path(client: AsyncClient, chain: dict[str, str]) -> None:
    """c -> a would close a -> b -> c; the check answers 200 with allowed=false and the path."""
    response = await client.get(
        f"/api/v1/permissions/{chain['c']}/dependencies/check",
        params={"dependency_id": chain["a"]},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["allowed"] is False
    assert body["reason"] == "cycle_would_be_introduced"
    assert body["cycle_path"] == [chain["c"], chain["a"], chain["b"], chain["c"]]


async def test_get_dependencies_bfs(client: AsyncClient, chain: dict[str, str]) -> None:
    response = await client.get(
        f"/api/v1/permissions/{chain['a']}/dependencies", params={"max_depth": 2}
    )
    assert response.status_code == 200
    body = response.json()
    assert [(n["permission"]["id"], n["depth"], n["relation"]) for n in body] == [
        (chain["b"], 1, "dependency"),
        (chain["c"], 2, "dependency"),
    ]


async def test_get_dependents_with_default_depth(client: AsyncClient, chain: dict[str, str]) -> None:
    response = await client.get(
        f"/api/v1/permissions/{chain['c']}/dependencies", params={"direction": "dependents"}
    )
    assert [n["permission"]["id"] for n in response.json()] == [chain["b"], chain["a"]]


async def test_max_depth_zero_returns_400(client: AsyncClient, chain: dict[str, str]) -> None:
    response = await client.get(
        f"/api/v1/permissions/{chain['a']}/dependencies", params={"max_depth": 0}
    )
    assert response.status_code == 400
    assert response.json()["details"] == {"field": "max_depth"}


async def test_unknown_permission_returns_404(client: AsyncClient) -> None:
    response = await client.get("/api/v1/permissions/missing/dependencies")
    assert response.status_code == 404


async def test_explain_path(client: AsyncClient, chain: dict[str, str]) -> None:
    response = await client.get(f"/api/v1/permissions/{chain['a']}/path/{chain['c']}")
    assert response.status_code == 200
    body = response.json()
    assert body["found"] is True
    assert [s["permission"]["id"] for s in body["steps"]] == [chain["a"], chain["b"], chain["c"]]

    response = await client.get(f"/api/v1/permissions/{chain['c']}/path/{chain['a']}")
    assert response.json() == {"found": False, "steps": []}


async def test_add_dependencies_partial_success(client: AsyncClient, chain: dict[str, str]) -> None:
    """Invalid items are skipped with reasons; valid ones are inserted."""
    d = await _create(client, "chain.d")
    body = await _add(client, chain["c"], d, chain["a"], chain["c"], "missing-id")
    assert [e["depends_on_permission_id"] for e in body["inserted"]] == [d]
    assert [s["reason"] for s in body["skipped"]] == [
        "cycle_would_be_introduced",
        "self_dependency",
        "permission_not_found",
    ]


async def test_add_duplicate_is_skipped(client: AsyncClient, chain: dict[str, str]) -> None:
    body = await _add(client, chain["a"], chain["b"])
    assert body["inserted"] == []
    assert body["skipped"][0]["reason"] == "duplicate_edge"


async def test_add_strict_rejection_returns_409(client: AsyncClient, chain: dict[str, str]) -> None:
    response = await client.post(
        f"/api/v1/permissions/{chain['c']}/dependencies",
        json={"dependency_ids": [chain["a"]], "strict": True},
    )
    assert response.status_code == 409
    body = response.json()
    assert body["error"] == "DEPENDENCY_REJECTED"
    assert body["details"]["cycle_path"] == [chain["c"], chain["a"], chain["b"], chain["c"]]


async def test_add_stamps_actor_header(client: AsyncClient) -> None:
    view = await _create(client, "users.view")
    edit = await _create(client, "users.edit")
    response = await client.post(
        f"/api/v1/permissions/{edit}/dependencies",
        json={"dependency_ids": [view]},
        headers={"X-Actor-ID": "admin-42"},
    )
    assert response.status_code == 201
    assert response.json()["inserted"][0]["created_by"] == "admin-42"


async def test_remove_dependency(client: AsyncClient, chain: dict[str, str]) -> None:
    response = await client.delete(
        f"/api/v1/permissions/{chain['a']}/dependencies/{chain['b']}"
    )
    assert response.status_code == 204
    response = await client.delete(
        f"/api/v1/permissions/{chain['a']}/dependencies/{chain['b']}"
    )
    assert response.status_code == 404
    # With a -> b gone, c -> a no longer closes a cycle.
    response = await client.get(
        f"/api/v1/permissions/{chain['c']}/dependencies/check",
        params={"dependency_id": chain["a"]},
    )
    assert response.json()["allowed"] is True


async def test_auto_resolve_permission_dry_run_then_apply(client: AsyncClient) -> None:
    view = await _create(client, "users.view")
    edit = await _create(client, "users.edit")

    response = await client.post(
        f"/api/v1/permissions/{edit}/dependencies/auto-resolve", json={"dry_run": True}
    )
    assert response.status_code == 200
    assert response.json() == {
        "accepted": [{"permission_id": edit, "depends_on_permission_id": view}],
        "skipped": [],
    }

    response = await client.post(f"/api/v1/permissions/{edit}/dependencies/auto-resolve", json={})
    assert response.status_code == 200
    assert [e["depends_on_permission_id"] for e in response.json()["inserted"]] == [view]


async def test_auto_resolve_policy_override(client: AsyncClient) -> None:
    view = await _create(client, "users.view")
    edit = await _create(client, "users.edit")
    response = await client.post(
        f"/api/v1/permissions/{view}/dependencies/auto-resolve",
        json={"policy": {"view": ["edit"]}, "dry_run": True},
    )
    assert response.json()["accepted"] == [
        {"permission_id": view, "depends_on_permission_id": edit}
    ]


async def test_auto_resolve_self_rule_returns_400(client: AsyncClient) -> None:
    view = await _create(client, "users.view")
    response = await client.post(
        f"/api/v1/permissions/{view}/dependencies/auto-resolve",
        json={"policy": {"view": ["view"]}},
    )
    assert response.status_code == 400


async def test_module_auto_resolve_and_rerun(client: AsyncClient) -> None:
    """Fresh view/edit/delete: edit -> view and delete -> edit inserted; a rerun skips both."""
    view = await _create(client, "users.view")
    edit = await _create(client, "users.edit")
    delete = await _create(client, "users.delete")

    response = await client.post("/api/v1/dependency-graph/auto-resolve", json={"module": "users"})
    assert response.status_code == 200
    body = response.json()
    inserted = {(e["permission_id"], e["depends_on_permission_id"]) for e in body["inserted"]}
    assert inserted == {(edit, view), (delete, edit)}
    assert body["skipped"] == []

    response = await client.post("/api/v1/dependency-graph/auto-resolve", json={"module": "users"})
    body = response.json()
    assert body["inserted"] == []
    assert {s["reason"] for s in body["skipped"]} == {"duplicate_edge"}


async def test_dependency_tree_and_graph_views(client: AsyncClient, chain: dict[str, str]) -> None:
    response = await client.get(f"/api/v1/permissions/{chain['a']}/dependency-tree")
    assert response.status_code == 200
    body = response.json()
    assert body["dependents"] is None
    tree = body["dependencies"]
    assert tree["permission"]["id"] == chain["a"]
    assert tree["children"][0]["permission"]["id"] == chain["b"]
    assert tree["children"][0]["children"][0]["depth"] == 2

    response = await client.get(f"/api/v1/permissions/{chain['b']}/dependency-graph")
    assert response.status_code == 200
    view = response.json()
    assert [(n["permission"]["id"], n["level"]) for n in view["nodes"]] == [
        (chain["b"], 0),
        (chain["c"], 1),
        (chain["a"], 1),
    ]
    assert {(e["from_id"], e["to_id"]) for e in view["edges"]} == {
        (chain["b"], chain["c"]),
        (chain["a"], chain["b"]),
    }


async def test_tree_both_directions(client: AsyncClient, chain: dict[str, str]) -> None:
    response = await client.get(
        f"/api/v1/permissions/{chain['b']}/dependency-tree", params={"direction": "both"}
    )
    assert response.status_code == 200
    body = response.json()
    assert [c["permission"]["id"] for c in body["dependencies"]["children"]] == [chain["c"]]
    assert [c["permission"]["id"] for c in body["dependents"]["children"]] == [chain["a"]]


async def test_tree_depth_and_filter(client: AsyncClient, chain: dict[str, str]) -> None:
    response = await client.get(
        f"/api/v1/permissions/{chain['a']}/dependency-tree", params={"max_depth": 0}
    )
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"

    response = await client.get(
        f"/api/v1/permissions/{chain['a']}/dependency-tree", params={"module": "other"}
    )
    assert response.status_code == 200
    tree = response.json()["dependencies"]
    assert tree["permission"]["id"] == chain["a"]
    assert tree["children"] == []


async def test_dependency_paths(client: AsyncClient, chain: dict[str, str]) -> None:
    response = await client.get(f"/api/v1/permissions/{chain['a']}/dependency-paths")
    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 1
    assert body["dependents"] is None
    assert [p["id"] for p in body["dependencies"][0]] == [chain["a"], chain["b"], chain["c"]]

    response = await client.get(
        f"/api/v1/permissions/{chain['b']}/dependency-paths", params={"direction": "both"}
    )
    body = response.json()
    assert body["total"] == 2
    assert [p["id"] for p in body["dependents"][0]] == [chain["b"], chain["a"]]


async def test_graph_wide_reports(client: AsyncClient, chain: dict[str, str]) -> None:
    response = await client.get("/api/v1/dependency-graph/cycles")
    assert response.json() == {"has_cycle": False, "cycle_path": [], "closing_edge": None}

    response = await client.get("/api/v1/dependency-graph/statistics")
    stats = response.json()
    assert stats["total_permissions"] == 3
    assert stats["total_dependencies"] == 2
    assert stats["depth_distribution"]["depth_2"] == 1
    assert stats["has_cycle"] is False

    response = await client.get("/api/v1/dependency-graph/integrity")
    assert response.json() == {"is_valid": True, "total_issues": 0, "issues": []}
