import pytest
from datetime import date
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_check_approval_envelope(async_client: AsyncClient, catalog):
    team = await catalog.team("Frontend Team")
    java = await catalog.technology("Java", category="language", vendor="Oracle")
    await catalog.version(java, "8")
    await catalog.approve(team, java, "tolerate", version_constraint=">=8", eol_date=date(2030, 12, 31))

    response = await async_client.get(
        "/v1/approvals/check", params={"team": "Frontend Team", "technology": "Java", "version": "8"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert data["team"] == "Frontend Team"
    assert data["version"] == "8"
    assert data["approval"]["level"] == "technology"
    assert data["approval"]["time"] == "tolerate"
    assert data["approval"]["versionConstraint"] == ">=8"
    assert data["approval"]["eolDate"] == "2030-12-31"


@pytest.mark.asyncio
async def test_check_approval_default(async_client: AsyncClient, catalog):
    await catalog.team("Data Team")
    await catalog.technology("Perl")

    response = await async_client.get("/v1/approvals/check", params={"team": "Data Team", "technology": "Perl"})

    approval = response.json()["data"]["approval"]
    assert approval == {
        "level": "default",
        "time": "eliminate",
        "notes": "No explicit approval found for this team",
    }


@pytest.mark.asyncio
async def test_check_approval_missing_parameters(async_client: AsyncClient):
    response = await async_client.get("/v1/approvals/check", params={"team": "Frontend Team"})

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "error": {"type": "InvalidInput", "message": "Team and technology parameters are required"},
        "data": None,
    }


@pytest.mark.asyncio
async def test_check_approval_unknown_team(async_client: AsyncClient, catalog):
    await catalog.technology("Java")

    response = await async_client.get("/v1/approvals/check", params={"team": "Ghost Team", "technology": "Java"})

    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["error"] == {"type": "NotFound", "message": "Team 'Ghost Team' not found"}
    assert body["data"] is None


@pytest.mark.asyncio
async def test_check_approval_store_unavailable(offline_client: AsyncClient):
    response = await offline_client.get("/v1/approvals/check", params={"team": "Frontend Team", "technology": "Java"})

    assert response.status_code == 503
    body = response.json()
    assert body["success"] is False
    assert body["error"]["type"] == "StoreUnavailable"


@pytest.mark.asyncio
async def test_policy_violations(async_client: AsyncClient, catalog):
    frontend = await catalog.team("Frontend Team")
    java = await catalog.technology("Java", category="language", risk_level="high")
    await catalog.use(frontend, java, system_count=2)
    await catalog.policy("no-eol-software", "critical", rule_type="lifecycle", governs=[java], subjects=[frontend])

    response = await async_client.get("/v1/policies/violations", params={"team": "Frontend Team"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["count"] == 1
    assert body["summary"] == {"critical": 1, "error": 0, "warning": 0, "info": 0}
    violation = body["data"][0]
    assert violation["technologyCategory"] == "language"
    assert violation["riskLevel"] == "high"
    assert violation["policy"]["ruleType"] == "lifecycle"
    assert violation["policy"]["enforcedBy"] is None


@pytest.mark.asyncio
async def test_policy_violations_degrade_when_store_unavailable(offline_client: AsyncClient):
    response = await offline_client.get("/v1/policies/violations", params={"severity": "critical"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is False
    assert body["error"]["type"] == "StoreUnavailable"
    assert body["data"] == []
    assert body["count"] == 0
    assert body["summary"] == {"critical": 0, "error": 0, "warning": 0, "info": 0}


@pytest.mark.asyncio
async def test_team_usage(async_client: AsyncClient, catalog):
    backend = await catalog.team("Backend Team")
    java = await catalog.technology("Java")
    await catalog.approve(backend, java, "invest")
    await catalog.use(backend, java, system_count=12, first_used=date(2016, 2, 1))

    response = await async_client.get("/v1/teams/Backend Team/usage")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["usage"][0]["complianceStatus"] == "compliant"
    assert data["usage"][0]["approvalStatus"] == "invest"
    assert data["usage"][0]["firstUsed"] == "2016-02-01"
    assert data["summary"] == {
        "totalTechnologies": 1,
        "compliant": 1,
        "unapproved": 0,
        "violations": 0,
        "migrationNeeded": 0,
    }


@pytest.mark.asyncio
async def test_team_usage_store_unavailable(offline_client: AsyncClient):
    response = await offline_client.get("/v1/teams/Backend Team/usage")

    assert response.status_code == 503
    assert response.json()["error"]["type"] == "StoreUnavailable"


@pytest.mark.asyncio
async def test_team_approvals_and_policies(async_client: AsyncClient, catalog):
    team = await catalog.team("Frontend Team")
    react = await catalog.technology("React")
    await catalog.approve(team, react, "invest")
    await catalog.policy("approved-frameworks", "warning", governs=[react], subjects=[team])

    approvals = await async_client.get("/v1/teams/Frontend Team/approvals")
    policies = await async_client.get("/v1/teams/Frontend Team/policies")

    assert approvals.status_code == 200
    assert approvals.json()["data"]["technologyApprovals"][0]["technology"] == "React"
    assert approvals.json()["data"]["versionApprovals"] == []
    assert policies.status_code == 200
    assert policies.json()["data"]["subjectToCount"] == 1
    assert policies.json()["data"]["subjectTo"][0]["governedTechnologies"] == ["React"]


@pytest.mark.asyncio
async def test_team_listing_unknown_team(async_client: AsyncClient):
    response = await async_client.get("/v1/teams/Ghost Team/policies")

    assert response.status_code == 404
    assert response.json()["error"] == {"type": "NotFound", "message": "Team 'Ghost Team' not found"}


@pytest.mark.asyncio
async def test_compliance_violations(async_client: AsyncClient, catalog):
    team = await catalog.team("Frontend Team")
    node = await catalog.technology("Node.js")
    await catalog.use(team, node, system_count=5)
    await catalog.system("web-portal", team, components=[node])

    response = await async_client.get("/v1/compliance/violations")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["violations"][0]["violationType"] == "unapproved"
    assert data["violations"][0]["systems"] == ["web-portal"]
    assert data["summary"]["byTeam"] == [{"team": "Frontend Team", "violationCount": 1, "systemsAffected": 5}]


@pytest.mark.asyncio
async def test_unknown_route_uses_error_envelope(async_client: AsyncClient):
    response = await async_client.get("/v1/nothing-here")

    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["error"]["type"] == "NotFound"
    assert body["data"] is None


@pytest.mark.asyncio
async def test_health(async_client: AsyncClient):
    response = await async_client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["database"] == "connected"


@pytest.mark.asyncio
async def test_health_when_store_down(offline_client: AsyncClient):
    response = await offline_client.get("/health")

    assert response.status_code == 503
    assert response.json()["status"] == "unhealthy"
    assert response.json()["database"] == "disconnected"


@pytest.mark.asyncio
async def test_db_status(async_client: AsyncClient):
    online = await async_client.get("/v1/db-status")

    assert online.status_code == 200
    assert online.json() == {"status": "online", "message": "Database connection successful"}


@pytest.mark.asyncio
async def test_db_status_offline(offline_client: AsyncClient):
    response = await offline_client.get("/v1/db-status")

    assert response.status_code == 200
    assert response.json()["status"] == "offline"
    assert "Entity store unavailable" in response.json()["message"]


@pytest.mark.asyncio
async def test_policy_violations_degrade_on_unexpected_error(broken_client: AsyncClient):
    response = await broken_client.get("/v1/policies/violations")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is False
    assert body["error"] == {"type": "InternalError", "message": "Failed to fetch policy violations"}
    assert body["data"] == []
    assert body["count"] == 0
    assert body["summary"] == {"critical": 0, "error": 0, "warning": 0, "info": 0}


@pytest.mark.asyncio
async def test_unexpected_error_uses_internal_error_envelope(broken_client: AsyncClient):
    response = await broken_client.get("/v1/teams/Backend Team/usage")

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": {"type": "InternalError", "message": "Internal server error"},
        "data": None,
    }
