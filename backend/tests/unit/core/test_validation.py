"""
Unit Tests for Request Validation
Tests for: shape checks, issue paths, the validate_request dependency
"""
import pytest
from unittest.mock import patch
from fastapi import Depends, FastAPI, Request
from httpx import AsyncClient, ASGITransport

from bugsnacks.core.logging_config import logger
from bugsnacks.core.validation import (
    Invalid,
    Issue,
    Valid,
    ValidatedRequest,
    issue_path,
    shape,
    validate_request,
)
from bugsnacks.main import register_exception_handlers
from bugsnacks.schemas import BugReportCreate, IdParams, ProjectUpdate


class CountingCheck:
    """Check stub that records how often it ran and what it saw"""

    def __init__(self, result=None):
        self.result = result
        self.calls = []

    def __call__(self, raw):
        self.calls.append(raw)
        return self.result if self.result is not None else Valid(raw)


def build_app(body=None, params=None, query=None) -> FastAPI:
    """Minimal app with one validated route that echoes what the handler saw"""
    app = FastAPI()
    register_exception_handlers(app)
    app.state.handler_calls = 0

    @app.post("/items/{id}")
    async def handler(
        request: Request,
        validated: ValidatedRequest = Depends(validate_request(body=body, params=params, query=query)),
    ):
        app.state.handler_calls += 1
        return {
            "same_request": validated.request is request,
            "raw_body": await request.json(),
            "path_params": dict(request.path_params),
            "query_params": dict(request.query_params),
        }

    return app


async def post(app: FastAPI, url: str = "/items/7?page=2", **kwargs):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        return await ac.post(url, **kwargs)


class TestIssuePath:
    """Test pydantic locations rendered as input paths"""

    def test_nested_path(self):
        assert issue_path(("reward", 0, "type")) == "$input.reward[0].type"

    def test_empty_path(self):
        assert issue_path(()) == "$input"


class TestShapeCheck:
    """Test checks built from request shapes"""

    def test_valid_input_returns_parsed_value(self):
        """Test conforming input returns the parsed model"""
        result = shape(IdParams)({"id": "abc"})

        assert isinstance(result, Valid)
        assert result.value.id == "abc"

    def test_invalid_input_returns_issues(self):
        """Test a bad enum value names its path"""
        result = shape(BugReportCreate)({
            "requestId": "r1",
            "testerId": "t1",
            "title": "t",
            "description": "d",
            "severity": "CRITICAL",
        })

        assert isinstance(result, Invalid)
        assert result.issues
        assert result.issues[0].path == "$input.severity"
        assert "$input.severity" in result.reason

    def test_patch_rejects_unknown_fields(self):
        """Test immutable fields cannot be patched"""
        result = shape(ProjectUpdate)({"developerId": "someone-else"})

        assert isinstance(result, Invalid)
        assert result.issues[0].path == "$input.developerId"

    def test_check_is_named_after_shape(self):
        assert shape(IdParams).__name__ == "shape_IdParams"

    def test_issue_to_dict(self):
        assert Issue("$input.id", "too short").to_dict() == {"path": "$input.id", "reason": "too short"}


class TestValidateRequest:
    """Test the validate_request dependency"""

    @pytest.mark.asyncio
    async def test_all_checks_pass_reaches_handler_untouched(self):
        """Test the handler receives the same request with the raw body intact"""
        body, params, query = CountingCheck(), CountingCheck(), CountingCheck()
        app = build_app(body=body, params=params, query=query)

        response = await post(app, json={"name": "Demo"})

        assert response.status_code == 200
        data = response.json()
        assert data["same_request"] is True
        assert data["raw_body"] == {"name": "Demo"}
        assert data["path_params"] == {"id": "7"}
        assert data["query_params"] == {"page": "2"}
        assert body.calls == [{"name": "Demo"}]
        assert params.calls == [{"id": "7"}]
        assert query.calls == [{"page": "2"}]
        assert app.state.handler_calls == 1

    @pytest.mark.asyncio
    async def test_body_failure_short_circuits(self):
        """Test params and query checks never run after a body failure"""
        body = CountingCheck(Invalid("bad body"))
        params, query = CountingCheck(), CountingCheck()
        app = build_app(body=body, params=params, query=query)

        response = await post(app, json={})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request data"}
        assert len(body.calls) == 1
        assert params.calls == []
        assert query.calls == []
        assert app.state.handler_calls == 0

    @pytest.mark.asyncio
    async def test_params_failure_skips_query(self):
        """Test query check never runs after a params failure"""
        body = CountingCheck()
        params = CountingCheck(Invalid("bad params"))
        query = CountingCheck()
        app = build_app(body=body, params=params, query=query)

        response = await post(app, json={})

        assert response.status_code == 400
        assert len(body.calls) == 1
        assert len(params.calls) == 1
        assert query.calls == []
        assert app.state.handler_calls == 0

    @pytest.mark.asyncio
    async def test_query_failure_rejects(self):
        """Test a query failure is still a 400 after body and params pass"""
        query = CountingCheck(Invalid("bad query"))
        app = build_app(body=CountingCheck(), params=CountingCheck(), query=query)

        response = await post(app, json={})

        assert response.status_code == 400
        assert app.state.handler_calls == 0

    @pytest.mark.asyncio
    async def test_repeated_query_keys_keep_every_value(self):
        """Test a repeated query key reaches the check as a list"""
        query = CountingCheck()
        app = build_app(query=query)

        response = await post(app, url="/items/7?tag=a&tag=b&page=2", json={})

        assert response.status_code == 200
        assert query.calls == [{"tag": ["a", "b"], "page": "2"}]

    @pytest.mark.asyncio
    async def test_only_configured_checks_run(self):
        """Test omitted checks are skipped entirely"""
        params = CountingCheck()
        app = build_app(params=params)

        response = await post(app, json={"anything": True})

        assert response.status_code == 200
        assert params.calls == [{"id": "7"}]

    @pytest.mark.asyncio
    async def test_structured_issues_are_returned(self):
        """Test issues are included when the check produced them"""
        issue = Issue("$input.name", "Field required")
        app = build_app(body=CountingCheck(Invalid("missing name", issues=[issue])))

        response = await post(app, json={})

        assert response.status_code == 400
        assert response.json() == {
            "error": "Invalid request data",
            "issues": [{"path": "$input.name", "reason": "Field required"}],
        }

    @pytest.mark.asyncio
    async def test_issues_omitted_without_detail(self):
        """Test the envelope has no issues key when the check gave none"""
        app = build_app(body=CountingCheck(Invalid("nope")))

        response = await post(app, json={})

        assert "issues" not in response.json()

    @pytest.mark.asyncio
    async def test_malformed_json_is_rejected(self):
        """Test an unparseable body fails before the body check runs"""
        body = CountingCheck()
        app = build_app(body=body)

        response = await post(app, content=b"{not json", headers={"Content-Type": "application/json"})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request data"}
        assert body.calls == []

    @pytest.mark.asyncio
    async def test_empty_body_reads_as_empty_object(self):
        """Test a missing body is checked as {}"""
        body = CountingCheck(Invalid("empty"))
        app = build_app(body=body)

        await post(app)

        assert body.calls == [{}]

    @pytest.mark.asyncio
    async def test_shape_check_rejects_with_issues(self):
        """Test a real shape check produces the structured envelope"""
        app = build_app(body=shape(ProjectUpdate))

        response = await post(app, json={"platform": "LINUX"})

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "Invalid request data"
        assert data["issues"][0]["path"] == "$input.platform"

    @pytest.mark.asyncio
    async def test_logging_failure_does_not_change_response(self):
        """Test a broken log sink never turns a 400 into a 500"""
        app = build_app(body=CountingCheck(Invalid("nope")))

        with patch.object(logger, "warning", side_effect=RuntimeError("sink down")):
            response = await post(app, json={})

        assert response.status_code == 400
