"""Error envelope for failures no domain error describes."""

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.api.error_handlers import register_error_handlers
from app.core.errors import CapacityExceededError


def _app_with_failing_routes() -> FastAPI:
    failing = FastAPI()
    register_error_handlers(failing)

    @failing.get("/boom")
    async def boom():
        raise RuntimeError("connection string with secrets")

    @failing.get("/full")
    async def full():
        raise CapacityExceededError(3, 10)

    return failing


async def test_unexpected_error_hides_details():
    transport = ASGITransport(app=_app_with_failing_routes(), raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        res = await c.get("/boom")

    assert res.status_code == 500
    error = res.json()["error"]
    assert error["code"] == "INTERNAL_ERROR"
    assert error["category"] == "internal"
    assert "secrets" not in res.text


async def test_domain_error_uses_its_own_status(caplog):
    transport = ASGITransport(app=_app_with_failing_routes())
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        res = await c.get("/full")

    assert res.status_code == 400
    assert res.json()["error"]["severity"] == "warning"
    assert any(
        r.levelname == "WARNING" and r.name == "app.api.error_handlers"
        for r in caplog.records
    )
