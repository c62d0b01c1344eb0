import asyncio
from types import SimpleNamespace

import pytest

from app.api import deps
from app.api.deps import ClientDisconnected, run_until_disconnect


class FakeRequest:
    def __init__(self, disconnect_after: int = -1):
        self.url = SimpleNamespace(path="/api/create-order")
        self.checks = 0
        self.disconnect_after = disconnect_after

    async def is_disconnected(self) -> bool:
        self.checks += 1
        return 0 <= self.disconnect_after < self.checks


@pytest.fixture(autouse=True)
def fast_polling(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(deps, "DISCONNECT_POLL_INTERVAL", 0.01)


def test_returns_result_of_finished_call() -> None:
    async def call():
        await asyncio.sleep(0.03)
        return "done"

    assert asyncio.run(run_until_disconnect(FakeRequest(), call())) == "done"


def test_propagates_exceptions_from_call() -> None:
    async def call():
        raise ValueError("bad")

    with pytest.raises(ValueError, match="bad"):
        asyncio.run(run_until_disconnect(FakeRequest(), call()))


def test_cancels_call_when_client_disconnects() -> None:
    state = {"cancelled": False}

    async def call():
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            state["cancelled"] = True
            raise

    async def scenario():
        await run_until_disconnect(FakeRequest(disconnect_after=1), call())

    with pytest.raises(ClientDisconnected):
        asyncio.run(scenario())
    assert state["cancelled"] is True


def test_settings_dep_reads_app_state_not_the_environment(settings) -> None:
    request = SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace(settings=settings)))
    assert deps.settings_dep(request) is settings
    assert not hasattr(deps, "get_settings")
