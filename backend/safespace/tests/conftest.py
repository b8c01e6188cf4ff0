import pytest

from safespace.main import app, init_state
from safespace.services.state import PreferencesStore


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def state_file(tmp_path):
    return tmp_path / "state.json"


@pytest.fixture(autouse=True)
def fresh_state(state_file):
    # ASGITransport does not run the lifespan, so state is wired up here.
    init_state(app, PreferencesStore(state_file))
    yield app.state.store
