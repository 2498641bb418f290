import sys
from pathlib import Path

import pytest

# Ensure the package is importable for tests without installation
REPO_ROOT = Path(__file__).resolve().parents[2]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from nbinputs.bridge import InMemoryBridge, OwnerId, reset_bridge, set_bridge  # noqa: E402
from nbinputs.config import get_settings  # noqa: E402
from nbinputs.inputs import DescriptorFactory  # noqa: E402
from nbinputs.inputs.api import reset_default_factory  # noqa: E402

TEST_DESTINATION = "subscription_manager@test"

_ENV_VARS = (
    "NBINPUTS_BRIDGE_URL",
    "NBINPUTS_BRIDGE_TOKEN",
    "NBINPUTS_BRIDGE_TIMEOUT_SECONDS",
    "NBINPUTS_BRIDGE_CONNECT_TIMEOUT_SECONDS",
    "NBINPUTS_SUBSCRIPTION_MANAGER",
    "NBINPUTS_PERSISTENT_ID_LENGTH",
    "NBINPUTS_NONEXISTENT_DIR",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    reset_default_factory()
    yield
    reset_bridge()
    reset_default_factory()
    get_settings.cache_clear()


@pytest.fixture
def owner() -> OwnerId:
    return OwnerId(hostname="test-host", pid=4242, nonce="cafe")


@pytest.fixture
def bridge() -> InMemoryBridge:
    return InMemoryBridge(token="session-1")


@pytest.fixture
def factory(bridge, owner) -> DescriptorFactory:
    return DescriptorFactory(bridge, TEST_DESTINATION, owner=owner)


@pytest.fixture
def installed_bridge(bridge) -> InMemoryBridge:
    """Install the in-memory host as the process-wide bridge for the public API."""
    set_bridge(bridge)
    return bridge
