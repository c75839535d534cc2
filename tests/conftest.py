import pytest
from unittest.mock import MagicMock

from zervos.core.errors import MediumUnavailableError
from zervos.core.medium import Medium, MemoryMedium
from zervos.core.schema import Workspace
from zervos.core.store import SafeStore


class BrokenMedium(Medium):
    """A medium whose every operation fails, like a disabled localStorage."""

    def get_item(self, key):
        raise MediumUnavailableError("storage disabled")

    def set_item(self, key, value):
        raise MediumUnavailableError("storage disabled")

    def remove_item(self, key):
        raise MediumUnavailableError("storage disabled")

    def clear(self):
        raise MediumUnavailableError("storage disabled")

    def keys(self):
        raise MediumUnavailableError("storage disabled")


@pytest.fixture
def medium():
    return MemoryMedium()


@pytest.fixture
def store(medium):
    return SafeStore(medium)


@pytest.fixture
def broken_store():
    return SafeStore(BrokenMedium())


@pytest.fixture
def navigator():
    return MagicMock()


def make_workspace(workspace_id, **overrides):
    fields = {
        "id": workspace_id,
        "name": f"Workspace {workspace_id}",
        "initials": "WS",
        "color": "bg-blue-500",
        "email": f"{workspace_id}@example.com",
        "description": "Test workspace",
        "status": "Active",
        "bookingLink": f"http://localhost:5000/book/{workspace_id}",
        "prefix": "BK",
        "maxDigits": 4,
    }
    fields.update(overrides)
    return Workspace.model_validate(fields)


@pytest.fixture
def workspace_factory():
    return make_workspace
