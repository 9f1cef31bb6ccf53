from __future__ import annotations

import socket
from pathlib import Path

import pytest
from hypothesis import HealthCheck, settings

from helpers import STRICT_TARGET_OPTIONS, TEST_RULES, write_project

_ALLOWED_MARKERS = {"unit", "integration", "slow"}

settings.register_profile(
    "tsconfig-reference",
    deadline=None,
    max_examples=50,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
settings.load_profile("tsconfig-reference")


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        names = {mark.name for mark in item.iter_markers()}
        if not names.intersection(_ALLOWED_MARKERS):
            item.add_marker("unit")


@pytest.fixture(autouse=True)
def no_network_for_unit(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> None:
    if request.node.get_closest_marker("integration") or request.node.get_closest_marker("slow"):
        return

    def _blocked(*_args: object, **_kwargs: object) -> socket.socket:
        raise RuntimeError("network disabled in unit tests")

    monkeypatch.setattr(socket, "create_connection", _blocked)


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "reference"
    write_project(root, STRICT_TARGET_OPTIONS, TEST_RULES)
    return root
