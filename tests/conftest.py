"""Pytest configuration and shared fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient

from idle_planner.api.container import reset_container
from idle_planner.domain.entities.snapshot import ProjectAnalysis
from idle_planner.main import app


def build_analysis(
    dependencies: dict | None = None,
    code_quality: dict | None = None,
    documentation: dict | None = None,
) -> ProjectAnalysis:
    """Snapshot with nothing to do unless a section says otherwise."""
    return ProjectAnalysis.model_validate({
        "codebaseSize": {"files": 10, "lines": 1000, "languages": {"python": 10}},
        "dependencies": dependencies or {},
        "codeQuality": code_quality or {},
        "documentation": documentation or {"coverage": 90.0},
    })


@pytest.fixture
def make_analysis():
    """Factory for ProjectAnalysis snapshots keyed by camelCase wire names."""
    return build_analysis


@pytest.fixture
def clean_analysis() -> ProjectAnalysis:
    return build_analysis()


@pytest.fixture
async def client():
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def fresh_container():
    """Drop the global container before and after a test that changes config."""
    reset_container()
    yield
    reset_container()
