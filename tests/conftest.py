"""Pytest configuration and fixtures."""

import os

import pytest
from prometheus_client import CollectorRegistry

from pagecraft.accel import AccelerationDispatcher
from pagecraft.core.config import Settings
from pagecraft.editor import EditorSession
from pagecraft.layout import Position
from pagecraft.monitoring import MetricsCollector
from pagecraft.schema import ProjectData, ProjectLibrary, SchemaProcessor
from pagecraft.tree import Component


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ["PAGECRAFT_LOG_LEVEL"] = "DEBUG"
    os.environ["PAGECRAFT_ENABLE_NATIVE"] = "false"  # No native module in tests


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings(tmp_path):
    """Test settings with an isolated project library."""
    return Settings(
        library_dir=tmp_path / "projects",
        enable_native=False,
        history_limit=100,
    )


@pytest.fixture
def metrics():
    """Metrics collector on a private registry."""
    return MetricsCollector(CollectorRegistry())


@pytest.fixture
def dispatcher(metrics):
    """Dispatcher with no native accelerator."""
    return AccelerationDispatcher(metrics=metrics)


@pytest.fixture
def processor(dispatcher):
    return SchemaProcessor(dispatcher)


@pytest.fixture
def library(settings):
    return ProjectLibrary.from_settings(settings)


@pytest.fixture
def session(settings, metrics, processor, sample_project):
    """Editor session over the sample project."""
    return EditorSession(sample_project, settings=settings, metrics=metrics, processor=processor)


@pytest.fixture
def empty_session(settings, metrics):
    return EditorSession(settings=settings, metrics=metrics)


# ============================================================================
# Data Fixtures
# ============================================================================

@pytest.fixture
def sample_tree():
    """
    A (container) -> B (container) -> D (text)
                  -> C (button)
    E (text, root)
    """
    return (
        Component(id="A", type="container", name="A", position=Position(x=0, y=0), children=("B", "C")),
        Component(id="B", type="flex-layout", name="B", position=Position(x=10, y=10), parent_id="A", children=("D",)),
        Component(id="C", type="button", name="C", position=Position(x=200, y=10), parent_id="A"),
        Component(id="D", type="text", name="D", position=Position(x=5, y=5), parent_id="B"),
        Component(id="E", type="text", name="E", position=Position(x=400, y=300)),
    )


@pytest.fixture
def sample_project(sample_tree):
    return ProjectData(
        id="landing_01",
        name="Landing Page",
        description="Marketing landing page",
        created_at="2024-01-01T00:00:00+00:00",
        updated_at="2024-01-02T00:00:00+00:00",
        components=sample_tree,
        canvas={"showGrid": True, "snapToGrid": False, "viewportWidth": 1440, "activeDevice": "desktop"},
        theme={"textColor": "#333333", "primaryColor": "#0070f3"},
        data_sources=[
            {"id": "users", "name": "Users", "type": "static", "data": [{"name": "Ada", "age": "36"}]},
        ],
    )


@pytest.fixture
def valid_schema():
    """Minimal complete PageSchema document (wire form)."""
    return {
        "version": "1.0.0",
        "metadata": {
            "name": "Sample",
            "createdAt": "2024-01-01T00:00:00+00:00",
            "updatedAt": "2024-01-01T00:00:00+00:00",
            "version": "1.0.0",
        },
        "components": [
            {"id": "text_1", "type": "text", "name": "Heading", "position": {"x": 20, "y": 40},
             "properties": {"content": "Hello"}},
        ],
        "canvas": {"showGrid": True, "snapToGrid": True, "viewportWidth": 1920, "activeDevice": "desktop"},
        "theme": {"primaryColor": "#0070f3"},
        "dataSources": [],
    }


@pytest.fixture
def legacy_project(valid_schema):
    """Un-enveloped live document from before schema versioning."""
    return {
        "id": "old-project-1700000000000",
        "name": "Old Project",
        "createdAt": "2023-11-14T00:00:00+00:00",
        "updatedAt": "2023-11-14T00:00:00+00:00",
        "components": valid_schema["components"],
        "canvas": valid_schema["canvas"],
        "theme": {},
        "dataSources": [],
    }
