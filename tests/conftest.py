"""Pytest configuration and fixtures for table_engine tests."""

from __future__ import annotations

import pytest
from prometheus_client import CollectorRegistry

from table_engine.application import TableEngine
from table_engine.domain.entities import Table
from table_engine.domain.value_objects import ValueKind
from table_engine.infrastructure.config import Config, RenderConfig
from table_engine.infrastructure.metrics import MetricsRegistry


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def test_config() -> Config:
    """Provide a configuration independent of the environment."""
    return Config(render=RenderConfig(margin=1))


@pytest.fixture
def engine(test_config: Config, metrics_registry: MetricsRegistry) -> TableEngine:
    """Provide an empty table engine with isolated metrics."""
    return TableEngine(config=test_config, metrics=metrics_registry)


@pytest.fixture
def fruits() -> Table:
    """The fruit table of the demo: id, name, price (citrus has no price)."""
    table = Table(
        "table1",
        [("id", ValueKind.INTEGER), ("name", ValueKind.TEXT), ("price", ValueKind.INTEGER)],
    )
    for fruit_id, name, price in [
        (1, "apple", 50),
        (2, "banana", 100),
        (3, "citrus", None),
        (4, "dorian", 256),
        (5, "elderberries", 512),
        (6, "figs", 1024),
        (7, "grapefruit", 2048),
        (8, "honeydew melon", 4096),
    ]:
        table.insert([("id", fruit_id), ("name", name), ("price", price)])
    return table


@pytest.fixture
def dates() -> Table:
    """The date table of the demo, keyed by fruit id."""
    table = Table("table2", [("id", ValueKind.INTEGER), ("date", ValueKind.TEXT)])
    for fruit_id, date in [
        (1, "2019/12/20"),
        (2, "2019/12/21"),
        (3, "2019/12/22"),
        (4, "2019/12/23"),
        (8, "2019/12/27"),
        (13, "2020/01/01"),
    ]:
        table.insert([("id", fruit_id), ("date", date)])
    return table


# Markers for test categories
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
