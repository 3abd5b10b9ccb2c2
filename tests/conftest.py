"""Pytest configuration and fixtures for tabstore tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest
from prometheus_client import CollectorRegistry

from tabstore.adapters.outbound import FileTableStorage
from tabstore.application import Registry
from tabstore.domain.entities import Table
from tabstore.domain.value_objects import DataType
from tabstore.infrastructure.config import Config, DisplayConfig, StorageConfig
from tabstore.infrastructure.metrics import MetricsRegistry


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_config() -> Config:
    """Provide a test configuration with a small display page."""
    return Config(
        storage=StorageConfig(encoding="utf-8", table_file_suffix=".tbl"),
        display=DisplayConfig(page_size=2),
    )


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def storage(test_config: Config, metrics_registry: MetricsRegistry) -> FileTableStorage:
    """File storage wired to the test config and metrics."""
    return FileTableStorage(test_config.storage, metrics_registry)


@pytest.fixture
def registry(
    storage: FileTableStorage, test_config: Config, metrics_registry: MetricsRegistry
) -> Registry:
    """An empty registry backed by file storage."""
    return Registry(storage=storage, config=test_config, metrics=metrics_registry)


@pytest.fixture
def people() -> Table:
    """The people table: (name STRING, age INTEGER) with Alice and Bob."""
    table = Table("people")
    table.add_column("name", DataType.STRING)
    table.add_column("age", DataType.INTEGER)
    table.insert(['"Alice"', "30"])
    table.insert(['"Bob"', "25"])
    return table


@pytest.fixture
def orders() -> Table:
    """Orders referencing people by name: (id INTEGER, person STRING, total FLOAT)."""
    table = Table("orders")
    table.add_column("id", DataType.INTEGER)
    table.add_column("person", DataType.STRING)
    table.add_column("total", DataType.FLOAT)
    table.insert(["1", '"Alice"', "9.5"])
    table.insert(["2", '"Bob"', "12.25"])
    table.insert(["3", '"Alice"', "NULL"])
    table.insert(["4", '"Carol"', "3.0"])
    return table


# Markers for test categories
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
