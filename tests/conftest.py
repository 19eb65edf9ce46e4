"""
Test Configuration
==================

Pytest configuration with fixtures shared by all test types.
Playwright is replaced by mocks everywhere except the e2e suite.
"""

import os

os.environ.setdefault("CAROUSEL_ENVIRONMENT", "testing")

from typing import Generator
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from carousel_renderer.api.main import create_app
from carousel_renderer.config.settings import Settings
from carousel_renderer.core.rendering.png_generator import PlaywrightPNGGenerator
from carousel_renderer.models.schemas import PNGResult

from tests.utils.helpers import make_png, make_png_result
from tests.utils.mocks import build_mock_playwright


@pytest.fixture
def test_settings() -> Settings:
    """Test settings fixture, isolated from .env files."""
    return Settings(_env_file=None, environment="testing", log_level="DEBUG")


@pytest.fixture(scope="session")
def slide_png() -> bytes:
    """PNG with the physical size of a 1080x1350 slide at 2x."""
    return make_png(2160, 2700)


@pytest.fixture
def mock_png_result(slide_png: bytes) -> PNGResult:
    """PNG result for a full-size slide."""
    return make_png_result(slide_png)


@pytest.fixture
def mock_playwright(slide_png: bytes) -> MagicMock:
    """Mock Playwright driver that launches fresh mock browsers."""
    return build_mock_playwright(slide_png)


@pytest.fixture
def generator(test_settings: Settings, mock_playwright: MagicMock) -> PlaywrightPNGGenerator:
    """PNG generator wired to the mock Playwright driver."""
    png_generator = PlaywrightPNGGenerator(test_settings)
    png_generator._playwright = mock_playwright
    return png_generator


@pytest.fixture
def client(test_settings: Settings) -> TestClient:
    """FastAPI test client. The lifespan is not run, so no browser starts."""
    return TestClient(create_app(test_settings))


@pytest.fixture
def global_generator(generator: PlaywrightPNGGenerator) -> Generator[PlaywrightPNGGenerator, None, None]:
    """Install the mocked generator as the shared application generator."""
    with patch("carousel_renderer.core.rendering.png_generator._global_generator", generator):
        yield generator


def pytest_collection_modifyitems(config, items):
    """Add markers based on file paths."""
    for item in items:
        path = str(item.fspath)
        if "unit" in path:
            item.add_marker(pytest.mark.unit)
        elif "integration" in path:
            item.add_marker(pytest.mark.integration)
        elif "e2e" in path:
            item.add_marker(pytest.mark.e2e)
