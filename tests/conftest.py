"""
Root conftest.py - Global configuration for all test layers.

Test Layers:
    - component/  : Component tests (mocked repository and event bus)
    - unit/       : Unit tests (pure functions, no I/O)
    - contracts/  : Shared test data factories
"""
import os
import sys

import pytest

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

os.environ.setdefault("ENV", "testing")


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line("markers", "component: Component tests")
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "golden: Characterization tests")


@pytest.fixture(autouse=True)
def test_logger(request):
    """Log test start/end for debugging"""
    import logging
    logger = logging.getLogger("tests")
    logger.debug(f"Starting test: {request.node.name}")
    yield
    logger.debug(f"Finished test: {request.node.name}")
