"""
Shared pytest fixtures for all tests.
"""

from pathlib import Path

import pytest

from splitter_service.config.splitting.models import SplitConfig

# ---------------------------------------------------------------------------
# Automatic test markers based on path
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]):
    """Tests in ``tests/unit`` get the ``unit`` marker, ``tests/integration`` get ``integration``."""
    root_path = Path(config.rootdir)

    for item in items:
        rel_path = Path(item.fspath).resolve().relative_to(root_path).as_posix()

        if rel_path.startswith("tests/unit/"):
            item.add_marker("unit")
        elif rel_path.startswith("tests/integration/"):
            item.add_marker("integration")


# Source text used by the upstream splitter's own test-suite.
HARRISON_TEXT = (
    "Hi.\n\nI'm Harrison.\n\nHow? Are? You?\nOkay then f f f f.\n"
    "This is a weird text to write, but gotta test the splittingggg some how.\n\n"
    "Bye!\n\n-H."
)


@pytest.fixture
def harrison_text() -> str:
    return HARRISON_TEXT


@pytest.fixture
def small_config() -> SplitConfig:
    """chunk_size=10, chunk_overlap=1 with default separators."""
    return SplitConfig(chunk_size=10, chunk_overlap=1)
