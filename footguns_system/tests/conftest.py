"""
Pytest configuration and fixtures for Footguns System tests.
"""

import copy
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

PROJECT_ROOT = Path(__file__).parent.parent
DATA_FILE = PROJECT_ROOT / "src" / "catalog" / "data" / "footguns.json"


# =============================================================================
# DATA FIXTURES
# =============================================================================

@pytest.fixture
def sample_definition() -> Dict[str, Any]:
    """The three documented footguns, all still open."""
    return {
        "frameworks": ["Express", "SvelteKit", "Firebase"],
        "footguns": [
            {
                "id": 1,
                "framework": "Express",
                "title": "Async route handlers swallow rejected promises",
                "status": "open",
                "explanation": "Rejected promises in async handlers never reach error middleware.",
                "reproduction": {
                    "scenario": "An async handler awaits a database call that rejects.",
                    "code": "app.get('/', async (req, res) => { await fail(); });"
                },
                "remedies": [
                    {"label": "Solution A", "guidance": "Wrap async handlers and forward errors to next."},
                    {"label": "Solution B", "guidance": "Catch errors inside each handler."}
                ]
            },
            {
                "id": 2,
                "framework": "SvelteKit",
                "title": "Layout guard bypassed on client-side navigation",
                "status": "open",
                "explanation": "Layout server load does not rerun without a server round-trip.",
                "reproduction": "Navigate between child routes of a guarded layout.",
                "remedies": [
                    {"label": "Solution A", "guidance": "Enforce authorization in hooks.server handle."}
                ]
            },
            {
                "id": 3,
                "framework": "Firebase",
                "title": "Global-scope cache leaks data across sessions",
                "status": "open",
                "explanation": "Warm instances keep module-level variables between invocations.",
                "reproduction": {"scenario": "Two users hit the same warm instance."},
                "remedies": [
                    {"label": "Solution A", "guidance": "Keep per-user state inside the handler."}
                ]
            }
        ]
    }


@pytest.fixture
def make_definition(sample_definition):
    """Factory returning a deep copy of the sample definition to mutate."""
    def _make() -> Dict[str, Any]:
        return copy.deepcopy(sample_definition)
    return _make


@pytest.fixture
def sample_catalog(sample_definition):
    """Catalog built from the sample definition."""
    from src.catalog import FootgunCatalog

    return FootgunCatalog.from_dict(sample_definition)


@pytest.fixture
def documented_catalog():
    """Catalog built from the shipped data file."""
    from src.catalog import FootgunCatalog

    return FootgunCatalog.from_file(DATA_FILE)


# =============================================================================
# FILE FIXTURES
# =============================================================================

@pytest.fixture
def temp_data_dir(tmp_path) -> Path:
    """Create temporary data directory."""
    data_dir = tmp_path / "data" / "raw"
    data_dir.mkdir(parents=True)
    return data_dir


@pytest.fixture
def temp_definition_file(temp_data_dir, sample_definition) -> Path:
    """Write the sample definition to a temporary JSON file."""
    file_path = temp_data_dir / "footguns.json"
    with open(file_path, "w") as f:
        json.dump(sample_definition, f)
    return file_path


# =============================================================================
# ENVIRONMENT FIXTURES
# =============================================================================

@pytest.fixture
def clean_env():
    """Provide clean environment variables."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)
