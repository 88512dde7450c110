"""
Pytest configuration and shared fixtures for carryover tests.

Provides reusable fixtures for:
- Random number generators
- Sample spend series
- Transform parameters and configs
- Capturing loguru output
"""

import json

import numpy as np
import pandas as pd
import pytest
from hypothesis import Verbosity, settings
from loguru import logger


# =============================================================================
# BASIC FIXTURES
# =============================================================================


@pytest.fixture
def random_seed() -> int:
    """Consistent random seed for reproducible tests."""
    return 42


@pytest.fixture
def rng(random_seed: int) -> np.random.Generator:
    """NumPy random generator."""
    return np.random.default_rng(random_seed)


# =============================================================================
# SPEND DATA FIXTURES
# =============================================================================


@pytest.fixture
def impulse() -> np.ndarray:
    """A single burst of spend followed by silence."""
    return np.array([100.0, 0.0, 0.0, 0.0, 0.0])


@pytest.fixture
def sample_spend_series(rng: np.random.Generator) -> np.ndarray:
    """Sample weekly spend data (52 weeks)."""
    base = rng.lognormal(mean=10, sigma=0.5, size=52)
    # Paused weeks
    base[10:12] = 0
    base[30:32] = 0
    return base


@pytest.fixture
def sample_spend_series_short() -> np.ndarray:
    """Short spend series for edge case testing."""
    return np.array([100.0, 50.0, 0.0, 75.0, 25.0])


@pytest.fixture
def sample_spend_series_sparse() -> np.ndarray:
    """Very sparse spend: a five-week flight in half a year."""
    x = np.zeros(26)
    x[10:15] = [50000, 60000, 40000, 30000, 20000]
    return x


# =============================================================================
# DATAFRAME AND CONFIG FIXTURES
# =============================================================================


@pytest.fixture
def spend_df(sample_spend_series_sparse: np.ndarray) -> pd.DataFrame:
    """Two-channel weekly spend frame."""
    n = len(sample_spend_series_sparse)
    return pd.DataFrame(
        {
            "week": pd.date_range("2024-01-01", periods=n, freq="W-MON"),
            "tv_spend": np.r_[100.0, np.zeros(n - 1)],
            "search_spend": sample_spend_series_sparse,
        }
    )


@pytest.fixture
def transform_config_dict() -> dict:
    """Config covering geometric, Weibull and saturation-only channels."""
    return {
        "channels": [
            {
                "column": "tv_spend",
                "category": "tv",
                "adstock": {"type": "geometric", "theta": 0.7},
                "saturation": {"alpha": 2.0, "gamma": 0.5},
            },
            {
                "column": "search_spend",
                "category": "digital",
                "adstock": {"type": "weibull", "shape": 2.0, "scale": 0.1, "kind": "pdf"},
            },
        ],
    }


@pytest.fixture
def config_file(tmp_path, transform_config_dict: dict):
    """Transform config written to a JSON file."""
    path = tmp_path / "transforms.json"
    path.write_text(json.dumps(transform_config_dict), encoding="utf-8")
    return path


@pytest.fixture
def loguru_messages():
    """Collect loguru messages emitted by carryover at WARNING and above."""
    messages: list[str] = []
    logger.enable("carryover")
    handler_id = logger.add(lambda m: messages.append(str(m)), level="WARNING")
    yield messages
    logger.remove(handler_id)
    logger.disable("carryover")


# =============================================================================
# TRANSFORM PARAMETER FIXTURES
# =============================================================================


@pytest.fixture
def weibull_params() -> dict:
    """Standard Weibull adstock parameters for testing."""
    return {"shape": 2.0, "scale": 0.1}


@pytest.fixture
def saturation_params() -> dict:
    """Standard Hill saturation parameters for testing."""
    return {"alpha": 2.0, "gamma": 0.5}


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line("markers", "cli: marks tests that drive the CLI")


def pytest_collection_modifyitems(config, items):
    """Auto-mark CLI tests."""
    for item in items:
        if "test_cli" in item.nodeid:
            item.add_marker(pytest.mark.cli)


# =============================================================================
# HYPOTHESIS PROFILES
# =============================================================================

settings.register_profile("ci", max_examples=50, deadline=None)
settings.register_profile("dev", max_examples=10, deadline=None)
settings.register_profile(
    "debug", max_examples=5, verbosity=Verbosity.verbose, deadline=None
)
