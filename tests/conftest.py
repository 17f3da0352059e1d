"""Shared pytest setup: Hypothesis profiles and the fuzz marker.

Profiles (example counts live here and nowhere else):
    dev      500 examples, random seeds
    ci        50 examples, derandomized, failure blobs printed
    verbose  100 examples with Hypothesis progress output

HYPOTHESIS_PROFILE selects a profile by name; otherwise CI=true selects
"ci" and anything else runs "dev":

    HYPOTHESIS_PROFILE=verbose pytest tests/

Tests marked ``fuzz`` only run when asked for with ``pytest -m fuzz``.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

_PROFILES = ("dev", "ci", "verbose")
_ALL_PHASES = [Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink]

# =============================================================================
# HYPOTHESIS PROFILES
# =============================================================================

settings.register_profile("dev", max_examples=500, phases=_ALL_PHASES)
settings.register_profile(
    "ci", max_examples=50, phases=_ALL_PHASES, derandomize=True, print_blob=True
)
settings.register_profile(
    "verbose", max_examples=100, phases=_ALL_PHASES, verbosity=Verbosity.verbose
)


def _detect_profile() -> str:
    requested = os.environ.get("HYPOTHESIS_PROFILE", "")
    if requested in _PROFILES:
        return requested
    return "ci" if os.environ.get("CI") == "true" else "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# FUZZ MARKER
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers", "fuzz: long-running property tests, skipped unless -m fuzz"
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip fuzz tests when the -m expression does not mention them."""
    if "fuzz" in str(config.getoption("-m", default="")):
        return
    skip = pytest.mark.skip(reason="fuzz test; run with pytest -m fuzz")
    for item in items:
        if item.get_closest_marker("fuzz") is not None:
            item.add_marker(skip)
