import pytest
import random
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Hypothesis configuration for property-based testing
from hypothesis import settings
from tests.helpers.tracks import make_track

# Register Hypothesis profiles
settings.register_profile("fast", max_examples=50, deadline=None)
settings.register_profile("thorough", max_examples=1000, deadline=None)
settings.load_profile("fast")  # Default to fast profile


def pytest_collection_modifyitems(items):
    """Automatically order tests: unit tests first, then property tests.

    Individual tests marked with @pytest.mark.order(...) keep their explicit order.
    """
    for item in items:
        # Skip if item already has explicit order marker
        if hasattr(item, 'get_closest_marker') and item.get_closest_marker('order'):
            continue

        # Assign order based on test file name
        test_file = str(item.fspath)
        if 'test_unit_' in test_file:
            item.add_marker(pytest.mark.order(1))
        elif 'test_props_' in test_file:
            item.add_marker(pytest.mark.order(2))


@pytest.fixture
def tracks():
    """Four tagged tracks, A through D."""
    return [
        make_track(1, "Alpha", "The Beatles", "Abbey Road", filepath="/test/song1.mp3"),
        make_track(2, "Bravo", "Radiohead", "OK Computer", filepath="/test/song2.mp3"),
        make_track(3, "Charlie", "Bjork", "Homogenic", filepath="/test/song3.mp3"),
        make_track(4, "Delta", "Radiohead", "Kid A", filepath="/test/song4.mp3"),
    ]


@pytest.fixture
def seeded_rng():
    """Deterministic random source for shuffle tests."""
    return random.Random(1234)
