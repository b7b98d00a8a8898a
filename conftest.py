import numpy as np
import pytest


@pytest.fixture
def rng():
    """Seeded generator so chaos-game assertions are reproducible."""
    return np.random.default_rng(20240611)


@pytest.fixture
def small_chunks(monkeypatch):
    """Shrink the randomness batch so short runs cross several chunks."""
    from sierpinski import config
    monkeypatch.setattr(config, 'CHUNK_SIZE', 7)
    return 7
