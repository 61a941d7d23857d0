import numpy
import pytest


@pytest.fixture
def rng() -> numpy.random.Generator:
    return numpy.random.default_rng(42)


@pytest.fixture
def points_2d() -> list[tuple[float, float]]:
    return [(2.0, 3.0), (0.0, 1.0), (4.0, 5.0)]
