import random
import sys
from pathlib import Path

import pytest
from bitarray import bitarray

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from qrbits.bitbuffer import BitBuffer  # noqa: E402
from qrbits.debug import Debug  # noqa: E402


def bits_of(value: int, length: int) -> bitarray:
    """Naive MSB-first expansion of the low ``length`` bits of ``value``."""
    if length == 0:
        return bitarray()
    return bitarray(f"{value:0{length}b}")


@pytest.fixture(autouse=True)
def quiet_debug():
    """Keep the process-wide Debug switch off between tests."""
    Debug.reset()
    yield
    Debug.reset()


@pytest.fixture()
def buffer():
    return BitBuffer()


@pytest.fixture()
def bits_of_fn():
    """Provide the per-bit reference encoder without importing conftest."""
    return bits_of


@pytest.fixture()
def rng():
    return random.Random(0x5EED)


@pytest.fixture()
def project_root():
    return PROJECT_ROOT
