import random

import pytest

from pyrangeproof.params import RangeProofParams


@pytest.fixture
def rng():
    return random.Random("pyrangeproof-tests")


@pytest.fixture
def params8():
    """8-bit ranges keep pure-Python proofs fast."""
    return RangeProofParams(n_bits=8)


@pytest.fixture
def params4():
    return RangeProofParams(n_bits=4)
