from pyrangeproof.curve import Fr, G1Point
from pyrangeproof.errors import (
    DegenerateChallengeError,
    InconsistentWitnessError,
    MalformedProofError,
    PreconditionError,
    RangeProofError,
)
from pyrangeproof.generators import GeneratorSet
from pyrangeproof.params import DEFAULT_PARAMS, RangeProofParams
from pyrangeproof.proof import Proof
from pyrangeproof.rangeproof import prove, verify

__all__ = [
    "DEFAULT_PARAMS",
    "DegenerateChallengeError",
    "Fr",
    "G1Point",
    "GeneratorSet",
    "InconsistentWitnessError",
    "MalformedProofError",
    "PreconditionError",
    "Proof",
    "RangeProofError",
    "RangeProofParams",
    "prove",
    "verify",
]
