class RangeProofError(Exception):
    """Base class for every error raised by pyrangeproof."""


class PreconditionError(RangeProofError, ValueError):
    """Invalid arguments: length mismatch, value out of range, bad sizes."""


class DegenerateChallengeError(RangeProofError):
    """A Fiat-Shamir challenge came out as zero."""


class InconsistentWitnessError(RangeProofError):
    """The bit decomposition does not satisfy <aL, aR> == 0."""


class MalformedProofError(RangeProofError, ValueError):
    """A proof is structurally invalid or cannot be decoded."""
