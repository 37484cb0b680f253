from dataclasses import dataclass

from pyrangeproof.errors import PreconditionError
from pyrangeproof.utils import is_power_of_two

# bit-width of a single range statement, values live in [0, 2^64)
N_BITS = 64

GI_LABEL = b"pyrangeproof.Gi"
HI_LABEL = b"pyrangeproof.Hi"


@dataclass(frozen=True)
class RangeProofParams:
    """
    Public parameters shared by prover and verifier.

    Attributes:
        n_bits: the bit-width N of each range statement, a power of two <= 64
        gi_label: domain label hashed with the index to derive Gi[i]
        hi_label: domain label hashed with the index to derive Hi[i]
    """
    n_bits: int = N_BITS
    gi_label: bytes = GI_LABEL
    hi_label: bytes = HI_LABEL

    def __post_init__(self):
        if not is_power_of_two(self.n_bits) or self.n_bits > 64:
            raise PreconditionError(f"n_bits must be a power of two <= 64, got {self.n_bits}")
        if self.gi_label == self.hi_label:
            raise PreconditionError("Gi and Hi must be derived under distinct labels")

    def check_aggregation(self, m: int) -> int:
        """Validate the aggregation count M and return M*N."""
        if not isinstance(m, int) or m < 1:
            raise PreconditionError(f"M must be a positive integer, got {m!r}")
        mn = m * self.n_bits
        if not is_power_of_two(mn):
            raise PreconditionError(f"M*N = {m}*{self.n_bits} is not a power of two")
        return mn


DEFAULT_PARAMS = RangeProofParams()
