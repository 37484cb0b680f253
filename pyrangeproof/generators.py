import functools
import logging
from dataclasses import dataclass

from pyrangeproof.curve import G1Point, hash_to_point
from pyrangeproof.params import DEFAULT_PARAMS, RangeProofParams

logger = logging.getLogger(__name__)

# NOTE: Gi and Hi are hashed to the curve under separate labels, so no
#   discrete-log relation between them (or with G, H) is known to anyone.
#   Nothing here needs a trusted setup.

# enough for Gi and Hi of M = 32 at N = 64; other label sets evict
GENERATOR_CACHE_SIZE = 4096

@functools.lru_cache(maxsize=GENERATOR_CACHE_SIZE)
def _indexed_generator(label: bytes, index: int) -> G1Point:
    return hash_to_point(label + index.to_bytes(4, "big"))

@functools.lru_cache(maxsize=1)
def base_points() -> tuple[G1Point, G1Point]:
    """
    The Pedersen bases (G, H). G is the curve generator and carries the
    blinding factors; H is hashed from the encoding of G and carries values.
    """
    G = G1Point.ec_gen_group1()
    H = hash_to_point(G.to_bytes())
    return G, H


@dataclass(frozen=True)
class GeneratorSet:
    G: G1Point
    H: G1Point
    Gi: tuple[G1Point, ...]
    Hi: tuple[G1Point, ...]

    @classmethod
    def derive(cls, m: int, params: RangeProofParams = DEFAULT_PARAMS) -> "GeneratorSet":
        """
        Derive the generators for M aggregated statements of params.n_bits
        bits each, i.e. M*N points in each of Gi and Hi.
        """
        mn = params.check_aggregation(m)
        logger.debug("generators> deriving %d pairs", mn)
        G, H = base_points()
        Gi = tuple(_indexed_generator(params.gi_label, i) for i in range(mn))
        Hi = tuple(_indexed_generator(params.hi_label, i) for i in range(mn))
        return cls(G, H, Gi, Hi)

    def __len__(self) -> int:
        return len(self.Gi)

    def prefix(self, mn: int) -> "GeneratorSet":
        """The generator set of a smaller aggregation; derivation is index-keyed."""
        if mn > len(self):
            raise ValueError(f"requested {mn} generators, only {len(self)} derived")
        return GeneratorSet(self.G, self.H, self.Gi[:mn], self.Hi[:mn])
