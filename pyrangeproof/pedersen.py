#!/usr/bin/env python3

# WARNING: This implementation may contain bugs and has not been audited.
# It is only for educational purposes. DO NOT use it in production.

from pyrangeproof.curve import Fr, ec_mul, G1Point
from pyrangeproof.errors import PreconditionError
from pyrangeproof.generators import base_points

class PedersenCommitment:
    """
    Pedersen commitments over the bases (G, H):

        commit_scalar(mask, amount) = mask * G + amount * H

    and vector commitments over an explicit list of generators:

        commit_vector(mask, base, coeffs, gens) = mask * base + <coeffs, gens>
    """
    pp: tuple[G1Point, G1Point]

    def __init__(self, pp: tuple[G1Point, G1Point]):
        G, H = pp
        if not isinstance(G, G1Point):
            raise ValueError("pp.G must be a G1Point")
        if not isinstance(H, G1Point):
            raise ValueError("pp.H must be a G1Point")
        self.pp = pp

    @classmethod
    def setup(cls) -> "PedersenCommitment":
        return cls(base_points())

    def commit_scalar(self, mask: Fr, amount: Fr | int) -> G1Point:
        G, H = self.pp
        cm = ec_mul(G, mask)
        if amount != 0:
            cm += ec_mul(H, amount)
        return cm

    def open(self, cm: G1Point, mask: Fr, amount: Fr | int) -> bool:
        return cm == self.commit_scalar(mask, amount)

    @classmethod
    def commit_vector(cls, mask: Fr, base: G1Point, coeffs: list[Fr], gens: list[G1Point]) -> G1Point:
        if len(coeffs) != len(gens):
            raise PreconditionError(f"len(coeffs): {len(coeffs)} != len(gens): {len(gens)}")
        cm = ec_mul(base, mask)
        for c, g in zip(coeffs, gens):
            if c != 0:
                cm += ec_mul(g, c)
        return cm

    @classmethod
    def open_vector(cls, cm: G1Point, mask: Fr, base: G1Point, coeffs: list[Fr], gens: list[G1Point]) -> bool:
        return cm == cls.commit_vector(mask, base, coeffs, gens)
