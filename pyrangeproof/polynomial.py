#!/usr/bin/env python3

# Reduction of M range statements v_j in [0, 2^N) to one inner product,
# following Section 4.1-4.3 of the Bulletproofs paper:
#   Bulletproofs: https://eprint.iacr.org/2017/1066.pdf
#
#   l(X) = (aL - z*1) + sL*X
#   r(X) = y^n o (aR + z*1 + sR*X) + zero_twos
#   t(X) = <l(X), r(X)> = t0 + t1*X + t2*X^2
#
# where y^n = (1, y, y^2, ..., y^{MN-1}) and zero_twos[i] = z^{2+j} * 2^{i mod N}
# for the block j = i // N that position i belongs to.

from typing import NamedTuple

from pyrangeproof.curve import Fr
from pyrangeproof.errors import InconsistentWitnessError, PreconditionError
from pyrangeproof.utils import bits_le_with_width, hadamard, ipa, vector_powers

class PolyCoeffs(NamedTuple):
    l0: list[Fr]
    l1: list[Fr]
    r0: list[Fr]
    r1: list[Fr]
    t1: Fr
    t2: Fr

def check_values(values: list[int], n_bits: int):
    for j, v in enumerate(values):
        if isinstance(v, bool) or not isinstance(v, int):
            raise PreconditionError(f"values[{j}] must be an int, got {type(v).__name__}")
        if v < 0 or v >= 1 << n_bits:
            raise PreconditionError(f"values[{j}] = {v} is outside [0, 2^{n_bits})")

def bit_decompose(values: list[int], n_bits: int) -> tuple[list[Fr], list[Fr]]:
    """
    Flattened little-endian bit vectors of all values, aL, and aR = aL - 1.

    Raises:
        PreconditionError: if a value is not an int in [0, 2^n_bits)
        InconsistentWitnessError: if <aL, aR> != 0
    """
    check_values(values, n_bits)
    aL = []
    for v in values:
        aL += [Fr(bit) for bit in bits_le_with_width(v, n_bits)]
    aR = [a - 1 for a in aL]
    if ipa(aL, aR) != 0:
        raise InconsistentWitnessError("<aL, aR> != 0 after bit decomposition")
    return aL, aR

def zero_twos(z: Fr, m: int, n_bits: int) -> list[Fr]:
    twos = vector_powers(Fr(2), n_bits)
    zpow = vector_powers(z, m + 2)
    res = []
    for j in range(m):
        res += [zpow[j + 2] * twos[k] for k in range(n_bits)]
    return res

def poly_coeffs(aL: list[Fr], aR: list[Fr], sL: list[Fr], sR: list[Fr], y: Fr, z: Fr, m: int, n_bits: int) -> PolyCoeffs:
    """
    Coefficients of l(X), r(X) and of the degree-1 and degree-2 terms of t(X).
    t0 is never committed, the verifier checks it through delta(y, z).
    """
    mn = m * n_bits
    if m < 1:
        raise PreconditionError("M must be at least 1")
    if not len(aL) == len(aR) == len(sL) == len(sR) == mn:
        raise PreconditionError(f"witness vectors must all have length M*N = {mn}")

    l0 = [a - z for a in aL]
    l1 = sL

    y_mn = vector_powers(y, mn)
    zt = zero_twos(z, m, n_bits)
    r0 = [yi * (a + z) + zti for yi, a, zti in zip(y_mn, aR, zt)]
    r1 = hadamard(y_mn, sR)

    t1 = ipa(l0, r1) + ipa(l1, r0)
    t2 = ipa(l1, r1)
    return PolyCoeffs(l0, l1, r0, r1, t1, t2)

def evaluate(v0: list[Fr], v1: list[Fr], x: Fr) -> list[Fr]:
    """v0 + v1 * x, used for both l(x) and r(x)"""
    return [a + b * x for a, b in zip(v0, v1)]

def delta(y: Fr, z: Fr, m: int, n_bits: int) -> Fr:
    """
    delta(y, z) = (z - z^2) * <1, y^{MN}> - sum_j z^{j+3} * <1, 2^N>
    """
    sum_y = sum(vector_powers(y, m * n_bits), Fr(0))
    sum_2 = Fr((1 << n_bits) - 1)
    zpow = vector_powers(z, m + 3)
    res = (z - z * z) * sum_y
    for j in range(m):
        res -= zpow[j + 3] * sum_2
    return res

def blinding_taux(tau1: Fr, tau2: Fr, masks: list[Fr], x: Fr, z: Fr) -> Fr:
    """taux = tau1 * x + tau2 * x^2 + sum_j z^{j+2} * masks[j]"""
    zpow = vector_powers(z, len(masks) + 2)
    taux = tau1 * x + tau2 * x * x
    for j, mask in enumerate(masks):
        taux += zpow[j + 2] * mask
    return taux

def blinding_mu(alpha: Fr, rho: Fr, x: Fr) -> Fr:
    return alpha + rho * x
