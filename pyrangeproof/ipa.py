#!/usr/bin/env python3

# WARNING: This implementation may contain bugs and has not been audited.
# It is only for educational purposes. DO NOT use it in production.

# Implementation of the inner product argument (Protocol 1/2) from:
#   Bulletproofs: https://eprint.iacr.org/2017/1066.pdf
#
#  Public inputs:
#      1.  Gi, Hi: generator vectors of length n (a power of two)
#      2.  U: the point that carries the inner product
#      3.  P = <a, Gi> + <b, Hi> + <a, b> * U
#
#  Witnesses:
#      a, b with <a, b> = c
#
# Each round halves the vectors with a challenge w = H(L, R), so the argument
# is 2 * log2(n) points plus the two final scalars.

import logging
from typing import NamedTuple

from pyrangeproof.curve import Fr, ec_mul, ec_lincomb, G1Point
from pyrangeproof.errors import DegenerateChallengeError, PreconditionError
from pyrangeproof.pedersen import PedersenCommitment
from pyrangeproof.transcript import Transcript
from pyrangeproof.utils import ipa, is_power_of_two, log_2

logger = logging.getLogger(__name__)

class IPAArgument(NamedTuple):
    L: list[G1Point]
    R: list[G1Point]
    a: Fr
    b: Fr

def round_challenge(L: G1Point, R: G1Point) -> Fr:
    tr = Transcript()
    tr.append_point(L)
    tr.append_point(R)
    return tr.challenge_scalar("w")

def fold_points(P1: list[G1Point], P2: list[G1Point], s1: Fr, s2: Fr) -> list[G1Point]:
    """P1 * s1 o P2 * s2, elementwise"""
    return [ec_mul(p1, s1) + ec_mul(p2, s2) for p1, p2 in zip(P1, P2)]

def fold_scalars(ws: list[Fr]) -> list[Fr]:
    """
    Exponents s[i] such that the generators after all rounds are

        Gi' = sum_i s[i] * Gi[i],   Hi' = sum_i s[i]^{-1} * Hi[i]

    Round r keeps the low half scaled by w_r^{-1} and the high half by w_r,
    so s[i] picks w_r when bit (rounds - 1 - r) of i is set.
    """
    rounds = len(ws)
    ws_inv = [w.inv() for w in ws]
    s = []
    for i in range(1 << rounds):
        acc = Fr(1)
        for r in range(rounds):
            if (i >> (rounds - 1 - r)) & 1:
                acc *= ws[r]
            else:
                acc *= ws_inv[r]
        s.append(acc)
    return s

def inner_product_prove(Gi: list[G1Point], Hi: list[G1Point], U: G1Point,
                        vec_a: list[Fr], vec_b: list[Fr]) -> IPAArgument:
    """
    Prove knowledge of vec_a, vec_b opening P = <vec_a, Gi> + <vec_b, Hi> + <vec_a, vec_b> * U.

    Args:
        Gi, Hi: the generator vectors, same length as vec_a
        U: the point carrying the inner product
        vec_a, vec_b: the witness vectors
    Returns:
        an IPAArgument (L, R, a, b)
    Raises:
        PreconditionError: if the lengths differ or are not a power of two
        DegenerateChallengeError: if a round challenge is zero
    """
    n = len(vec_a)
    if not (len(vec_b) == len(Gi) == len(Hi) == n):
        raise PreconditionError(f"length mismatch: a={n}, b={len(vec_b)}, Gi={len(Gi)}, Hi={len(Hi)}")
    if not is_power_of_two(n):
        raise PreconditionError(f"vector length {n} is not a power of two")

    Gi = list(Gi)
    Hi = list(Hi)
    a = list(vec_a)
    b = list(vec_b)
    L = []
    R = []

    round = 0
    half = n // 2
    while half > 0:
        a1, a2 = a[:half], a[half:]
        b1, b2 = b[:half], b[half:]
        G1, G2 = Gi[:half], Gi[half:]
        H1, H2 = Hi[:half], Hi[half:]

        cL = ipa(a1, b2)
        cR = ipa(a2, b1)
        L.append(PedersenCommitment.commit_vector(cL, U, a1 + b2, G2 + H1))
        R.append(PedersenCommitment.commit_vector(cR, U, a2 + b1, G1 + H2))

        w = round_challenge(L[round], R[round])
        w_inv = w.inv()
        logger.debug("prove> ipa round: %d, half: %d", round, half)

        Gi = fold_points(G1, G2, w_inv, w)
        Hi = fold_points(H1, H2, w, w_inv)
        a = [x1 * w + x2 * w_inv for x1, x2 in zip(a1, a2)]
        b = [x1 * w_inv + x2 * w for x1, x2 in zip(b1, b2)]

        half //= 2
        round += 1

    assert len(a) == len(b) == len(Gi) == len(Hi) == 1, "len(a) and len(b) should be 1"
    return IPAArgument(L, R, a[0], b[0])

def inner_product_verify(Gi: list[G1Point], Hi: list[G1Point], U: G1Point, P: G1Point,
                         arg: IPAArgument) -> bool:
    """
    Verify an inner product argument against P = <a, Gi> + <b, Hi> + <a, b> * U.

    This folds the generators round by round; the range proof verifier uses
    the single multi-exponentiation form built on fold_scalars instead.
    """
    n = len(Gi)
    L, R, a, b = arg
    if len(Hi) != n or not is_power_of_two(n):
        raise PreconditionError(f"generator lengths must match and be a power of two, got {n}, {len(Hi)}")
    rounds = log_2(n)
    if len(L) != rounds or len(R) != rounds:
        logger.info("verify> expected %d rounds, got L=%d R=%d", rounds, len(L), len(R))
        return False

    Gi = list(Gi)
    Hi = list(Hi)
    half = n // 2
    for round in range(rounds):
        try:
            w = round_challenge(L[round], R[round])
        except DegenerateChallengeError:
            logger.info("verify> ipa round %d: zero challenge", round)
            return False
        w_inv = w.inv()
        w2 = w * w
        P = ec_lincomb([(P, Fr(1)), (L[round], w2), (R[round], w_inv * w_inv)])
        Gi = fold_points(Gi[:half], Gi[half:], w_inv, w)
        Hi = fold_points(Hi[:half], Hi[half:], w, w_inv)
        half //= 2

    rhs = ec_lincomb([(Gi[0], a), (Hi[0], b), (U, a * b)])
    return P == rhs
