#!/usr/bin/env python3

# WARNING: This implementation may contain bugs and has not been audited.
# It is only for educational purposes. DO NOT use it in production.

# Aggregated range proofs from Section 4 of:
#   Bulletproofs: https://eprint.iacr.org/2017/1066.pdf
#
# Commitments use G for blinding and H for values:
#
#   V[j] = masks[j] * G + v[j] * H
#   A    = alpha * G + <aL, Gi> + <aR, Hi>
#   S    = rho * G + <sL, Gi> + <sR, Hi>
#   T1   = tau1 * G + t1 * H,  T2 = tau2 * G + t2 * H
#
# Challenges (each over everything before it):
#
#   y <- H(V, A, S)
#   z <- H(V, A, S, y)
#   x <- H(V, A, S, y, z, T1, T2)
#   x_ip <- H(V, A, S, y, z, T1, T2, x, taux, mu, t)
#
# The inner product argument runs over Gi and Hi'[i] = y^{-i} * Hi[i] with
# U = x_ip * H.

import logging
import random
from typing import NamedTuple, Optional

from pyrangeproof.curve import Fr, ec_lincomb, ec_mul, G1Point
from pyrangeproof.errors import DegenerateChallengeError, PreconditionError
from pyrangeproof.generators import GeneratorSet
from pyrangeproof.ipa import fold_scalars, inner_product_prove, round_challenge
from pyrangeproof.params import DEFAULT_PARAMS, RangeProofParams
from pyrangeproof.pedersen import PedersenCommitment
from pyrangeproof.polynomial import (
    bit_decompose,
    blinding_mu,
    blinding_taux,
    check_values,
    delta,
    evaluate,
    poly_coeffs,
    zero_twos,
)
from pyrangeproof.proof import Proof
from pyrangeproof.transcript import Transcript
from pyrangeproof.utils import ipa, log_2, vector_powers

logger = logging.getLogger(__name__)

class Challenges(NamedTuple):
    y: Fr
    z: Fr
    x: Fr
    x_ip: Fr
    ws: list[Fr]

def _secure_rng() -> random.Random:
    return random.SystemRandom()

def prove(values: list[int], masks: list[Fr | int],
          params: RangeProofParams = DEFAULT_PARAMS,
          rng: Optional[random.Random] = None) -> Proof:
    """
    Prove that every values[j] lies in [0, 2^N), committed as
    V[j] = masks[j] * G + values[j] * H.

    Args:
        values: the M committed amounts
        masks: the M blinding factors of the commitments V
        params: public parameters, N = params.n_bits
        rng: source of the blinding factors; defaults to random.SystemRandom.
            Every call must draw fresh blinders, reusing them across two
            proofs leaks the witness.
    Returns:
        the Proof
    Raises:
        PreconditionError: if the inputs are malformed or a value is out of range
        DegenerateChallengeError: if a Fiat-Shamir challenge is zero
        InconsistentWitnessError: if the bit decomposition is inconsistent
    """
    if len(values) != len(masks):
        raise PreconditionError(f"len(values): {len(values)} != len(masks): {len(masks)}")
    m = len(values)
    n_bits = params.n_bits
    mn = params.check_aggregation(m)
    check_values(values, n_bits)
    if rng is None:
        rng = _secure_rng()

    masks = [Fr(mask) for mask in masks]
    gens = GeneratorSet.derive(m, params)
    pcs = PedersenCommitment((gens.G, gens.H))
    logger.debug("prove> M: %d, N: %d", m, n_bits)

    V = [pcs.commit_scalar(mask, v) for mask, v in zip(masks, values)]
    aL, aR = bit_decompose(values, n_bits)

    alpha = Fr.rand(rng)
    A = PedersenCommitment.commit_vector(alpha, gens.G, aL + aR, list(gens.Gi + gens.Hi))

    sL = Fr.rands(rng, mn)
    sR = Fr.rands(rng, mn)
    rho = Fr.rand(rng)
    S = PedersenCommitment.commit_vector(rho, gens.G, sL + sR, list(gens.Gi + gens.Hi))

    tr = Transcript()
    tr.append_points(V)
    tr.append_point(A)
    tr.append_point(S)
    y = tr.challenge_scalar("y")
    z = tr.challenge_scalar("z")

    coeffs = poly_coeffs(aL, aR, sL, sR, y, z, m, n_bits)

    tau1 = Fr.rand(rng)
    tau2 = Fr.rand(rng)
    T1 = pcs.commit_scalar(tau1, coeffs.t1)
    T2 = pcs.commit_scalar(tau2, coeffs.t2)

    tr.append_point(T1)
    tr.append_point(T2)
    x = tr.challenge_scalar("x")

    l = evaluate(coeffs.l0, coeffs.l1, x)
    r = evaluate(coeffs.r0, coeffs.r1, x)
    t = ipa(l, r)

    taux = blinding_taux(tau1, tau2, masks, x, z)
    mu = blinding_mu(alpha, rho, x)

    tr.append_scalar(taux)
    tr.append_scalar(mu)
    tr.append_scalar(t)
    x_ip = tr.challenge_scalar("x_ip")

    y_inv_pow = vector_powers(y.inv(), mn)
    Hi_prime = [ec_mul(h, yi) for h, yi in zip(gens.Hi, y_inv_pow)]
    U = ec_mul(gens.H, x_ip)

    arg = inner_product_prove(list(gens.Gi), Hi_prime, U, l, r)

    return Proof(
        V=tuple(V), A=A, S=S, T1=T1, T2=T2,
        taux=taux, mu=mu, t=t,
        L=tuple(arg.L), R=tuple(arg.R), a=arg.a, b=arg.b,
    )

def early_checks(proof: Proof, n_bits: int = DEFAULT_PARAMS.n_bits) -> bool:
    """
    Checks that the sizes are coherent, that the scalars are reduced and
    that the points are on the curve and in the right subgroup.
    """
    if not isinstance(proof, Proof):
        logger.info("verify> not a Proof: %r", type(proof))
        return False
    m = proof.m
    if m < 1:
        logger.info("verify> proof has no commitments")
        return False
    mn = m * n_bits
    if mn & (mn - 1):
        logger.info("verify> M*N = %d is not a power of two", mn)
        return False
    rounds = log_2(mn)
    if len(proof.L) != rounds or len(proof.R) != rounds:
        logger.info("verify> expected %d rounds, got L=%d R=%d", rounds, len(proof.L), len(proof.R))
        return False
    for s in proof.scalars():
        if not isinstance(s, Fr):
            logger.info("verify> scalar is not in Fr")
            return False
    for pt in proof.points():
        if not isinstance(pt, G1Point) or not pt.is_on_subgroup():
            logger.info("verify> point is not in G1")
            return False
    return True

def derive_challenges(proof: Proof) -> Challenges:
    """Re-derive every Fiat-Shamir challenge of a proof from its public fields."""
    tr = Transcript()
    tr.append_points(list(proof.V))
    tr.append_point(proof.A)
    tr.append_point(proof.S)
    y = tr.challenge_scalar("y")
    z = tr.challenge_scalar("z")
    tr.append_point(proof.T1)
    tr.append_point(proof.T2)
    x = tr.challenge_scalar("x")
    tr.append_scalar(proof.taux)
    tr.append_scalar(proof.mu)
    tr.append_scalar(proof.t)
    x_ip = tr.challenge_scalar("x_ip")
    ws = [round_challenge(L, R) for L, R in zip(proof.L, proof.R)]
    return Challenges(y, z, x, x_ip, ws)

class _BatchAccumulator:
    """
    One side of a random linear combination of verification equations,
    all moved to the left so that the batch holds iff the sum is zero.
    """

    def __init__(self, gens: GeneratorSet):
        self.gens = gens
        self.g = Fr(0)
        self.h = Fr(0)
        self.gi = [Fr(0)] * len(gens)
        self.hi = [Fr(0)] * len(gens)
        self.others: list[tuple[G1Point, Fr]] = []

    def add_poly_check(self, proof: Proof, ch: Challenges, weight: Fr, n_bits: int):
        # t*H + taux*G - sum_j z^(j+2)*V[j] - delta*H - x*T1 - x^2*T2 == 0
        m = proof.m
        zpow = vector_powers(ch.z, m + 2)
        self.h += weight * (proof.t - delta(ch.y, ch.z, m, n_bits))
        self.g += weight * proof.taux
        for j, Vj in enumerate(proof.V):
            self.others.append((Vj, -weight * zpow[j + 2]))
        self.others.append((proof.T1, -weight * ch.x))
        self.others.append((proof.T2, -weight * ch.x * ch.x))

    def add_ipa_check(self, proof: Proof, ch: Challenges, weight: Fr, gens: GeneratorSet):
        # sum_i (a*s_i + z)*Gi[i] + (y^-i*(b/s_i - zero_twos[i]) - z)*Hi[i]
        #   + x_ip*(a*b - t)*H + mu*G - A - x*S - sum_r (w_r^2*L_r + w_r^-2*R_r) == 0
        # gens is the prefix matching this proof, Gi[:M*N] and Hi[:M*N]
        m = proof.m
        mn = len(gens)
        s = fold_scalars(ch.ws)
        zt = zero_twos(ch.z, m, mn // m)
        y_inv_pow = vector_powers(ch.y.inv(), mn)
        for i in range(mn):
            self.gi[i] += weight * (proof.a * s[i] + ch.z)
            self.hi[i] += weight * (y_inv_pow[i] * (proof.b * s[i].inv() - zt[i]) - ch.z)
        self.h += weight * ch.x_ip * (proof.a * proof.b - proof.t)
        self.g += weight * proof.mu
        self.others.append((proof.A, -weight))
        self.others.append((proof.S, -weight * ch.x))
        for w, L, R in zip(ch.ws, proof.L, proof.R):
            w2 = w * w
            self.others.append((L, -weight * w2))
            self.others.append((R, -weight * w2.inv()))

    def is_zero(self) -> bool:
        gens = self.gens
        pairs = [(gens.G, self.g), (gens.H, self.h)]
        pairs += list(zip(gens.Gi, self.gi))
        pairs += list(zip(gens.Hi, self.hi))
        pairs += self.others
        return ec_lincomb(pairs).is_zero

def verify(proofs: list[Proof], params: RangeProofParams = DEFAULT_PARAMS,
           rng: Optional[random.Random] = None) -> bool:
    """
    Verify a batch of range proofs, possibly of different aggregation sizes.

    Each proof contributes its polynomial identity and its inner product
    identity to a single linear combination under fresh random weights.
    Returns True iff every proof is valid; a single bad proof fails the call.
    """
    proofs = list(proofs)
    if not proofs:
        logger.info("verify> empty batch")
        return False
    n_bits = params.n_bits
    if rng is None:
        rng = _secure_rng()

    for k, proof in enumerate(proofs):
        if not early_checks(proof, n_bits):
            logger.info("verify> proof %d rejected by early checks", k)
            return False

    max_m = max(proof.m for proof in proofs)
    gens = GeneratorSet.derive(max_m, params)
    acc = _BatchAccumulator(gens)

    challenges = []
    for k, proof in enumerate(proofs):
        try:
            ch = derive_challenges(proof)
        except DegenerateChallengeError as e:
            logger.info("verify> proof %d: %s", k, e)
            return False
        challenges.append(ch)
        logger.debug("verify> proof %d: M=%d, rounds=%d", k, proof.m, len(ch.ws))

    for proof, ch in zip(proofs, challenges):
        acc.add_poly_check(proof, ch, Fr.rand(rng), n_bits)
        acc.add_ipa_check(proof, ch, Fr.rand(rng), gens.prefix(proof.m * n_bits))

    ok = acc.is_zero()
    if not ok:
        logger.info("verify> batch of %d proofs failed the identity check", len(proofs))
    return ok


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    rng = random.SystemRandom()
    params = RangeProofParams(n_bits=8)
    values = [31, 200]
    masks = Fr.rands(rng, len(values))
    proof = prove(values, masks, params)
    print(f"V: {[pt.to_bytes().hex() for pt in proof.V]}")
    print(f"proof size: {len(proof.to_bytes())} bytes")
    print(f"verified: {verify([proof], params)}")
