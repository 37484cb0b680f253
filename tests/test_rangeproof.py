import random
from dataclasses import replace

import pytest

from pyrangeproof import (
    DEFAULT_PARAMS,
    Fr,
    PreconditionError,
    Proof,
    RangeProofParams,
    prove,
    verify,
)
from pyrangeproof.curve import G1Point, ec_mul
from pyrangeproof.generators import GeneratorSet, base_points
from pyrangeproof.rangeproof import derive_challenges, early_checks


def _random_statement(rng, m, n_bits):
    values = [rng.randrange(1 << n_bits) for _ in range(m)]
    masks = Fr.rands(rng, m)
    return values, masks


@pytest.mark.parametrize("m", [1, 2, 4, 16])
def test_round_trip(rng, params4, m):
    values, masks = _random_statement(rng, m, params4.n_bits)
    proof = prove(values, masks, params4, rng)
    assert proof.m == m
    assert len(proof.L) == len(proof.R) == (m * params4.n_bits).bit_length() - 1
    assert verify([proof], params4)


@pytest.mark.parametrize("values", [[0], [255], [0, 255], [1, 2, 3, 4]])
def test_round_trip_edge_values(rng, params8, values):
    masks = Fr.rands(rng, len(values))
    assert verify([prove(values, masks, params8, rng)], params8)


@pytest.mark.slow
def test_round_trip_64_bits(rng):
    values = [1000000000000000000]
    masks = [Fr(0x0123456789ABCDEF)]
    proof = prove(values, masks, rng=rng)
    assert len(proof.L) == 6
    G, H = base_points()
    assert proof.V[0] == ec_mul(G, masks[0]) + ec_mul(H, values[0])
    assert verify([proof])


@pytest.mark.slow
def test_round_trip_64_bits_aggregated(rng):
    values = [0, (1 << 64) - 1]
    masks = Fr.rands(rng, 2)
    proof = prove(values, masks, rng=rng)
    assert len(proof.L) == 7
    data = proof.to_bytes()
    assert len(data) == Proof.size(2, 64)
    assert verify([Proof.from_bytes(data, 2)])
    assert verify([proof, prove([12345], [Fr(1)], rng=rng)])


def test_commitments_are_pedersen(rng, params8):
    values, masks = [7, 100], [Fr(3), Fr(5)]
    proof = prove(values, masks, params8, rng)
    G, H = base_points()
    for V, v, mask in zip(proof.V, values, masks):
        assert V == ec_mul(G, mask) + ec_mul(H, v)


@pytest.mark.parametrize("values, masks", [
    ([256], [Fr(1)]),
    ([-1], [Fr(1)]),
    ([1, 1 << 8], [Fr(1), Fr(2)]),
    ([1], [Fr(1), Fr(2)]),
    ([], []),
    ([1, 2, 3], [Fr(1), Fr(2), Fr(3)]),
])
def test_prove_rejects_bad_inputs(rng, params8, values, masks):
    with pytest.raises(PreconditionError):
        prove(values, masks, params8, rng)


def test_prove_rejects_value_above_64_bits(rng):
    with pytest.raises(PreconditionError):
        prove([1 << 64], [Fr(1)], rng=rng)


def test_fresh_blinding_gives_distinct_valid_proofs(params8):
    values, masks = [42, 7], [Fr(9), Fr(10)]
    p1 = prove(values, masks, params8, random.Random(1))
    p2 = prove(values, masks, params8, random.Random(2))
    assert p1.V == p2.V
    assert p1.A != p2.A
    assert p1.to_bytes() != p2.to_bytes()
    assert verify([p1], params8)
    assert verify([p2], params8)


def test_prove_is_deterministic_given_rng(params8):
    values, masks = [42], [Fr(9)]
    p1 = prove(values, masks, params8, random.Random(7))
    p2 = prove(values, masks, params8, random.Random(7))
    assert p1 == p2


def test_batch_equivalence(rng, params8):
    p1 = prove([5], [Fr(1)], params8, rng)
    p2 = prove([6, 250], [Fr(2), Fr(3)], params8, rng)
    assert verify([p1], params8) and verify([p2], params8)
    assert verify([p1, p2], params8)
    assert verify([p2, p1], params8)


def test_batch_uses_generator_prefix_per_proof(rng, params8, monkeypatch):
    p1 = prove([5], [Fr(1)], params8, rng)
    p4 = prove([1, 2, 3, 4], Fr.rands(rng, 4), params8, rng)
    requested = []
    prefix = GeneratorSet.prefix

    def recording_prefix(self, mn):
        requested.append((len(self), mn))
        return prefix(self, mn)

    monkeypatch.setattr(GeneratorSet, "prefix", recording_prefix)
    assert verify([p1, p4, p1], params8)
    assert requested == [(32, 8), (32, 32), (32, 8)]


def test_batch_fails_closed(rng, params8):
    p1 = prove([5], [Fr(1)], params8, rng)
    p2 = prove([6, 250], [Fr(2), Fr(3)], params8, rng)
    bad = replace(p2, t=p2.t + 1)
    assert not verify([bad], params8)
    assert not verify([p1, bad], params8)
    assert not verify([bad, p1], params8)


def test_verify_empty_batch(params8):
    assert not verify([], params8)


def test_verify_rejects_wrong_params(rng, params8):
    proof = prove([5], [Fr(1)], params8, rng)
    assert not verify([proof], RangeProofParams(n_bits=16))
    assert not verify([proof], DEFAULT_PARAMS)


def test_poly_identity_binds_taux(rng, params8):
    proof = prove([5], [Fr(1)], params8, rng)
    assert not verify([replace(proof, taux=proof.taux + 1)], params8)


def test_ipa_identity_binds_mu_and_scalars(rng, params8):
    proof = prove([5], [Fr(1)], params8, rng)
    for field in ("mu", "a", "b"):
        tampered = replace(proof, **{field: getattr(proof, field) + 1})
        assert not verify([tampered], params8), field


def test_swapped_commitment_rejected(rng, params8):
    proof = prove([5, 6], [Fr(1), Fr(2)], params8, rng)
    swapped = replace(proof, V=(proof.V[1], proof.V[0]))
    assert not verify([swapped], params8)


def test_early_checks(rng, params8):
    proof = prove([5], [Fr(1)], params8, rng)
    assert early_checks(proof, params8.n_bits)
    assert not early_checks(replace(proof, L=proof.L[:-1]), params8.n_bits)
    assert not early_checks(replace(proof, V=()), params8.n_bits)
    off_curve = G1Point.from_affine(1, 3)
    assert not early_checks(replace(proof, A=off_curve), params8.n_bits)
    assert not verify([replace(proof, A=off_curve)], params8)
    assert not early_checks("not a proof", params8.n_bits)


def test_challenges_rederived_from_public_fields(rng, params8):
    proof = prove([5], [Fr(1)], params8, rng)
    ch = derive_challenges(proof)
    assert derive_challenges(proof) == ch
    assert len(ch.ws) == len(proof.L)
    moved = replace(proof, T1=proof.T2, T2=proof.T1)
    moved_ch = derive_challenges(moved)
    assert moved_ch.y == ch.y and moved_ch.z == ch.z
    assert moved_ch.x != ch.x
