import pytest

from pyrangeproof.curve import (
    BN128_CURVE_ORDER,
    BN128_FIELD_MODULUS,
    POINT_SIZE,
    Fr,
    G1Point,
    ec_lincomb,
    ec_mul,
    hash_to_point,
)


def test_fr_arithmetic():
    assert Fr(3) + Fr(9) == Fr(12)
    assert Fr(3) * Fr(4) == Fr(12)
    assert Fr(3) - Fr(5) == Fr(BN128_CURVE_ORDER - 2)
    assert Fr(5) * Fr(5).inv() == Fr(1)
    with pytest.raises(ZeroDivisionError):
        Fr(0).inv()


def test_fr_bytes():
    s = Fr(0x1234)
    assert len(s.to_bytes()) == 32
    assert s.to_bytes()[-2:] == b"\x12\x34"
    assert Fr.from_bytes(s.to_bytes()) == s


def test_group_law():
    g = G1Point.ec_gen_group1()
    assert ec_mul(g, Fr(3)) + ec_mul(g, Fr(5)) == ec_mul(g, Fr(8))
    assert ec_mul(g, Fr(8)) - ec_mul(g, Fr(5)) == ec_mul(g, Fr(3))
    assert ec_mul(g, Fr(0)).is_zero
    assert ec_mul(g, BN128_CURVE_ORDER).is_zero
    assert g + G1Point.zero() == g
    assert (g + -g).is_zero


def test_lincomb_matches_sum_of_muls():
    g = G1Point.ec_gen_group1()
    h = hash_to_point(b"lincomb")
    expected = ec_mul(g, Fr(7)) + ec_mul(h, Fr(11))
    assert ec_lincomb([(g, Fr(7)), (h, Fr(11)), (g, Fr(0))]) == expected


def test_compressed_encoding():
    g = G1Point.ec_gen_group1()
    for k in (1, 2, 12345, BN128_CURVE_ORDER - 1):
        p = ec_mul(g, k)
        data = p.to_bytes()
        assert len(data) == POINT_SIZE
        assert data[0] in (0x02, 0x03)
        assert G1Point.from_bytes(data) == p
    # the generator is (1, 2)
    assert g.to_bytes() == b"\x02" + (1).to_bytes(32, "big")
    assert ec_mul(g, BN128_CURVE_ORDER - 1).to_bytes()[0] == 0x03


def test_infinity_encoding():
    data = G1Point.zero().to_bytes()
    assert data == bytes(POINT_SIZE)
    assert G1Point.from_bytes(data).is_zero


@pytest.mark.parametrize("data", [
    bytes(32),
    b"\x04" + (1).to_bytes(32, "big"),
    b"\x00" + (1).to_bytes(32, "big"),
    b"\x02" + BN128_FIELD_MODULUS.to_bytes(32, "big"),
])
def test_invalid_encodings(data):
    with pytest.raises(ValueError):
        G1Point.from_bytes(data)


def test_off_curve_x_rejected():
    # x^3 + 3 is a square for roughly half of all x; one of the first few fails
    rejected = 0
    for x in range(1, 20):
        try:
            G1Point.from_bytes(b"\x02" + x.to_bytes(32, "big"))
        except ValueError:
            rejected += 1
    assert rejected > 0


def test_hash_to_point():
    p = hash_to_point(b"seed")
    assert p == hash_to_point(b"seed")
    assert p != hash_to_point(b"seed2")
    assert p.is_on_curve()
    assert p.is_on_subgroup()
    x, y = p.affine()
    assert y % 2 == 0


def test_off_curve_point_detected():
    g = G1Point.ec_gen_group1()
    bad = G1Point.from_affine(1, 3)
    assert g.is_on_subgroup()
    assert not bad.is_on_curve()
    assert not bad.is_on_subgroup()
