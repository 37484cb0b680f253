from random import Random

from eth_utils import keccak
from py_ecc.fields.field_elements import FQ
from py_ecc.fields import optimized_bn128_FQ as Fp
import py_ecc.optimized_bn128 as bn128

BN128_CURVE_ORDER = bn128.curve_order
BN128_FIELD_MODULUS = Fp.field_modulus

SCALAR_SIZE = 32
POINT_SIZE = 33

class Fr(FQ):
    field_modulus = bn128.curve_order

    @classmethod
    def rand(cls, rndg: Random) -> "Fr":
        return cls(rndg.randint(1, cls.field_modulus - 1))

    @classmethod
    def rands(cls, rndg: Random, n: int) -> list["Fr"]:
        return [cls(rndg.randint(1, cls.field_modulus - 1)) for _ in range(n)]

    @classmethod
    def from_bytes(cls, data: bytes) -> "Fr":
        return cls(int.from_bytes(data, "big"))

    def to_bytes(self) -> bytes:
        return self.n.to_bytes(SCALAR_SIZE, "big")

    def inv(self) -> "Fr":
        if self.n == 0:
            raise ZeroDivisionError("Fr(0) has no inverse")
        return type(self)(pow(self.n, -1, self.field_modulus))

    def __hash__(self) -> int:
        return hash(self.n)

class G1Point:
    """
    An element of the BN128 G1 group, held in projective coordinates.

    Points are immutable values; every operation returns a fresh instance.
    """

    __slots__ = ("pt",)

    def __init__(self, pt: tuple[Fp, Fp, Fp]):
        self.pt = pt

    @classmethod
    def ec_gen_group1(cls) -> "G1Point":
        return cls(bn128.G1)

    @classmethod
    def zero(cls) -> "G1Point":
        return cls(bn128.Z1)

    @classmethod
    def from_affine(cls, x: int, y: int) -> "G1Point":
        return cls((Fp(x), Fp(y), Fp.one()))

    @property
    def is_zero(self) -> bool:
        return bn128.is_inf(self.pt)

    def affine(self) -> tuple[int, int]:
        if self.is_zero:
            raise ValueError("the point at infinity has no affine coordinates")
        x, y = bn128.normalize(self.pt)
        return x.n, y.n

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, G1Point):
            return NotImplemented
        return bn128.eq(self.pt, other.pt)

    def __add__(self, other: "G1Point") -> "G1Point":
        return G1Point(bn128.add(self.pt, other.pt))

    def __sub__(self, other: "G1Point") -> "G1Point":
        return G1Point(bn128.add(self.pt, bn128.neg(other.pt)))

    def __neg__(self) -> "G1Point":
        return G1Point(bn128.neg(self.pt))

    def __str__(self) -> str:
        if self.is_zero:
            return "(inf)"
        x, y = self.affine()
        return f"({x}, {y})"

    def __repr__(self) -> str:
        return f"G1Point{self}"

    def __hash__(self) -> int:
        return hash(self.to_bytes())

    def is_on_curve(self) -> bool:
        return bn128.is_on_curve(self.pt, bn128.b)

    def is_on_subgroup(self) -> bool:
        # cofactor is 1 for BN128 G1
        return self.is_on_curve() and bn128.is_inf(bn128.multiply(self.pt, BN128_CURVE_ORDER))

    def to_bytes(self) -> bytes:
        """
        Compressed encoding: one prefix byte (0x02 | parity of y) followed by
        x as 32 big-endian bytes. The point at infinity is 33 zero bytes.
        """
        if self.is_zero:
            return bytes(POINT_SIZE)
        x, y = self.affine()
        return bytes([0x02 | (y & 1)]) + x.to_bytes(32, "big")

    @classmethod
    def from_bytes(cls, data: bytes) -> "G1Point":
        if len(data) != POINT_SIZE:
            raise ValueError(f"compressed point must be {POINT_SIZE} bytes, got {len(data)}")
        prefix = data[0]
        if prefix == 0x00:
            if any(data[1:]):
                raise ValueError("invalid encoding of the point at infinity")
            return cls.zero()
        if prefix not in (0x02, 0x03):
            raise ValueError(f"invalid point prefix: {prefix:#04x}")
        x = int.from_bytes(data[1:], "big")
        if x >= BN128_FIELD_MODULUS:
            raise ValueError("x coordinate is not a canonical field element")
        y = _sqrt_rhs(x)
        if y is None:
            raise ValueError("x coordinate is not on the curve")
        if (y & 1) != (prefix & 1):
            y = BN128_FIELD_MODULUS - y
        return cls.from_affine(x, y)

def _sqrt_rhs(x: int) -> int | None:
    """Return a square root of x^3 + 3 mod p, or None if there is none."""
    p = BN128_FIELD_MODULUS
    rhs = (pow(x, 3, p) + 3) % p
    # p = 3 mod 4
    y = pow(rhs, (p + 1) // 4, p)
    if y * y % p != rhs:
        return None
    return y

def hash_to_point(seed: bytes) -> G1Point:
    """
    Map a seed to a G1 point with unknown discrete log, by try-and-increment
    over x = keccak256(seed || counter) mod p. The even root is taken for y.
    """
    counter = 0
    while True:
        digest = keccak(seed + counter.to_bytes(4, "big"))
        x = int.from_bytes(digest, "big") % BN128_FIELD_MODULUS
        y = _sqrt_rhs(x)
        if y is not None:
            if y & 1:
                y = BN128_FIELD_MODULUS - y
            return G1Point.from_affine(x, y)
        counter += 1

def _scalar(coeff: Fr | int) -> int:
    if isinstance(coeff, FQ):
        return coeff.n % BN128_CURVE_ORDER
    return coeff % BN128_CURVE_ORDER

def ec_mul(pt: G1Point, coeff: Fr | int) -> G1Point:
    n = _scalar(coeff)
    if pt.is_zero or n == 0:
        return G1Point.zero()
    return G1Point(bn128.multiply(pt.pt, n))

def ec_lincomb(pairs: list[tuple[G1Point, Fr]]) -> G1Point:
    o = bn128.Z1
    for pt, coeff in pairs:
        n = _scalar(coeff)
        if n == 0 or pt.is_zero:
            continue
        o = bn128.add(o, bn128.multiply(pt.pt, n))
    return G1Point(o)
