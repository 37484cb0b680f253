"""Range proof value and its wire encoding."""

from dataclasses import dataclass

from pyrangeproof.curve import BN128_CURVE_ORDER, POINT_SIZE, SCALAR_SIZE, Fr, G1Point
from pyrangeproof.errors import MalformedProofError
from pyrangeproof.params import N_BITS
from pyrangeproof.utils import is_power_of_two, log_2


@dataclass(frozen=True)
class Proof:
    """
    An aggregated range proof for M values.

    Attributes:
        V: Pedersen commitments V[j] = masks[j] * G + v[j] * H, one per value
        A: vector commitment to aL, aR with blinding alpha
        S: vector commitment to sL, sR with blinding rho
        T1, T2: commitments to the coefficients t1, t2 of t(X)
        taux: blinding of t(x), tau1*x + tau2*x^2 + sum_j z^(j+2)*masks[j]
        mu: blinding of A + x*S, alpha + rho*x
        t: t(x) = <l(x), r(x)>
        L, R: the log2(M*N) round commitments of the inner product argument
        a, b: the final scalars of the inner product argument
    """
    V: tuple[G1Point, ...]
    A: G1Point
    S: G1Point
    T1: G1Point
    T2: G1Point
    taux: Fr
    mu: Fr
    t: Fr
    L: tuple[G1Point, ...]
    R: tuple[G1Point, ...]
    a: Fr
    b: Fr

    @property
    def m(self) -> int:
        return len(self.V)

    def points(self) -> list[G1Point]:
        return [*self.V, self.A, self.S, self.T1, self.T2, *self.L, *self.R]

    def scalars(self) -> list[Fr]:
        return [self.taux, self.mu, self.t, self.a, self.b]

    def to_bytes(self) -> bytes:
        out = bytearray()
        for pt in (*self.V, self.A, self.S, self.T1, self.T2):
            out += pt.to_bytes()
        for s in (self.taux, self.mu, self.t):
            out += s.to_bytes()
        for pt in (*self.L, *self.R):
            out += pt.to_bytes()
        out += self.a.to_bytes()
        out += self.b.to_bytes()
        return bytes(out)

    @staticmethod
    def size(m: int, n_bits: int = N_BITS) -> int:
        """Serialized length in bytes of a proof for M values of n_bits bits."""
        rounds = log_2(m * n_bits)
        return (m + 4 + 2 * rounds) * POINT_SIZE + 5 * SCALAR_SIZE

    @classmethod
    def from_bytes(cls, data: bytes, m: int, n_bits: int = N_BITS) -> "Proof":
        """
        Decode a proof of M aggregated values. M and N are not part of the
        encoding and must come from the context.

        Raises:
            MalformedProofError: on a length mismatch, a non-canonical scalar
                or a point that does not decode to the curve
        """
        if m < 1 or not is_power_of_two(m * n_bits):
            raise MalformedProofError(f"M*N = {m}*{n_bits} is not a power of two")
        expected = cls.size(m, n_bits)
        if len(data) != expected:
            raise MalformedProofError(f"proof must be {expected} bytes for M={m}, got {len(data)}")
        rounds = log_2(m * n_bits)
        reader = _Reader(data)
        V = tuple(reader.point() for _ in range(m))
        A, S, T1, T2 = (reader.point() for _ in range(4))
        taux, mu, t = (reader.scalar() for _ in range(3))
        L = tuple(reader.point() for _ in range(rounds))
        R = tuple(reader.point() for _ in range(rounds))
        a, b = reader.scalar(), reader.scalar()
        return cls(V, A, S, T1, T2, taux, mu, t, L, R, a, b)


class _Reader:
    def __init__(self, data: bytes):
        self.data = data
        self.offset = 0

    def take(self, n: int) -> bytes:
        chunk = self.data[self.offset:self.offset + n]
        self.offset += n
        return chunk

    def point(self) -> G1Point:
        chunk = self.take(POINT_SIZE)
        try:
            return G1Point.from_bytes(chunk)
        except ValueError as e:
            raise MalformedProofError(f"bad point at offset {self.offset - POINT_SIZE}: {e}") from e

    def scalar(self) -> Fr:
        n = int.from_bytes(self.take(SCALAR_SIZE), "big")
        if n >= BN128_CURVE_ORDER:
            raise MalformedProofError(f"non-canonical scalar at offset {self.offset - SCALAR_SIZE}")
        return Fr(n)
