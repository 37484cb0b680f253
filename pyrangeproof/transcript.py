import logging

from eth_utils import keccak

from pyrangeproof.curve import Fr, G1Point
from pyrangeproof.errors import DegenerateChallengeError

logger = logging.getLogger(__name__)

class Transcript:
    """
    Fiat-Shamir transcript. Messages are appended as bytes (compressed points,
    32-byte big-endian scalars) and every challenge is

        keccak256(all messages so far) mod r

    A derived challenge is appended to the transcript before it is returned,
    so the next challenge depends on it.
    """

    def __init__(self):
        self._buffer = bytearray()

    def __len__(self) -> int:
        return len(self._buffer)

    def append_point(self, pt: G1Point):
        self._buffer += pt.to_bytes()

    def append_points(self, pts: list[G1Point]):
        for pt in pts:
            self.append_point(pt)

    def append_scalar(self, s: Fr):
        self._buffer += s.to_bytes()

    def challenge_scalar(self, label: str) -> Fr:
        c = Fr(int.from_bytes(keccak(bytes(self._buffer)), "big"))
        if c == 0:
            raise DegenerateChallengeError(f"challenge {label} is zero")
        logger.debug("transcript> %s derived over %d bytes", label, len(self._buffer))
        self.append_scalar(c)
        return c
