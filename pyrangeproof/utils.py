#!/usr/bin/env python3

from pyrangeproof.curve import Fr

def bits_le_with_width(i: int, width: int) -> list[int]:
    if i < 0 or i >= 2**width:
        raise ValueError(f"{i} does not fit in {width} bits")
    bits = []
    while width:
        bits.append(i % 2)
        i //= 2
        width -= 1
    return bits

def is_power_of_two(n):
    return isinstance(n, int) and n > 0 and n & (n - 1) == 0

def log_2(x):
    """
    Compute the integer part of the logarithm base 2 of x.

    Args:
        x (int): The number to compute the logarithm of. Must be a positive integer.

    Returns:
        int: The floor of the logarithm base 2 of x.

    Raises:
        ValueError: If x is not a positive integer.
    """
    if not isinstance(x, int) or x <= 0:
        raise ValueError("x must be a positive integer")

    result = 0
    while x > 1:
        x >>= 1  # Bit shift right (equivalent to integer division by 2)
        result += 1
    return result

def ipa(vec_a: list[Fr], vec_b: list[Fr]) -> Fr:
    n = len(vec_a)
    assert len(vec_b) == n, f"len(vec_a) = {n}, while len(vec_b) = {len(vec_b)}"
    return sum((a * b for a, b in zip(vec_a, vec_b)), Fr(0))

def hadamard(vec_a: list[Fr], vec_b: list[Fr]) -> list[Fr]:
    assert len(vec_a) == len(vec_b), f"len(vec_a) = {len(vec_a)}, while len(vec_b) = {len(vec_b)}"
    return [a * b for a, b in zip(vec_a, vec_b)]

def vector_powers(x: Fr, n: int) -> list[Fr]:
    """(1, x, x^2, ..., x^{n-1})"""
    powers = []
    acc = Fr(1)
    for _ in range(n):
        powers.append(acc)
        acc = acc * x
    return powers
