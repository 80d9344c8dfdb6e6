"""
Copyright (c) 2020, the BiosCrypto developers
See LICENSE for details

Difficulty targets and their compact representation.
"""

from bioscrypto import BiosError
from bioscrypto.util import helpers


log = helpers.getLogger("DIFFICULTY")

# MaxUint256 is ~uint256(0).
MaxUint256 = (1 << 256) - 1


def limitFromShift(n):
    """
    The difficulty ceiling ~uint256(0) >> n.

    Args:
        n (int): The shift, 0 to 256.

    Returns:
        int: The limit.
    """
    if n < 0 or n > 256:
        raise BiosError(f"limit shift {n} out of range")
    return MaxUint256 >> n


def compactToBig(compact):
    """
    Convert a compact representation of a whole number N to an unbounded
    integer. The representation is similar to IEEE754 floating point numbers:
    the most significant 8 bits are the base 256 exponent, bit 23 is the sign
    and the low 23 bits are the mantissa.

        N = (-1^sign) * mantissa * 256^(exponent-3)

    Args:
        compact (int): The 32-bit compact number.

    Returns:
        int: The expanded number.
    """
    mantissa = compact & 0x007FFFFF
    isNegative = compact & 0x00800000 != 0
    exponent = compact >> 24

    if exponent <= 3:
        n = mantissa >> (8 * (3 - exponent))
    else:
        n = mantissa << (8 * (exponent - 3))

    return -n if isNegative else n


def bigToCompact(n):
    """
    Convert a whole number N to its compact representation. Precision is lost
    past the three most significant bytes. See compactToBig.

    Args:
        n (int): The number.

    Returns:
        int: The 32-bit compact number.
    """
    if n == 0:
        return 0

    isNegative = n < 0
    if isNegative:
        n = -n

    exponent = (n.bit_length() + 7) // 8
    if exponent <= 3:
        mantissa = n << (8 * (3 - exponent))
    else:
        mantissa = n >> (8 * (exponent - 3))

    # When the mantissa already has the sign bit set, the number is too large
    # to fit into the available 23 bits, so divide it by 256 and increment the
    # exponent accordingly.
    if mantissa & 0x00800000:
        mantissa >>= 8
        exponent += 1

    compact = (exponent << 24) | mantissa
    if isNegative:
        compact |= 0x00800000
    return compact


def checkProofOfWork(blockHash, bits, powLimit):
    """
    Whether a block hash satisfies the target encoded by bits. A target that
    is negative, zero, overflows or exceeds powLimit is rejected outright.

    Args:
        blockHash (ByteArray): The block hash, in internal byte order.
        bits (int): The compact target.
        powLimit (int): The network's proof-of-work ceiling.

    Returns:
        bool: True if the hash meets the target.
    """
    target = compactToBig(bits)
    if target <= 0 or target > MaxUint256 or target > powLimit:
        log.debug(f"compact target {bits:08x} out of range")
        return False
    return reversed(blockHash).int() <= target
