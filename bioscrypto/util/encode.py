"""
Copyright (c) 2020, Brian Stafford
Copyright (c) 2020, the Decred developers
Copyright (c) 2020, the BiosCrypto developers
See LICENSE for details

ByteArray wraps a bytearray and adds the handful of operators the wire and
chain parameter code needs: zero-padded construction, concatenation,
endianness flips and consuming reads.
"""

from bioscrypto import BiosError


def intToBytes(i):
    """
    Shortest big-endian bytes for a non-negative int. Zero gives no bytes.
    """
    return bytearray(i.to_bytes((i.bit_length() + 7) // 8, byteorder="big"))


def intFromBytes(b):
    """
    Big-endian bytes to an unsigned int.
    """
    return int.from_bytes(b, "big")


def decodeBA(b, copy=False):
    """
    Coerce a value to a bytearray.

    Args:
        b (str, bytes-like, ByteArray, int, list(int)): Strings are hex. An int
            is written big-endian in as few bytes as possible, with 0 taking
            one byte.
        copy (bool): For bytearray and ByteArray input, return a new buffer
            rather than the same one.

    Returns:
        bytearray: The bytes.
    """
    if isinstance(b, ByteArray):
        return bytearray(b.b) if copy else b.b
    if isinstance(b, bytearray):
        return bytearray(b) if copy else b
    if isinstance(b, bytes):
        return bytearray(b)
    if isinstance(b, int):
        return intToBytes(b) if b else bytearray([0])
    if isinstance(b, str):
        return bytearray.fromhex(b)
    if hasattr(b, "__iter__"):
        return bytearray(b)
    raise TypeError("decodeBA: unknown type %s" % type(b))


class ByteArray:
    """
    A bytearray with hex, int and list coercion on every operand. Unlike
    bytearray(n), ByteArray(n) holds the integer n itself. Pass length to
    left-pad with zeros to a fixed width.
    """

    def __init__(self, b=b"", copy=True, length=None):
        if length:
            src = decodeBA(b)
            if len(src) > length:
                raise BiosError(f"value of {len(src)} bytes overflows length {length}")
            self.b = bytearray(length - len(src)) + src
        else:
            self.b = decodeBA(b, copy=copy)

    def __eq__(self, a):
        try:
            return self.b == decodeBA(a)
        except (TypeError, ValueError):
            return False

    def __ne__(self, a):
        return not self.__eq__(a)

    def __lt__(self, a):
        return self.b < decodeBA(a)

    def __gt__(self, a):
        return self.b > decodeBA(a)

    def __repr__(self):
        return f"ByteArray({self.hex()})"

    def __len__(self):
        return len(self.b)

    def __add__(self, a):
        return ByteArray(self.b + decodeBA(a))

    # b += x rebinds b to a new ByteArray. Other references keep the old bytes.
    __iadd__ = __add__

    def __getitem__(self, k):
        if isinstance(k, slice):
            return ByteArray(self.b[k], copy=False)
        return self.b[k]

    def __reversed__(self):
        return ByteArray(self.b[::-1], copy=False)

    def __hash__(self):
        return hash(bytes(self.b))

    def hex(self):
        return self.b.hex()

    def rhex(self):
        """
        Hex of the reversed bytes. Block and transaction hashes are shown this
        way.
        """
        return self.b[::-1].hex()

    def iszero(self):
        return not any(self.b)

    def int(self):
        """The bytes read as a big-endian unsigned int."""
        return intFromBytes(self.b)

    def bytes(self):
        return bytes(self.b)

    def littleEndian(self):
        """
        A reversed copy. Apply to a big-endian ByteArray(n, length=k) to get
        the little-endian wire form of n.
        """
        return reversed(self)

    # Reading a little-endian field is the same flip.
    unLittle = littleEndian

    def copy(self):
        return ByteArray(self.b)

    def pop(self, n):
        """
        Split off and return the first n bytes. Raises BiosError, leaving the
        ByteArray untouched, if fewer than n remain.
        """
        if n > len(self.b):
            raise BiosError(f"pop: want {n} bytes, have {len(self.b)}")
        head, self.b = self.b[:n], self.b[n:]
        return ByteArray(head, copy=False)


def rba(*a, **k):
    """
    ByteArray(*a, **k), reversed. Loads a hash from its display hex.
    """
    return reversed(ByteArray(*a, **k))
