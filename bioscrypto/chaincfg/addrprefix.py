"""
Copyright (c) 2020, the BiosCrypto developers
See LICENSE for details

Base58 version prefixes. Each network carries one table that maps every
address kind to the bytes prepended before base58check encoding.
"""

from collections.abc import Mapping
import types

from bioscrypto import BiosError


# fmt: off
PUBKEY_ADDRESS = "PUBKEY_ADDRESS"
SCRIPT_ADDRESS = "SCRIPT_ADDRESS"
SECRET_KEY     = "SECRET_KEY"
EXT_PUBLIC_KEY = "EXT_PUBLIC_KEY"
EXT_SECRET_KEY = "EXT_SECRET_KEY"
# fmt: on

# Prefix length in bytes for each kind.
KIND_LENGTHS = {
    PUBKEY_ADDRESS: 1,
    SCRIPT_ADDRESS: 1,
    SECRET_KEY: 1,
    EXT_PUBLIC_KEY: 4,
    EXT_SECRET_KEY: 4,
}

KINDS = tuple(KIND_LENGTHS)


class PrefixCollisionError(BiosError):
    """
    Two kinds in one table share a prefix, so a decoder could not tell them
    apart.
    """

    pass


def _prefixBytes(kind, v):
    length = KIND_LENGTHS[kind]
    if isinstance(v, int):
        if v < 0 or v.bit_length() > length * 8:
            raise BiosError(f"{kind} prefix {v:#x} does not fit in {length} bytes")
        return v.to_bytes(length, byteorder="big")
    b = bytes(v)
    if len(b) != length:
        raise BiosError(f"{kind} prefix must be {length} bytes, got {len(b)}")
    return b


class AddressPrefixes(Mapping):
    """
    AddressPrefixes is an immutable kind -> prefix mapping. Integer values are
    converted to big-endian bytes of the kind's length.
    """

    def __init__(self, prefixes):
        """
        Args:
            prefixes (dict): A prefix for every kind in KINDS. Values are ints
                or bytes-like.
        """
        unknown = set(prefixes) - set(KINDS)
        if unknown:
            raise BiosError(f"unknown address kinds {sorted(unknown)}")
        missing = [k for k in KINDS if k not in prefixes]
        if missing:
            raise BiosError(f"missing address kinds {missing}")

        table = {}
        seen = {}
        for kind in KINDS:
            b = _prefixBytes(kind, prefixes[kind])
            if b in seen:
                raise PrefixCollisionError(
                    f"{kind} and {seen[b]} share prefix {b.hex()}"
                )
            seen[b] = kind
            table[kind] = b
        self._table = types.MappingProxyType(table)

    def __getitem__(self, kind):
        return self._table[kind]

    def __iter__(self):
        return iter(self._table)

    def __len__(self):
        return len(self._table)

    def __repr__(self):
        inner = ", ".join(f"{k}={v.hex()}" for k, v in self._table.items())
        return f"AddressPrefixes({inner})"

    def __hash__(self):
        return hash(tuple(self._table.items()))

    def kindOf(self, prefix):
        """
        The kind a prefix belongs to, or None.

        Args:
            prefix (bytes-like): The version bytes.

        Returns:
            str: The kind.
        """
        prefix = bytes(prefix)
        for kind, b in self._table.items():
            if b == prefix:
                return kind
        return None
