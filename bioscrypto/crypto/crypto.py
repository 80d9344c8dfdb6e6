"""
Copyright (c) 2019, Brian Stafford
Copyright (c) 2019-2020, The Decred developers
Copyright (c) 2020, The BiosCrypto developers
See LICENSE for details

Cryptographic functions.
"""

import hashlib

from algomodule.quark import _quark_hash
from base58 import b58decode, b58encode

from bioscrypto import BiosError
from bioscrypto.util.encode import ByteArray


HASH_SIZE = 32
CHECKSUM_SIZE = 4


def sha256d(b):
    """
    The double SHA-256 hash. Transaction hashes and merkle tree nodes use it.

    Args:
        b (byte-like): The bytes to hash.

    Returns:
        ByteArray: The 32-byte hash, in internal byte order.
    """
    if isinstance(b, ByteArray):
        b = b.bytes()
    return ByteArray(hashlib.sha256(hashlib.sha256(b).digest()).digest())


def quarkHash(b):
    """
    The Quark hash used for block header proof-of-work and block identity.

    Args:
        b (byte-like): The serialized block header.

    Returns:
        ByteArray: The 32-byte hash, in internal byte order.
    """
    if isinstance(b, ByteArray):
        b = b.bytes()
    return ByteArray(_quark_hash(bytes(b)), length=HASH_SIZE)


def checksum(b):
    """
    A checksum.

    Args:
        b (byte-like): Bytes to obtain a checksum for.

    Returns:
        bytes: A 4-byte checksum.
    """
    return sha256d(b).bytes()[:CHECKSUM_SIZE]


def b58CheckEncode(version, payload):
    """
    Base-58 encode the version bytes and payload, with a trailing checksum.

    Args:
        version (byte-like): The network prefix, 1 or 4 bytes.
        payload (byte-like): The data to encode.

    Returns:
        str: The encoded string.
    """
    b = ByteArray(version) + payload
    b += checksum(b.b)
    return b58encode(b.bytes()).decode()


def b58CheckDecode(s, versionLen=1):
    """
    Decode a base-58 string, splitting off the version bytes. An exception is
    raised if the checksum is invalid or missing.

    Args:
        s (str): The base-58 encoded string.
        versionLen (int): Length of the leading version prefix.

    Returns:
        ByteArray: Decoded bytes minus the leading version and trailing
            checksum.
        bytes: The version bytes.
    """
    try:
        decoded = b58decode(s)
    except ValueError as e:
        raise BiosError(f"invalid base-58 string: {e}")
    if len(decoded) < versionLen + CHECKSUM_SIZE:
        raise BiosError("decoded lacking version/checksum")
    version = decoded[:versionLen]
    includedCksum = decoded[len(decoded) - CHECKSUM_SIZE :]
    computedCksum = checksum(decoded[: len(decoded) - CHECKSUM_SIZE])
    if includedCksum != computedCksum:
        raise BiosError("checksum error")
    payload = ByteArray(decoded[versionLen : len(decoded) - CHECKSUM_SIZE])
    return payload, version
