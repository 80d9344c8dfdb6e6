"""
Copyright (c) 2019, Brian Stafford
Copyright (c) 2019-2020, The Decred developers
Copyright (c) 2020, The BiosCrypto developers
See LICENSE for details

Base58check addresses, WIF private keys and extended keys, versioned with a
network's prefix table.
"""

from typing import Tuple

from bioscrypto import BiosError
from bioscrypto.chaincfg import addrprefix
from bioscrypto.crypto import crypto
from bioscrypto.util.encode import ByteArray


RIPEMD160_SIZE = 20
PrivKeyBytesLen = 32
compressMagic = 0x01

# Extended key payload: depth 1 byte + parent fingerprint 4 bytes + child
# number 4 bytes + chain code 32 bytes + key data 33 bytes.
EXTENDED_KEY_PAYLOAD_SIZE = 1 + 4 + 4 + 32 + 33

ADDRESS_KINDS = (addrprefix.PUBKEY_ADDRESS, addrprefix.SCRIPT_ADDRESS)
EXTENDED_KINDS = (addrprefix.EXT_PUBLIC_KEY, addrprefix.EXT_SECRET_KEY)


def encodeAddress(hash160, kind, netParams) -> str:
    """
    Base-58 encode a pubkey hash or script hash with the network's version
    byte.

    Args:
        hash160 (byte-like): The 20-byte hash.
        kind (str): PUBKEY_ADDRESS or SCRIPT_ADDRESS.
        netParams (ChainParams): The network parameters.

    Returns:
        str: The encoded address.
    """
    if kind not in ADDRESS_KINDS:
        raise BiosError(f"{kind} is not an address kind")
    hash160 = ByteArray(hash160)
    if len(hash160) != RIPEMD160_SIZE:
        raise BiosError(
            f"address hash must be {RIPEMD160_SIZE} bytes, got {len(hash160)}"
        )
    return crypto.b58CheckEncode(netParams.base58Prefixes[kind], hash160)


def decodeAddress(addr: str, netParams) -> Tuple[str, ByteArray]:
    """
    Decode a base-58 address for the provided network.

    Args:
        addr (str): Base-58 encoded address.
        netParams (ChainParams): The network parameters.

    Returns:
        str: The address kind.
        ByteArray: The 20-byte hash.
    """
    hash160, netID = crypto.b58CheckDecode(addr)
    if len(hash160) != RIPEMD160_SIZE:
        raise BiosError(f"decoded address is of unknown size {len(hash160)}")
    kind = netParams.base58Prefixes.kindOf(netID)
    if kind not in ADDRESS_KINDS:
        raise BiosError(
            f"address version {netID.hex()} is not a {netParams.name} address"
        )
    return kind, hash160


def isForNet(addr: str, netParams) -> bool:
    """
    Whether the address decodes under the network's prefixes.
    """
    try:
        decodeAddress(addr, netParams)
    except BiosError:
        return False
    return True


def encodeWIF(privKey, compressPubKey, netParams) -> str:
    """
    Encode a private key in wallet import format.

    Args:
        privKey (byte-like): The 32-byte private key.
        compressPubKey (bool): Whether the corresponding public key is
            serialized compressed.
        netParams (ChainParams): The network parameters.

    Returns:
        str: The encoded key.
    """
    a = ByteArray(privKey, length=PrivKeyBytesLen)
    if compressPubKey:
        a += compressMagic
    return crypto.b58CheckEncode(netParams.base58Prefixes[addrprefix.SECRET_KEY], a)


def decodeWIF(wif: str, netParams) -> Tuple[ByteArray, bool]:
    """
    Decode a wallet import format private key for the provided network.

    Args:
        wif (str): The encoded key.
        netParams (ChainParams): The network parameters.

    Returns:
        ByteArray: The 32-byte private key.
        bool: Whether the public key is compressed.
    """
    payload, netID = crypto.b58CheckDecode(wif)
    if netID != netParams.base58Prefixes[addrprefix.SECRET_KEY]:
        raise BiosError(f"key version {netID.hex()} is not a {netParams.name} key")

    # The key is 32 bytes, with an optional trailing 0x01 if compressed.
    compress = False
    if len(payload) == PrivKeyBytesLen + 1:
        if payload[PrivKeyBytesLen] != compressMagic:
            raise BiosError("malformed 33-byte private key")
        compress = True
    elif len(payload) != PrivKeyBytesLen:
        raise BiosError("malformed private key")
    return payload[:PrivKeyBytesLen], compress


def encodeExtendedKey(payload, kind, netParams) -> str:
    """
    Encode a serialized extended key with the network's 4-byte version.

    Args:
        payload (byte-like): The 74 bytes following the version.
        kind (str): EXT_PUBLIC_KEY or EXT_SECRET_KEY.
        netParams (ChainParams): The network parameters.

    Returns:
        str: The encoded key.
    """
    if kind not in EXTENDED_KINDS:
        raise BiosError(f"{kind} is not an extended key kind")
    payload = ByteArray(payload)
    if len(payload) != EXTENDED_KEY_PAYLOAD_SIZE:
        raise BiosError(
            f"extended key payload must be {EXTENDED_KEY_PAYLOAD_SIZE} bytes, got {len(payload)}"
        )
    return crypto.b58CheckEncode(netParams.base58Prefixes[kind], payload)


def decodeExtendedKey(key: str, netParams) -> Tuple[str, ByteArray]:
    """
    Decode an extended key for the provided network.

    Args:
        key (str): The encoded key.
        netParams (ChainParams): The network parameters.

    Returns:
        str: The kind, EXT_PUBLIC_KEY or EXT_SECRET_KEY.
        ByteArray: The 74 bytes following the version.
    """
    payload, version = crypto.b58CheckDecode(key, versionLen=4)
    if len(payload) != EXTENDED_KEY_PAYLOAD_SIZE:
        raise BiosError(f"extended key is of unknown size {len(payload)}")
    kind = netParams.base58Prefixes.kindOf(version)
    if kind not in EXTENDED_KINDS:
        raise BiosError(
            f"extended key version {version.hex()} is not a {netParams.name} key"
        )
    return kind, payload
