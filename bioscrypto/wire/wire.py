"""
Copyright (c) 2019, Brian Stafford
Copyright (c) 2019-2020, The Decred developers
Copyright (c) 2020, The BiosCrypto developers
See LICENSE for details

Constants and common routines for the BiosCrypto wire encoding.
"""

from bioscrypto import BiosError
from bioscrypto.util.encode import ByteArray


# fmt: off
MaxInt32  = (1 << 31) - 1
MinInt32  = -1 << 31
MaxInt64  = (1 << 63) - 1
MinInt64  = -1 << 63
MaxUint8  = (1 << 8) - 1
MaxUint16 = (1 << 16) - 1
MaxUint32 = (1 << 32) - 1
MaxUint64 = (1 << 64) - 1
# fmt: on

# SFNodeNetwork is a flag used to indicate a peer is a full node.
SFNodeNetwork = 1 << 0

# MaxVarStringLength caps the length of a decoded var-string, such as a
# peer user agent.
MaxVarStringLength = 1024 * 1024

# HashSize is the size of the double SHA-256 and Quark hashes.
HashSize = 32


def varIntSerializeSize(i):
    """
    The number of bytes writeVarInt will use for i.
    """
    # The value is small enough to be represented by itself.
    if i < 0xFD:
        return 1

    # Discriminant 1 byte plus 2 bytes for the uint16.
    if i <= MaxUint16:
        return 3

    # Discriminant 1 byte plus 4 bytes for the uint32.
    if i <= MaxUint32:
        return 5

    # Discriminant 1 byte plus 8 bytes for the uint64.
    return 9


def writeVarInt(val):
    """
    writeVarInt serializes val using a variable number of bytes depending
    on its value.

    Args:
        val (int): the value to be serialized.

    Returns:
        ByteArray: The encoded integer.
    """
    if val < 0 or val > MaxUint64:
        raise BiosError(f"writeVarInt: value {val} out of range")

    if val < 0xFD:
        return ByteArray(val, length=1)

    if val <= MaxUint16:
        b = ByteArray(0xFD)
        b += ByteArray(val, length=2).littleEndian()
        return b

    if val <= MaxUint32:
        b = ByteArray(0xFE)
        b += ByteArray(val, length=4).littleEndian()
        return b

    b = ByteArray(0xFF)
    b += ByteArray(val, length=8).littleEndian()
    return b


def readVarInt(b):
    """
    readVarInt reads a variable length integer from b and returns it as an int.
    The bytes are consumed from b.

    Args:
        b (ByteArray): the encoded integer.
    """
    data = {
        0xFF: dict(pop_bytes=8, minRv=0x100000000,),
        0xFE: dict(pop_bytes=4, minRv=0x10000,),
        0xFD: dict(pop_bytes=2, minRv=0xFD,),
    }
    discriminant = b.pop(1).int()
    if discriminant not in data:
        return discriminant
    rv = b.pop(data[discriminant]["pop_bytes"]).unLittle().int()
    # The encoding is not canonical if the value could have been
    # encoded using fewer bytes.
    minRv = data[discriminant]["minRv"]
    if rv < minRv:
        raise BiosError(
            "ReadVarInt noncanon error: {} - {} <= {}".format(rv, discriminant, minRv)
        )
    return rv


def writeVarBytes(inBytes):
    """
    writeVarBytes serializes a variable length byte array as a varInt
    containing the number of bytes, followed by the bytes themselves.
    """
    b = writeVarInt(len(inBytes))
    b += inBytes
    return b


def readVarBytes(b, maxAllowed, fieldName):
    """
    readVarBytes reads a variable length byte array from b. The length is
    checked against maxAllowed before anything else is consumed.

    Args:
        b (ByteArray): The encoded bytes.
        maxAllowed (int): Largest acceptable length.
        fieldName (str): Name used in the error message.

    Returns:
        ByteArray: The bytes.
    """
    count = readVarInt(b)
    if count > maxAllowed:
        raise BiosError(
            "{} is larger than the max allowed size [count {}, max {}]".format(
                fieldName, count, maxAllowed
            )
        )
    return b.pop(count)


def writeVarString(s):
    """
    writeVarString serializes a string as a var-string: a varInt length
    followed by the UTF-8 bytes.
    """
    return writeVarBytes(s.encode())


def readVarString(b):
    """
    readVarString reads a var-string from b.

    Returns:
        str: The decoded string.
    """
    return readVarBytes(b, MaxVarStringLength, "string").bytes().decode()
