"""
Copyright (c) 2019-2020, The Decred developers
Copyright (c) 2020, The BiosCrypto developers
See LICENSE for details

Script opcodes and the push helpers that build coinbase signature scripts.
"""

from bioscrypto.util.encode import ByteArray


# fmt: off
OP_0           = 0x00
OP_FALSE       = OP_0
OP_DATA_1      = 0x01
OP_DATA_75     = 0x4B
OP_PUSHDATA1   = 0x4C
OP_PUSHDATA2   = 0x4D
OP_PUSHDATA4   = 0x4E
OP_1NEGATE     = 0x4F
OP_1           = 0x51
OP_TRUE        = OP_1
OP_16          = 0x60
OP_RETURN      = 0x6A
# fmt: on


def scriptNumBytes(n):
    """
    Minimal script number encoding: the magnitude little-endian, with the sign
    in the top bit of the last byte. Zero is empty.

    Args:
        n (int): The number.

    Returns:
        ByteArray: The encoding.
    """
    if n == 0:
        return ByteArray()

    isNegative = n < 0
    if isNegative:
        n = -n

    result = bytearray()
    while n > 0:
        result.append(n & 0xFF)
        n = n >> 8

    # A magnitude that already uses the top bit needs an extra sign byte.
    if result[-1] & 0x80 != 0:
        result.append(0x80 if isNegative else 0x00)
    elif isNegative:
        result[-1] |= 0x80

    return ByteArray(result)


def addInt(val):
    """
    The push for an integer. -1 and 0 through 16 have their own opcodes;
    anything else is pushed as a script number.

    Args:
        val (int): The number.

    Returns:
        ByteArray: The script fragment.
    """
    if val == 0:
        return ByteArray([OP_0])
    if val == -1 or 1 <= val <= 16:
        return ByteArray([OP_1 - 1 + val])
    return addData(scriptNumBytes(val))


def addData(data):
    """
    The canonical push for data, the way the reference client pushes it.

    Args:
        data (byte-like): The bytes to push.

    Returns:
        ByteArray: The push opcode and its data.
    """
    dataLen = len(data) if data else 0

    # Single bytes 0 to 16 and 0x81 collapse to small-integer opcodes.
    if dataLen == 0 or (dataLen == 1 and data[0] == 0):
        return ByteArray([OP_0])
    if dataLen == 1 and data[0] <= 16:
        return ByteArray([OP_1 - 1 + data[0]])
    if dataLen == 1 and data[0] == 0x81:
        return ByteArray([OP_1NEGATE])

    if dataLen < OP_PUSHDATA1:
        b = ByteArray([OP_DATA_1 - 1 + dataLen])
    elif dataLen <= 0xFF:
        b = ByteArray([OP_PUSHDATA1, dataLen])
    elif dataLen <= 0xFFFF:
        b = ByteArray([OP_PUSHDATA2]) + ByteArray(dataLen, length=2).littleEndian()
    else:
        b = ByteArray([OP_PUSHDATA4]) + ByteArray(dataLen, length=4).littleEndian()
    return b + data
