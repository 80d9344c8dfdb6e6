"""
Copyright (c) 2020, The Decred developers
Copyright (c) 2020, The BiosCrypto developers
See LICENSE for details

BiosCrypto transactions. The layout is the Bitcoin one with the addition
carried by the proof-of-stake chain: a 4-byte transaction time after the
version.
"""

from typing import List, Optional, Union

from bioscrypto import BiosError
from bioscrypto.crypto import crypto
from bioscrypto.util.encode import ByteArray
from bioscrypto.wire import wire

TxVersion = 1

# A final input. Also the coinbase input's sequence.
MaxTxInSequenceNum = 0xFFFFFFFF

# The index of the null outpoint.
MaxPrevOutIndex = 0xFFFFFFFF

# Bound on decoded signature and public key scripts.
MaxScriptSize = 10000

# Smallest possible input: outpoint hash and index, a 1-byte script length
# and the sequence.
minTxInPayload = 9 + wire.HashSize

# Smallest possible output: value and a 1-byte script length.
minTxOutPayload = 9

# MaxBlockPayload bounds the input and output counts of a decoded transaction.
MaxBlockPayload = 1000000

maxTxInPerMessage = (MaxBlockPayload // minTxInPayload) + 1
maxTxOutPerMessage = (MaxBlockPayload // minTxOutPayload) + 1


class OutPoint:
    """
    OutPoint defines a data type that is used to track previous transaction
    outputs.
    """

    def __init__(self, txHash: Optional[ByteArray], idx: int):
        self.hash = (
            ByteArray(txHash) if txHash else ByteArray(0, length=wire.HashSize)
        )
        self.index = idx

    def __eq__(self, other: "OutPoint") -> bool:
        return self.hash == other.hash and self.index == other.index

    def isNull(self) -> bool:
        """
        A null outpoint has a zero hash and the maximum index. Coinbase inputs
        spend the null outpoint.
        """
        return self.hash.iszero() and self.index == MaxPrevOutIndex

    def txid(self) -> str:
        return reversed(self.hash).hex()


class TxIn:
    """
    TxIn defines a transaction input.
    """

    def __init__(
        self,
        previousOutPoint: OutPoint,
        signatureScript: Optional[ByteArray] = None,
        sequence: int = MaxTxInSequenceNum,
    ):
        self.previousOutPoint = previousOutPoint
        self.signatureScript = ByteArray(signatureScript or b"")
        self.sequence = sequence

    def __eq__(self, ti: "TxIn") -> bool:
        return (
            self.previousOutPoint == ti.previousOutPoint
            and self.signatureScript == ti.signatureScript
            and self.sequence == ti.sequence
        )

    def serializeSize(self) -> int:
        """
        The encoded size: outpoint 36 bytes, sequence 4 bytes and the
        length-prefixed signature script.
        """
        return (
            40
            + wire.varIntSerializeSize(len(self.signatureScript))
            + len(self.signatureScript)
        )


class TxOut:
    """
    TxOut defines a transaction output.
    """

    def __init__(self, value: int = 0, pkScript: Optional[ByteArray] = None):
        self.value = value
        self.pkScript = ByteArray(pkScript or b"")

    def __eq__(self, to: "TxOut") -> bool:
        return self.value == to.value and self.pkScript == to.pkScript

    def serializeSize(self) -> int:
        return 8 + wire.varIntSerializeSize(len(self.pkScript)) + len(self.pkScript)


class MsgTx:
    """
    MsgTx is a proof-of-stake transaction: version, time, inputs, outputs
    and lock time.

    Inputs and outputs are appended with addTxIn and addTxOut.
    """

    def __init__(
        self,
        version: int = TxVersion,
        time: int = 0,
        txIn: Optional[List[TxIn]] = None,
        txOut: Optional[List[TxOut]] = None,
        lockTime: int = 0,
    ):
        self.version = version
        self.time = time
        self.txIn = txIn or []
        self.txOut = txOut or []
        self.lockTime = lockTime

    def __eq__(self, tx):
        return (
            self.version == tx.version
            and self.time == tx.time
            and len(self.txIn) == len(tx.txIn)
            and all((a == b for a, b in zip(self.txIn, tx.txIn)))
            and len(self.txOut) == len(tx.txOut)
            and all((a == b for a, b in zip(self.txOut, tx.txOut)))
            and self.lockTime == tx.lockTime
        )

    def addTxIn(self, ti: TxIn):
        self.txIn.append(ti)

    def addTxOut(self, to: TxOut):
        self.txOut.append(to)

    def isCoinBase(self) -> bool:
        """
        A coinbase transaction has exactly one input, and that input spends the
        null outpoint.
        """
        return len(self.txIn) == 1 and self.txIn[0].previousOutPoint.isNull()

    def hash(self) -> ByteArray:
        """The double SHA-256 of the serialized transaction."""
        return crypto.sha256d(self.serialize())

    def txid(self) -> str:
        """The transaction hash in display order."""
        return self.hash().rhex()

    def serializeSize(self) -> int:
        # Version 4 bytes + Time 4 bytes + LockTime 4 bytes + Serialized varint
        # sizes for the number of inputs and outputs.
        n = (
            12
            + wire.varIntSerializeSize(len(self.txIn))
            + wire.varIntSerializeSize(len(self.txOut))
        )
        for ti in self.txIn:
            n += ti.serializeSize()
        for to in self.txOut:
            n += to.serializeSize()
        return n

    def serialize(self) -> ByteArray:
        """
        serialize encodes the transaction for hashing and storage.
        """
        b = ByteArray(self.version, length=4).littleEndian()
        b += ByteArray(self.time, length=4).littleEndian()

        b += wire.writeVarInt(len(self.txIn))
        for ti in self.txIn:
            b += writeTxIn(ti)

        b += wire.writeVarInt(len(self.txOut))
        for to in self.txOut:
            b += writeTxOut(to)

        b += ByteArray(self.lockTime, length=4).littleEndian()
        return b

    @staticmethod
    def decode(b: ByteArray) -> "MsgTx":
        """
        Decode a transaction from the front of b, consuming its bytes.
        """
        tx = MsgTx(
            version=b.pop(4).unLittle().int(), time=b.pop(4).unLittle().int(),
        )

        count = wire.readVarInt(b)
        # No more inputs than could fit in a block.
        if count > maxTxInPerMessage:
            raise BiosError(
                f"MsgTx.decode: too many input transactions [count {count}, max {maxTxInPerMessage}]"
            )
        for _ in range(count):
            tx.addTxIn(readTxIn(b))

        count = wire.readVarInt(b)
        if count > maxTxOutPerMessage:
            raise BiosError(
                f"MsgTx.decode: too many output transactions [count {count}, max {maxTxOutPerMessage}]"
            )
        for _ in range(count):
            tx.addTxOut(readTxOut(b))

        tx.lockTime = b.pop(4).unLittle().int()
        return tx

    @staticmethod
    def deserialize(b: Union[ByteArray, bytes, str]) -> "MsgTx":
        """
        Decode a serialized transaction. The input is not modified. Trailing
        bytes are an error.
        """
        b = ByteArray(b)
        tx = MsgTx.decode(b)
        if len(b) != 0:
            raise BiosError(f"MsgTx.deserialize: {len(b)} trailing bytes")
        return tx


def readOutPoint(b: ByteArray) -> OutPoint:
    """
    Consume a 36-byte outpoint from the front of b.
    """
    return OutPoint(txHash=b.pop(wire.HashSize), idx=b.pop(4).unLittle().int())


def writeOutPoint(op: OutPoint) -> ByteArray:
    """
    Encode an outpoint: hash, then the little-endian index.
    """
    return op.hash + ByteArray(op.index, length=4).littleEndian()


def readTxIn(b: ByteArray) -> TxIn:
    """
    Consume a transaction input from the front of b.
    """
    return TxIn(
        previousOutPoint=readOutPoint(b),
        signatureScript=wire.readVarBytes(
            b, MaxScriptSize, "transaction input signature script"
        ),
        sequence=b.pop(4).unLittle().int(),
    )


def writeTxIn(ti: TxIn) -> ByteArray:
    """
    writeTxIn encodes a transaction input (TxIn).
    """
    b = writeOutPoint(ti.previousOutPoint)
    b += wire.writeVarBytes(ti.signatureScript)
    return b + ByteArray(ti.sequence, length=4).littleEndian()


def readTxOut(b: ByteArray) -> TxOut:
    """
    Consume a transaction output from the front of b.
    """
    return TxOut(
        value=b.pop(8).unLittle().int(),
        pkScript=wire.readVarBytes(
            b, MaxScriptSize, "transaction output public key script"
        ),
    )


def writeTxOut(to: TxOut) -> ByteArray:
    """
    writeTxOut encodes a transaction output (TxOut).
    """
    b = ByteArray(to.value, length=8).littleEndian()
    return b + wire.writeVarBytes(to.pkScript)
