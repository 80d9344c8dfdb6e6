"""
Copyright (c) 2019, Brian Stafford
Copyright (c) 2019-2020, The Decred developers
Copyright (c) 2020, The BiosCrypto developers
See LICENSE for details

Block headers and blocks. Header hashes are Quark hashes of the 80-byte
header. Transaction hashes and merkle nodes are double SHA-256.
"""

from bioscrypto import BiosError
from bioscrypto.crypto import crypto
from bioscrypto.util.encode import ByteArray
from bioscrypto.wire import wire
from bioscrypto.wire.msgtx import MsgTx


# MaxHeaderSize is the size of a serialized block header.
MaxHeaderSize = 80

# MaxBlockSignatureSize bounds the proof-of-stake block signature.
MaxBlockSignatureSize = 80


class BlockHeader:
    """
    BlockHeader defines information about a block and is used in the
    block (MsgBlock) message.
    """

    def __init__(
        self,
        version=1,
        prevBlock=None,
        merkleRoot=None,
        timestamp=0,
        bits=0,
        nonce=0,
    ):
        # version of the block.  This is not the same as the protocol version.
        self.version = version  # int32

        # hash of the previous block in the block chain.
        self.prevBlock = ByteArray(prevBlock or 0, length=wire.HashSize)

        # merkle tree reference to hash of all transactions for the block.
        self.merkleRoot = ByteArray(merkleRoot or 0, length=wire.HashSize)

        # time the block was created, in seconds since the epoch.
        self.timestamp = timestamp  # uint32

        # difficulty target for the block, in compact form.
        self.bits = bits  # uint32

        # nonce used to generate the block.
        self.nonce = nonce  # uint32

    def __eq__(self, bh):
        return self.serialize() == bh.serialize()

    @staticmethod
    def deserialize(b):
        """
        Args:
            b (byte-like): the bytes to deserialize. A ByteArray has the header
                bytes consumed from it.
        """
        if not isinstance(b, ByteArray):
            b = ByteArray(b)
        if len(b) < MaxHeaderSize:
            raise BiosError(
                f"BlockHeader.deserialize: need {MaxHeaderSize} bytes, have {len(b)}"
            )
        bh = BlockHeader()
        bh.version = b.pop(4).unLittle().int()
        bh.prevBlock = b.pop(wire.HashSize)
        bh.merkleRoot = b.pop(wire.HashSize)
        bh.timestamp = b.pop(4).unLittle().int()
        bh.bits = b.pop(4).unLittle().int()
        bh.nonce = b.pop(4).unLittle().int()
        return bh

    def serialize(self):
        """
        Serialize the BlockHeader.

        Returns:
            ByteArray: The 80-byte serialized BlockHeader.
        """
        b = ByteArray(self.version, length=4).littleEndian()
        b += ByteArray(self.prevBlock, length=wire.HashSize)
        b += ByteArray(self.merkleRoot, length=wire.HashSize)
        b += ByteArray(self.timestamp, length=4).littleEndian()
        b += ByteArray(self.bits, length=4).littleEndian()
        b += ByteArray(self.nonce, length=4).littleEndian()
        return b

    def hash(self):
        """
        hash computes the block identifier hash for the given block header.
        """
        return crypto.quarkHash(self.serialize())

    def id(self):
        return reversed(self.hash()).hex()


class MsgBlock:
    """
    MsgBlock is a block: a header, its transactions and the proof-of-stake
    block signature, which is empty for proof-of-work blocks.
    """

    def __init__(self, header=None, transactions=None, signature=None):
        self.header = header if header else BlockHeader()
        self.transactions = transactions or []
        self.signature = ByteArray(signature or b"")

    def __eq__(self, other):
        return self.serialize() == other.serialize()

    def addTransaction(self, tx):
        self.transactions.append(tx)

    def buildMerkleRoot(self):
        """
        The merkle root of the block's transactions.

        Returns:
            ByteArray: The root, in internal byte order.
        """
        return merkleRoot([tx.hash() for tx in self.transactions])

    def hash(self):
        return self.header.hash()

    def id(self):
        return self.header.id()

    def serialize(self):
        b = self.header.serialize()
        b += wire.writeVarInt(len(self.transactions))
        for tx in self.transactions:
            b += tx.serialize()
        b += wire.writeVarBytes(self.signature)
        return b

    @staticmethod
    def deserialize(b):
        b = ByteArray(b)
        block = MsgBlock(header=BlockHeader.deserialize(b))
        count = wire.readVarInt(b)
        for _ in range(count):
            block.addTransaction(MsgTx.decode(b))
        block.signature = wire.readVarBytes(
            b, MaxBlockSignatureSize, "block signature"
        )
        return block


def merkleRoot(hashes):
    """
    Compute the merkle root of a list of hashes. Each level pairs adjacent
    nodes, duplicating the last node when the level has an odd count, and
    hashes each pair with double SHA-256.

    Args:
        hashes (list(ByteArray)): Leaf hashes, in internal byte order.

    Returns:
        ByteArray: The root. A zero hash for an empty list.
    """
    if len(hashes) == 0:
        return ByteArray(0, length=wire.HashSize)
    level = [ByteArray(h) for h in hashes]
    while len(level) > 1:
        if len(level) % 2 == 1:
            level.append(level[-1])
        level = [
            crypto.sha256d(level[i] + level[i + 1]) for i in range(0, len(level), 2)
        ]
    return level[0]
