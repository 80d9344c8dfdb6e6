"""
Copyright (c) 2020, the BiosCrypto developers
See LICENSE for details

Genesis block construction and verification.
"""

from bioscrypto import BiosError
from bioscrypto.util import helpers
from bioscrypto.util.encode import ByteArray
from bioscrypto.wire import msgtx, script
from bioscrypto.wire.msgblock import BlockHeader, MsgBlock


log = helpers.getLogger("GENESIS")

# The integer pushed after OP_0 in the genesis coinbase script.
COINBASE_SCRIPT_INT = 42


class GenesisMismatchError(BiosError):
    """
    A computed genesis value differs from the value the network hard-codes.
    """

    def __init__(self, network, field, expected, computed):
        self.network = network
        self.field = field
        self.expected = expected
        self.computed = computed
        super().__init__(
            f"{network} genesis {field} mismatch: expected {expected}, computed {computed}"
        )


class GenesisBuilder:
    """
    GenesisBuilder holds the inputs of a genesis block. The inputs are
    read-only and build() is pure, so a builder can be shared and derived from
    freely.
    """

    def __init__(self, message, txTime, blockTime, bits, nonce, version=1):
        """
        Args:
            message (str): The coinbase message.
            txTime (int): The coinbase transaction time.
            blockTime (int): The block header time.
            bits (int): The compact difficulty target.
            nonce (int): The header nonce.
            version (int): The block version.
        """
        for k, v in (
            ("message", message),
            ("txTime", txTime),
            ("blockTime", blockTime),
            ("bits", bits),
            ("nonce", nonce),
            ("version", version),
        ):
            object.__setattr__(self, k, v)

    def __setattr__(self, k, v):
        raise BiosError(f"genesis inputs are read-only, cannot set {k}")

    def __repr__(self):
        return (
            f"GenesisBuilder(txTime={self.txTime}, blockTime={self.blockTime}, "
            f"bits={self.bits:08x}, nonce={self.nonce})"
        )

    def derive(self, **overrides):
        """
        A new builder with some inputs replaced.

        Args:
            **overrides: Any of the constructor's keyword arguments.

        Returns:
            GenesisBuilder: The new builder.
        """
        kwargs = dict(
            message=self.message,
            txTime=self.txTime,
            blockTime=self.blockTime,
            bits=self.bits,
            nonce=self.nonce,
            version=self.version,
        )
        unknown = set(overrides) - set(kwargs)
        if unknown:
            raise BiosError(f"unknown genesis fields {sorted(unknown)}")
        kwargs.update(overrides)
        return GenesisBuilder(**kwargs)

    def coinbase(self):
        """
        The genesis coinbase transaction: one input spending the null outpoint
        with the script OP_0 <42> <message>, and one empty output.

        Returns:
            MsgTx: The transaction.
        """
        sigScript = script.addInt(0)
        sigScript += script.addInt(COINBASE_SCRIPT_INT)
        sigScript += script.addData(self.message.encode())

        tx = msgtx.MsgTx(version=1, time=self.txTime)
        tx.addTxIn(
            msgtx.TxIn(
                previousOutPoint=msgtx.OutPoint(txHash=None, idx=msgtx.MaxPrevOutIndex),
                signatureScript=sigScript,
            )
        )
        tx.addTxOut(msgtx.TxOut(value=0))
        return tx

    def build(self):
        """
        Build the genesis block.

        Returns:
            MsgBlock: The block.
        """
        block = MsgBlock(transactions=[self.coinbase()])
        block.header = BlockHeader(
            version=self.version,
            prevBlock=ByteArray(0, length=32),
            merkleRoot=block.buildMerkleRoot(),
            timestamp=self.blockTime,
            bits=self.bits,
            nonce=self.nonce,
        )
        return block


def verifyGenesis(network, block, expectedHash, expectedMerkleRoot):
    """
    Check the block hash and merkle root against their expected values. Both
    expected values are in display (reversed) hex.

    Args:
        network (str): The network name, for the error.
        block (MsgBlock): The genesis block.
        expectedHash (str): The expected block hash.
        expectedMerkleRoot (str): The expected merkle root.

    Raises:
        GenesisMismatchError: A value differs.
    """
    merkle = block.header.merkleRoot.rhex()
    if merkle != expectedMerkleRoot:
        raise GenesisMismatchError(network, "merkle root", expectedMerkleRoot, merkle)
    blockHash = block.id()
    if blockHash != expectedHash:
        raise GenesisMismatchError(network, "hash", expectedHash, blockHash)
    log.debug(f"{network} genesis {blockHash} verified")
