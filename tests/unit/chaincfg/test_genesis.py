"""
Copyright (c) 2020, the BiosCrypto developers
See LICENSE for details
"""

import pytest

from bioscrypto import BiosError
from bioscrypto.chaincfg import genesis
from bioscrypto.chaincfg import netparams
from bioscrypto.chaincfg.genesis import GenesisMismatchError
from bioscrypto.wire import msgtx


MAIN_GENESIS_HASH = "000001815b44ae9b4b5a9f22ef95d5badc10e3b38503aee9b7e84f5ce2bf8efa"
TEST_GENESIS_HASH = "0000cef54c3c42240e2a4859db2020ac2afc2017832058d3599ba972db05cb77"
REG_GENESIS_HASH = "2fec6cc4a488fdcd250657555c69634070989874de455aa0ceeebc2494a49860"
MERKLE_ROOT = "90ac10dbdb97f5be41866194f4bc5f63a72ff47f13ba75513eaf77dfa8d6aeb3"


def test_builders():
    tests = [
        dict(
            builder=netparams.MainGenesis,
            hash=MAIN_GENESIS_HASH,
            blockTime=1437591600,
            bits=0x1E0FFFFF,
            nonce=1061886,
        ),
        dict(
            builder=netparams.TestGenesis,
            hash=TEST_GENESIS_HASH,
            blockTime=1437591600,
            bits=0x1F00FFFF,
            nonce=344459,
        ),
        dict(
            builder=netparams.RegGenesis,
            hash=REG_GENESIS_HASH,
            blockTime=1435708800,
            bits=0x207FFFFF,
            nonce=8,
        ),
    ]
    for test in tests:
        block = test["builder"].build()
        header = block.header
        assert block.id() == test["hash"]
        assert header.merkleRoot.rhex() == MERKLE_ROOT
        assert header.version == 1
        assert header.prevBlock.iszero()
        assert header.timestamp == test["blockTime"]
        assert header.bits == test["bits"]
        assert header.nonce == test["nonce"]
        assert len(block.transactions) == 1
        assert block.signature == b""


def test_coinbase():
    tx = netparams.MainGenesis.coinbase()
    assert tx.isCoinBase()
    assert tx.version == 1
    assert tx.time == 1437591600
    assert tx.lockTime == 0
    assert tx.txid() == MERKLE_ROOT

    ti = tx.txIn[0]
    assert ti.sequence == msgtx.MaxTxInSequenceNum
    message = netparams.GenesisMessage.encode()
    assert ti.signatureScript == "00012a26" + message.hex()

    assert len(tx.txOut) == 1
    assert tx.txOut[0].value == 0
    assert len(tx.txOut[0].pkScript) == 0

    # Regtest only moves the block time.
    assert netparams.RegGenesis.coinbase() == tx


def test_build_is_pure():
    builder = netparams.MainGenesis
    a = builder.build()
    b = builder.build()
    assert a is not b
    assert a.serialize() == b.serialize()
    a.header.nonce = 0
    assert builder.build().id() == MAIN_GENESIS_HASH


def test_derive():
    builder = netparams.MainGenesis
    derived = builder.derive(nonce=1)
    assert derived.nonce == 1
    assert builder.nonce == 1061886
    assert derived.message == builder.message
    assert derived.bits == builder.bits
    assert "nonce=1)" in repr(derived)

    with pytest.raises(BiosError):
        builder.derive(difficulty=1)
    with pytest.raises(BiosError):
        builder.nonce = 0
    assert builder.nonce == 1061886


def test_verifyGenesis(prepareLogger):
    block = netparams.MainGenesis.build()
    genesis.verifyGenesis("mainnet", block, MAIN_GENESIS_HASH, MERKLE_ROOT)

    with pytest.raises(GenesisMismatchError) as excinfo:
        genesis.verifyGenesis(
            "testnet", netparams.MainGenesis.derive(nonce=1).build(),
            MAIN_GENESIS_HASH, MERKLE_ROOT,
        )
    err = excinfo.value
    assert err.network == "testnet"
    assert err.field == "hash"
    assert err.expected == MAIN_GENESIS_HASH
    assert err.computed != MAIN_GENESIS_HASH
    assert "testnet" in str(err)

    # The merkle root is checked first.
    with pytest.raises(GenesisMismatchError) as excinfo:
        genesis.verifyGenesis(
            "regtest",
            netparams.MainGenesis.derive(message="other").build(),
            MAIN_GENESIS_HASH,
            MERKLE_ROOT,
        )
    assert excinfo.value.field == "merkle root"
    assert excinfo.value.network == "regtest"

    # Mismatches are BiosErrors.
    with pytest.raises(BiosError):
        genesis.verifyGenesis("mainnet", block, TEST_GENESIS_HASH, MERKLE_ROOT)
