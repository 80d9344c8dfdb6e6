"""
Copyright (c) 2020, the BiosCrypto developers
See LICENSE for details
"""

import pytest

from bioscrypto import BiosError
from bioscrypto.chaincfg import addrprefix, difficulty
from bioscrypto.chaincfg import netparams
from bioscrypto.chaincfg import registry as chainregistry
from bioscrypto.chaincfg import seeds
from bioscrypto.chaincfg.genesis import GenesisMismatchError
from bioscrypto.chaincfg.netparams import MAINNET, REGTEST, TESTNET


ALERT_KEY = (
    "04e44761e96c9056be6b659c04b94fbfebeb5d5257fe028e80695c62f7c2f81f85"
    "d131a669df3be611393f454852a2d08c6314aad5ca3cbe5616262db3d4a6efac"
)


# fmt: off
expected = {
    MAINNET: dict(
        netMagic="0abc105f",
        defaultPort=32767,
        rpcPort=32768,
        powLimit=difficulty.limitFromShift(20),
        posLimit=difficulty.limitFromShift(20),
        powLimitBits=0x1E0FFFFF,
        prefixes=(86, 85, 214, 0x0488B21E, 0x0488ADE4),
        targetSpacing=60,
        lastPoWBlock=3100,
        dataDir="",
        requireRPCPassword=True,
        genesisHash="000001815b44ae9b4b5a9f22ef95d5badc10e3b38503aee9b7e84f5ce2bf8efa",
    ),
    TESTNET: dict(
        netMagic="0abc1060",
        defaultPort=16383,
        rpcPort=16384,
        powLimit=difficulty.limitFromShift(16),
        posLimit=difficulty.limitFromShift(16),
        powLimitBits=0x1F00FFFF,
        prefixes=(118, 196, 246, 0x043587CF, 0x04358394),
        targetSpacing=30,
        lastPoWBlock=0x7FFFFFFF,
        dataDir="testnet",
        requireRPCPassword=True,
        genesisHash="0000cef54c3c42240e2a4859db2020ac2afc2017832058d3599ba972db05cb77",
    ),
    REGTEST: dict(
        netMagic="0abc10fe",
        defaultPort=26244,
        rpcPort=16384,
        powLimit=difficulty.limitFromShift(1),
        posLimit=difficulty.limitFromShift(16),
        powLimitBits=0x207FFFFF,
        prefixes=(118, 196, 246, 0x043587CF, 0x04358394),
        targetSpacing=30,
        lastPoWBlock=0x7FFFFFFF,
        dataDir="regtest",
        requireRPCPassword=False,
        genesisHash="2fec6cc4a488fdcd250657555c69634070989874de455aa0ceeebc2494a49860",
    ),
}
# fmt: on


def allNets():
    return [chainregistry.DefaultRegistry.get(n) for n in (MAINNET, TESTNET, REGTEST)]


def test_fields():
    for netParams in allNets():
        want = expected[netParams.name]
        assert netParams.netMagic.hex() == want["netMagic"]
        assert netParams.messageStart() == want["netMagic"]
        assert netParams.alertPubKey.hex() == ALERT_KEY
        assert netParams.defaultPort == want["defaultPort"]
        assert netParams.rpcPort == want["rpcPort"]
        assert netParams.powLimit == want["powLimit"]
        assert netParams.posLimit == want["posLimit"]
        assert netParams.powLimitBits == want["powLimitBits"]
        assert difficulty.bigToCompact(netParams.powLimit) == netParams.powLimitBits
        assert netParams.targetSpacing == want["targetSpacing"]
        # Derived once from the mainnet spacing and inherited.
        assert netParams.targetTimespan == 600
        assert netParams.lastPoWBlock == want["lastPoWBlock"]
        assert netParams.startPoSBlock == 2800
        assert netParams.dataDir == want["dataDir"]
        assert netParams.requireRPCPassword == want["requireRPCPassword"]
        assert netParams.genesisHash == want["genesisHash"]
        assert netParams.genesis.id() == netParams.genesisHash
        assert netParams.genesis.header.merkleRoot.rhex() == netparams.GenesisMerkleRoot
        assert netParams.genesisMerkleRoot == netparams.GenesisMerkleRoot
        assert netParams.fixedSeeds == ()

        prefixes = netParams.base58Prefixes
        assert isinstance(prefixes, addrprefix.AddressPrefixes)
        for kind, v in zip(addrprefix.KINDS, want["prefixes"]):
            assert prefixes[kind] == v.to_bytes(
                addrprefix.KIND_LENGTHS[kind], byteorder="big"
            )

        assert netParams.name in repr(netParams)


def test_distinct():
    nets = allNets()
    for i, a in enumerate(nets):
        for b in nets[i + 1 :]:
            assert a.netMagic != b.netMagic
            assert a.defaultPort != b.defaultPort
            assert a.genesisHash != b.genesisHash
            assert a.dataDir != b.dataDir

    main, testnet, _ = nets
    assert main.rpcPort != testnet.rpcPort
    for kind in addrprefix.KINDS:
        assert main.base58Prefixes[kind] != testnet.base58Prefixes[kind]


def test_immutable():
    main = chainregistry.DefaultRegistry.get(MAINNET)
    with pytest.raises(BiosError):
        main.defaultPort = 1
    with pytest.raises(BiosError):
        main.extra = 1
    with pytest.raises(BiosError):
        del main.name
    with pytest.raises(TypeError):
        main.base58Prefixes[addrprefix.PUBKEY_ADDRESS] = b"\x00"
    assert isinstance(main.fixedSeeds, tuple)
    assert main.defaultPort == 32767


def test_derive():
    main = chainregistry.DefaultRegistry.get(MAINNET)
    before = main.fields()
    derived = main.derive(name="custom", defaultPort=1)
    assert derived.name == "custom"
    assert derived.defaultPort == 1
    assert derived.genesis == main.genesis
    assert derived.genesisBuilder is main.genesisBuilder
    assert main.fields() == before
    assert main.name == MAINNET

    with pytest.raises(BiosError):
        main.derive(protocolVersion=70001)
    with pytest.raises(BiosError):
        main.derive(netMagic=b"\x0a\xbc\x10")

    fields = main.fields()
    del fields["rpcPort"]
    with pytest.raises(BiosError):
        netparams.ChainParams(**fields)


def test_seed_tables(prepareLogger):
    table = seeds.makeSeedTable(["1.2.3.4:32767"], 32767)
    testTable = seeds.makeSeedTable(["5.6.7.8", "[::1]"], 16383)
    reg = chainregistry.build(mainSeeds=table, testSeeds=testTable)

    main = reg.get(MAINNET)
    assert [a.key() for a in main.fixedSeeds] == ["1.2.3.4:32767"]

    testnet = reg.get(TESTNET)
    assert [a.key() for a in testnet.fixedSeeds] == ["5.6.7.8:16383", "[::1]:16383"]

    # Regtest never inherits the testnet seeds.
    assert reg.get(REGTEST).fixedSeeds == ()

    # Building testnet and regtest left mainnet alone.
    assert main.name == MAINNET
    assert main.defaultPort == 32767
    assert len(main.fixedSeeds) == 1

    with pytest.raises(seeds.SeedTableError):
        chainregistry.build(mainSeeds=bytes(10))


def test_genesis_copies():
    main = chainregistry.DefaultRegistry.get(MAINNET)
    block = main.genesis
    assert block is not main.genesis
    assert block == main.genesis

    block.header.nonce = 0
    block.transactions.clear()
    assert main.genesis.id() == main.genesisHash
    assert len(main.genesis.transactions) == 1
    assert main.genesis.header.nonce == 1061886


def test_genesis_builders():
    main = chainregistry.DefaultRegistry.get(MAINNET)
    testnet = chainregistry.DefaultRegistry.get(TESTNET)
    regtest = chainregistry.DefaultRegistry.get(REGTEST)
    assert main.genesisBuilder is netparams.MainGenesis
    for netParams in (main, testnet, regtest):
        assert netParams.genesisBuilder.build() == netParams.genesis
        assert netParams.genesisBuilder.bits == netParams.powLimitBits

    # Testnet and regtest genesis blocks are derived from the base's builder.
    other = main.derive(genesisBuilder=main.genesisBuilder.derive(message="other"))
    with pytest.raises(GenesisMismatchError) as excinfo:
        netparams.buildTestnet(other)
    assert excinfo.value.network == TESTNET
    assert excinfo.value.field == "merkle root"

    other = testnet.derive(genesisBuilder=testnet.genesisBuilder.derive(txTime=0))
    with pytest.raises(GenesisMismatchError) as excinfo:
        netparams.buildRegtest(other)
    assert excinfo.value.network == REGTEST
