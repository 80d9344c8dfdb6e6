"""
Copyright (c) 2020, the BiosCrypto developers
See LICENSE for details

Chain parameters for mainnet, testnet and regtest. Testnet is built from a
copy of mainnet and regtest from a copy of testnet, each overriding only the
values that differ.
"""

from bioscrypto import BiosError
from bioscrypto.chaincfg import addrprefix, difficulty, seeds
from bioscrypto.chaincfg.genesis import GenesisBuilder, verifyGenesis
from bioscrypto.util import helpers
from bioscrypto.util.encode import ByteArray
from bioscrypto.wire.msgblock import MsgBlock


log = helpers.getLogger("PARAMS")

MAINNET = "mainnet"
TESTNET = "testnet"
REGTEST = "regtest"

# The alert key is shared by mainnet and testnet.
AlertPubKey = bytes.fromhex(
    "04e44761e96c9056be6b659c04b94fbfebeb5d5257fe028e80695c62f7c2f81f85"
    "d131a669df3be611393f454852a2d08c6314aad5ca3cbe5616262db3d4a6efac"
)

GenesisMessage = "Jul 22, 2015 19:00:00 UTC : BiosCrypto"
GenesisTime = 1437591600  # Jul 22, 2015 19:00:00 UTC
GenesisMerkleRoot = "90ac10dbdb97f5be41866194f4bc5f63a72ff47f13ba75513eaf77dfa8d6aeb3"

MainGenesisHash = "000001815b44ae9b4b5a9f22ef95d5badc10e3b38503aee9b7e84f5ce2bf8efa"
TestGenesisHash = "0000cef54c3c42240e2a4859db2020ac2afc2017832058d3599ba972db05cb77"
RegGenesisHash = "2fec6cc4a488fdcd250657555c69634070989874de455aa0ceeebc2494a49860"

# Genesis inputs. Testnet changes the bits and nonce. Regtest also changes the
# block time; the coinbase keeps its time, so the merkle root is shared.
MainGenesis = GenesisBuilder(
    message=GenesisMessage,
    txTime=GenesisTime,
    blockTime=GenesisTime,
    bits=difficulty.bigToCompact(difficulty.limitFromShift(20)),
    nonce=1061886,
)
TestGenesis = MainGenesis.derive(
    bits=difficulty.bigToCompact(difficulty.limitFromShift(16)), nonce=344459
)
RegGenesis = TestGenesis.derive(
    blockTime=1435708800,
    bits=difficulty.bigToCompact(difficulty.limitFromShift(1)),
    nonce=8,
)


class ChainParams:
    """
    ChainParams is a read-only set of network constants. Assigning to an
    attribute raises BiosError. Use derive to get a modified copy.

    The genesis block is held serialized. Each read of genesis decodes a new
    MsgBlock, so changes to a returned block never reach the parameters.
    """

    FIELDS = (
        "name",
        "netMagic",
        "alertPubKey",
        "defaultPort",
        "rpcPort",
        "powLimit",
        "posLimit",
        "powLimitBits",
        "base58Prefixes",
        "targetSpacing",
        "targetTimespan",
        "lastPoWBlock",
        "startPoSBlock",
        "dataDir",
        "requireRPCPassword",
        "fixedSeeds",
        "genesis",
        "genesisBuilder",
        "genesisHash",
        "genesisMerkleRoot",
    )

    def __init__(self, **fields):
        missing = [k for k in self.FIELDS if k not in fields]
        if missing:
            raise BiosError(f"missing chain parameters {missing}")
        unknown = set(fields) - set(self.FIELDS)
        if unknown:
            raise BiosError(f"unknown chain parameters {sorted(unknown)}")

        magic = bytes(fields["netMagic"])
        if len(magic) != 4:
            raise BiosError(f"network magic must be 4 bytes, got {len(magic)}")
        fields["netMagic"] = magic
        fields["alertPubKey"] = bytes(fields["alertPubKey"])
        if not isinstance(fields["base58Prefixes"], addrprefix.AddressPrefixes):
            fields["base58Prefixes"] = addrprefix.AddressPrefixes(
                fields["base58Prefixes"]
            )
        fields["fixedSeeds"] = tuple(fields["fixedSeeds"])
        object.__setattr__(self, "_genesis", fields["genesis"].serialize().bytes())

        for k in self.FIELDS:
            if k != "genesis":
                object.__setattr__(self, k, fields[k])

    def __setattr__(self, k, v):
        raise BiosError(f"chain parameters are read-only, cannot set {k}")

    def __delattr__(self, k):
        raise BiosError(f"chain parameters are read-only, cannot delete {k}")

    @property
    def genesis(self):
        return MsgBlock.deserialize(self._genesis)

    def __repr__(self):
        return f"ChainParams({self.name}, genesis={self.genesisHash})"

    def fields(self):
        """
        The parameters as a dict.
        """
        return {k: getattr(self, k) for k in self.FIELDS}

    def derive(self, **overrides):
        """
        A new ChainParams with some fields replaced. The receiver is not
        modified.

        Returns:
            ChainParams: The new parameter set.
        """
        fields = self.fields()
        fields.update(overrides)
        return ChainParams(**fields)

    def messageStart(self):
        """
        The network magic as a ByteArray.
        """
        return ByteArray(self.netMagic)


def buildMain(seedTable=seeds.MainSeeds):
    """
    Build the mainnet parameters.

    Args:
        seedTable (bytes-like): The fixed seed table.

    Returns:
        ChainParams: The mainnet parameters.
    """
    powLimit = difficulty.limitFromShift(20)
    builder = MainGenesis
    genesis = builder.build()
    verifyGenesis(MAINNET, genesis, MainGenesisHash, GenesisMerkleRoot)

    targetSpacing = 60
    params = ChainParams(
        name=MAINNET,
        netMagic=bytes([0x0A, 0xBC, 0x10, 0x5F]),
        alertPubKey=AlertPubKey,
        defaultPort=32767,
        rpcPort=32768,
        powLimit=powLimit,
        posLimit=difficulty.limitFromShift(20),
        powLimitBits=builder.bits,
        base58Prefixes={
            addrprefix.PUBKEY_ADDRESS: 86,
            addrprefix.SCRIPT_ADDRESS: 85,
            addrprefix.SECRET_KEY: 214,
            addrprefix.EXT_PUBLIC_KEY: 0x0488B21E,
            addrprefix.EXT_SECRET_KEY: 0x0488ADE4,
        },
        targetSpacing=targetSpacing,
        targetTimespan=10 * targetSpacing,
        lastPoWBlock=3100,
        startPoSBlock=2800,
        dataDir="",
        requireRPCPassword=True,
        fixedSeeds=seeds.convertSeed6(seedTable),
        genesis=genesis,
        genesisBuilder=builder,
        genesisHash=MainGenesisHash,
        genesisMerkleRoot=GenesisMerkleRoot,
    )
    log.debug(f"built {params}")
    return params


def buildTestnet(base, seedTable=seeds.TestSeeds):
    """
    Build the testnet parameters from a copy of mainnet. The target timespan
    is inherited, not recomputed from the new spacing. The genesis block comes
    from the base's genesis builder with the testnet bits and nonce.

    Args:
        base (ChainParams): The mainnet parameters.
        seedTable (bytes-like): The fixed seed table.

    Returns:
        ChainParams: The testnet parameters.
    """
    powLimit = difficulty.limitFromShift(16)
    builder = base.genesisBuilder.derive(
        bits=TestGenesis.bits, nonce=TestGenesis.nonce
    )
    genesis = builder.build()
    verifyGenesis(TESTNET, genesis, TestGenesisHash, GenesisMerkleRoot)

    params = base.derive(
        name=TESTNET,
        netMagic=bytes([0x0A, 0xBC, 0x10, 0x60]),
        powLimit=powLimit,
        posLimit=difficulty.limitFromShift(16),
        powLimitBits=builder.bits,
        alertPubKey=AlertPubKey,
        defaultPort=16383,
        rpcPort=16384,
        dataDir="testnet",
        genesis=genesis,
        genesisBuilder=builder,
        genesisHash=TestGenesisHash,
        fixedSeeds=seeds.convertSeed6(seedTable),
        base58Prefixes={
            addrprefix.PUBKEY_ADDRESS: 118,
            addrprefix.SCRIPT_ADDRESS: 196,
            addrprefix.SECRET_KEY: 246,
            addrprefix.EXT_PUBLIC_KEY: 0x043587CF,
            addrprefix.EXT_SECRET_KEY: 0x04358394,
        },
        targetSpacing=30,
        lastPoWBlock=0x7FFFFFFF,
        startPoSBlock=2800,
    )
    log.debug(f"built {params}")
    return params


def buildRegtest(base):
    """
    Build the regtest parameters from a copy of testnet. Regtest has no fixed
    seeds and doesn't require an RPC password. Its genesis block moves the
    base's block time, bits and nonce.

    Args:
        base (ChainParams): The testnet parameters.

    Returns:
        ChainParams: The regtest parameters.
    """
    powLimit = difficulty.limitFromShift(1)
    builder = base.genesisBuilder.derive(
        blockTime=RegGenesis.blockTime, bits=RegGenesis.bits, nonce=RegGenesis.nonce
    )
    genesis = builder.build()
    verifyGenesis(REGTEST, genesis, RegGenesisHash, GenesisMerkleRoot)

    params = base.derive(
        name=REGTEST,
        netMagic=bytes([0x0A, 0xBC, 0x10, 0xFE]),
        powLimit=powLimit,
        powLimitBits=builder.bits,
        genesis=genesis,
        genesisBuilder=builder,
        genesisHash=RegGenesisHash,
        defaultPort=26244,
        dataDir="regtest",
        fixedSeeds=(),
        requireRPCPassword=False,
    )
    log.debug(f"built {params}")
    return params
