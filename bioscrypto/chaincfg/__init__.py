"""
Copyright (c) 2020, The BiosCrypto developers
See LICENSE for details.
"""

from .addrprefix import AddressPrefixes, PrefixCollisionError  # noqa: F401
from .genesis import GenesisBuilder, GenesisMismatchError  # noqa: F401
from .netparams import MAINNET, REGTEST, TESTNET, ChainParams  # noqa: F401
from .registry import (  # noqa: F401
    NetworkRegistry,
    UnknownNetworkError,
    normalizeName,
    params,
    parse,
    selectParams,
    selectParamsFromFlags,
)
from .seeds import SeedTableError  # noqa: F401
