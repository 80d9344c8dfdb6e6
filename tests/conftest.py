"""
Copyright (c) 2019, the Decred developers
Copyright (c) 2020, the BiosCrypto developers
See LICENSE for details
"""

import random

import pytest

from bioscrypto import chaincfg
from bioscrypto.chaincfg import registry as chainregistry
from bioscrypto.util import helpers


# Seed initialization is delegated to tests.
# random.seed(0)


@pytest.fixture
def randBytes():
    def _randBytes(low=0, high=50):
        return bytes(random.randint(0, 255) for _ in range(random.randint(low, high)))

    return _randBytes


@pytest.fixture(scope="module")
def prepareLogger(request):
    helpers.prepareLogging()


@pytest.fixture
def registry():
    """
    A registry over the default parameter sets, so selection in a test doesn't
    change the process-wide network.
    """
    default = chainregistry.DefaultRegistry
    return chaincfg.NetworkRegistry(
        default.get(chaincfg.MAINNET),
        default.get(chaincfg.TESTNET),
        default.get(chaincfg.REGTEST),
    )
