"""
Copyright (c) 2020, the BiosCrypto developers
See LICENSE for details

The network registry holds the three parameter sets and the process-wide
selection of the active one.
"""

import threading

from bioscrypto import BiosError
from bioscrypto.chaincfg import netparams
from bioscrypto.chaincfg.netparams import MAINNET, REGTEST, TESTNET
from bioscrypto.util import helpers


log = helpers.getLogger("REGISTRY")


class UnknownNetworkError(BiosError):
    pass


# Alternate names accepted by parse.
ALIASES = {
    "main": MAINNET,
    "testnet3": TESTNET,
    "regnet": REGTEST,
}


class NetworkRegistry:
    """
    NetworkRegistry selects one of the mainnet, testnet and regtest parameter
    sets. Mainnet is active until something else is selected.
    """

    def __init__(self, main, testnet, regtest):
        self.nets = {
            MAINNET: main,
            TESTNET: testnet,
            REGTEST: regtest,
        }
        self.active = main
        self.selected = False
        self.mtx = threading.Lock()

    def get(self, name):
        """
        The parameter set for the network, without selecting it.

        Args:
            name (str): "mainnet", "testnet" or "regtest".

        Returns:
            ChainParams: The network's parameters.
        """
        try:
            return self.nets[name]
        except (KeyError, TypeError):
            raise UnknownNetworkError(f"unknown network {name!r}")

    def select(self, name):
        """
        Make the named network active.

        Args:
            name (str): "mainnet", "testnet" or "regtest".
        """
        netParams = self.get(name)
        with self.mtx:
            if self.selected and self.active is not netParams:
                log.warning(
                    f"network reselected from {self.active.name} to {netParams.name}"
                )
            self.active = netParams
            self.selected = True
        log.info(f"using {name} parameters")

    def current(self):
        """
        The active parameter set.

        Returns:
            ChainParams: The active network's parameters.
        """
        return self.active

    def selectFromFlags(self, regtest, testnet):
        """
        Select the network from the -regtest and -testnet flags. Neither flag
        selects mainnet. Both flags together is an error and leaves the
        selection unchanged.

        Args:
            regtest (bool): The -regtest flag.
            testnet (bool): The -testnet flag.

        Returns:
            bool: False if both flags were set, else True.
        """
        if regtest and testnet:
            log.error("invalid combination of -regtest and -testnet")
            return False

        if regtest:
            self.select(REGTEST)
        elif testnet:
            self.select(TESTNET)
        else:
            self.select(MAINNET)
        return True


def build(mainSeeds=None, testSeeds=None):
    """
    Build the three parameter sets, in order, and a registry for them.

    Args:
        mainSeeds (bytes-like): Optional. The mainnet seed table.
        testSeeds (bytes-like): Optional. The testnet seed table.

    Returns:
        NetworkRegistry: A new registry with mainnet active.
    """
    main = netparams.buildMain(
        netparams.seeds.MainSeeds if mainSeeds is None else mainSeeds
    )
    testnet = netparams.buildTestnet(
        main, netparams.seeds.TestSeeds if testSeeds is None else testSeeds
    )
    regtest = netparams.buildRegtest(testnet)
    return NetworkRegistry(main, testnet, regtest)


DefaultRegistry = build()


def params():
    """
    The active parameter set of the default registry.
    """
    return DefaultRegistry.current()


def selectParams(name):
    """
    Select the named network in the default registry.
    """
    DefaultRegistry.select(name)


def selectParamsFromFlags(regtest, testnet):
    """
    Select the network in the default registry from the -regtest and -testnet
    flags. Returns False if both are set.
    """
    return DefaultRegistry.selectFromFlags(regtest, testnet)


def parse(name):
    """
    Get the network parameters based on the network name. Aliases are
    accepted.
    """
    if isinstance(name, str):
        name = ALIASES.get(name, name)
    return DefaultRegistry.get(name)


def normalizeName(netName):
    """
    Remove the numerals from testnet.

    Args:
        netName (string): The raw network name.

    Returns:
        string: The network name with numerals stripped. Anything that isn't
            a string is returned as is.
    """
    if isinstance(netName, str) and TESTNET in netName:
        return TESTNET
    return netName
