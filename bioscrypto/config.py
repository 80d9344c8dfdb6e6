"""
Copyright (c) 2019, Brian Stafford
Copyright (c) 2019-2020, the Decred developers
Copyright (c) 2020, the BiosCrypto developers
See LICENSE for details

Startup configuration: network selection, data directory and logging.
"""

import argparse
import logging
import os

from bioscrypto import BiosError
from bioscrypto.chaincfg import registry as chainregistry
from bioscrypto.util import helpers


APP_NAME = "bioscrypto"

# The configuration file name. It lives in the base data directory.
CONFIG_NAME = "bioscrypto.conf"

# The log file name. It lives in the network data directory.
LOG_NAME = "debug.log"

# Keys read from the configuration file. --datadir overrides the file's
# datadir; the boolean keys are OR-ed with their flags.
CONFIG_KEYS = ("testnet", "regtest", "datadir", "debug")

log = helpers.getLogger("CONFIG")


def boolSetting(v):
    """
    Interpret a configuration file value as a boolean.

    Args:
        v (str): The value, e.g. "1" or "true".

    Returns:
        bool: The value.
    """
    if v is None:
        return False
    return v.strip().lower() in ("1", "true", "yes", "on")


class BiosConfig:
    """
    BiosConfig is the startup configuration. Selecting the network is a side
    effect of construction.
    """

    def __init__(self, args=None, registry=None):
        """
        Args:
            args (list(str)): Optional. Command line arguments. Default is
                sys.argv.
            registry (NetworkRegistry): Optional. The registry to select the
                network in. Default is the package's default registry.
        """
        parser = argparse.ArgumentParser(prog=APP_NAME)
        parser.add_argument("--testnet", action="store_true", help="use testnet")
        parser.add_argument("--regtest", action="store_true", help="use regtest")
        parser.add_argument("--datadir", help="base data directory")
        parser.add_argument("--conf", help="configuration file path")
        parser.add_argument("--debug", action="store_true", help="debug logging")
        parsed, unknown = parser.parse_known_args(args)
        if unknown:
            log.warning(f"ignoring unknown arguments: {unknown!r}")

        baseDir = parsed.datadir or helpers.appDataDir(APP_NAME)
        self.configPath = parsed.conf or os.path.join(baseDir, CONFIG_NAME)
        fileCfg = {}
        if os.path.isfile(self.configPath):
            fileCfg = helpers.readINI(self.configPath, CONFIG_KEYS)
        elif parsed.conf:
            raise BiosError(f"configuration file {parsed.conf} not found")
        self.file = fileCfg

        testnet = parsed.testnet or boolSetting(fileCfg.get("testnet"))
        regtest = parsed.regtest or boolSetting(fileCfg.get("regtest"))
        self.debug = parsed.debug or boolSetting(fileCfg.get("debug"))
        if not parsed.datadir and fileCfg.get("datadir"):
            baseDir = fileCfg["datadir"]

        self.registry = registry if registry else chainregistry.DefaultRegistry
        if not self.registry.selectFromFlags(regtest, testnet):
            raise BiosError("invalid combination of -regtest and -testnet.")
        self.netParams = self.registry.current()

        self.baseDir = baseDir
        self.dataDir = (
            os.path.join(baseDir, self.netParams.dataDir)
            if self.netParams.dataDir
            else baseDir
        )

    @property
    def logLevel(self):
        return logging.DEBUG if self.debug else logging.INFO

    @property
    def logPath(self):
        return os.path.join(self.dataDir, LOG_NAME)

    def ensureDataDir(self):
        """
        Create the network data directory if it doesn't exist.
        """
        if not helpers.mkdir(self.dataDir):
            raise BiosError(f"data directory {self.dataDir} is a file")

    def setupLogging(self):
        """
        Create the data directory and start logging to stdout and to a rotating
        file inside it.
        """
        self.ensureDataDir()
        helpers.prepareLogging(self.logPath, logLvl=self.logLevel)
        log.info(
            f"{self.netParams.name} parameters, data directory {self.dataDir}"
        )

    def isNet(self, netName):
        """
        Whether the configured network is the named one. Aliases are accepted.
        """
        return chainregistry.ALIASES.get(netName, netName) == self.netParams.name


biosConfig = None


def load(args=None):
    """
    Load and return the current configuration.

    The configuration is only loaded once. Successive calls to the modular `load`
    function will return the same instance.

    Args:
        args (list(str)): Optional. Command line arguments for the first load.

    Returns:
        BiosConfig: The configuration.
    """
    global biosConfig
    if not biosConfig:
        try:
            biosConfig = BiosConfig(args)
        except BiosError as e:
            log.error(f"configuration error: {helpers.formatTraceback(e)}")
            raise
    return biosConfig
