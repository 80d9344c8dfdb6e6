"""
Copyright (c) 2019, Brian Stafford
Copyright (c) 2019-2020, The Decred developers
Copyright (c) 2020, The BiosCrypto developers
See LICENSE for details

Logging setup, the configuration file reader and the per-OS data directory.
"""

import configparser
import logging
from logging import Handler, Logger
from logging.handlers import RotatingFileHandler
import os
from pathlib import Path
import platform
import sys
import traceback
from typing import Dict, Iterable, List, Optional, Union

from appdirs import AppDirs  # type: ignore


# Rotate debug.log at 5 MiB, keeping two old files.
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 2

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(funcName)s(%(lineno)d) %(message)s"


def formatTraceback(err: Exception) -> str:
    """
    The error message and its traceback, for logging.
    """
    return "".join(traceback.format_exception(None, err, err.__traceback__))


def mkdir(path: Union[Path, str]) -> bool:
    """
    Create a directory and its parents if needed.

    Args:
        path: the directory path.

    Returns:
        False if a file is in the way, else True.
    """
    if os.path.isfile(path):
        return False
    os.makedirs(path, exist_ok=True)
    return True


class LogSettings:
    """
    Module-wide logging state. Levels apply to every logger handed out by
    getLogger, including loggers created before prepareLogging runs.
    """

    root = logging.getLogger("")
    defaultLevel = logging.INFO
    moduleLevels: Dict[str, int] = {}
    loggers: Dict[str, Logger] = {}
    handlers: List[Handler] = []


LogSettings.root.setLevel(logging.NOTSET)


def _applyLevel(name: str, logger: Logger) -> None:
    logger.setLevel(LogSettings.moduleLevels.get(name, LogSettings.defaultLevel))


def prepareLogging(
    filepath: Union[Path, str, None] = None,
    logLvl: int = logging.INFO,
    lvlMap: Optional[Dict[str, int]] = None,
) -> None:
    """
    Route log records to stdout and, if filepath is set, to a rotating file.
    Calling again replaces the handlers installed by the previous call.

    Args:
        filepath: The log file, e.g. <datadir>/debug.log.
        logLvl: Level for loggers without an lvlMap entry.
        lvlMap: Per-logger levels, keyed by the name passed to getLogger.
            Entries accumulate across calls.
    """
    LogSettings.defaultLevel = logLvl
    if lvlMap:
        LogSettings.moduleLevels.update(lvlMap)
    for name, logger in LogSettings.loggers.items():
        _applyLevel(name, logger)

    for handler in LogSettings.handlers:
        LogSettings.root.removeHandler(handler)
        handler.close()
    LogSettings.handlers = []

    formatter = logging.Formatter(LOG_FORMAT)
    if filepath:
        LogSettings.handlers.append(
            RotatingFileHandler(
                filepath, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS
            )
        )
    # pythonw on Windows has no console.
    if not sys.executable.endswith("pythonw.exe"):
        LogSettings.handlers.append(logging.StreamHandler(sys.stdout))
    for handler in LogSettings.handlers:
        handler.setFormatter(formatter)
        LogSettings.root.addHandler(handler)


def getLogger(name: str) -> Logger:
    """
    A child of the root logger, at the level prepareLogging assigned to name.
    """
    logger = LogSettings.root.getChild(name)
    _applyLevel(name, logger)
    LogSettings.loggers[name] = logger
    return logger


def readINI(path: Union[Path, str], keys: Iterable[str]) -> Dict[str, str]:
    """
    Read key=value settings from a configuration file. The file needs no
    section header. Keys in any section are found; a later occurrence
    overrides an earlier one. Values are taken literally, so paths may
    contain %.

    Args:
        path: The configuration file.
        keys: The keys of interest. Others are ignored.

    Returns:
        The keys found, with their values.
    """
    parser = configparser.ConfigParser(strict=False, interpolation=None)
    with open(path) as f:
        parser.read_string("[bioscrypto]\n" + f.read(), source=str(path))
    wanted = set(keys)
    found = {}
    for section in parser.sections():
        for k, v in parser.items(section):
            if k in wanted:
                found[k] = v
    return found


def appDataDir(appName: str) -> str:
    """
    The base data directory for an application:

        Windows: the appdirs user data directory, e.g. %LOCALAPPDATA%\\Appname
        macOS: ~/Library/Application Support/Appname
        other: ~/.appname

    Network subdirectories (ChainParams.dataDir) go below it. The current
    directory is returned if no home directory can be found.

    Args:
        appName: The application name. A leading period is ignored.

    Returns:
        The directory path.
    """
    appName = appName.lstrip(".")
    if not appName:
        return "."

    opSys = platform.system()
    if opSys == "Windows":
        return AppDirs(appName.capitalize(), "").user_data_dir

    homeDir = os.path.expanduser("~") or os.getenv("HOME", "")
    if not homeDir:
        return "."
    if opSys == "Darwin":
        return os.path.join(
            homeDir, "Library", "Application Support", appName.capitalize()
        )
    return os.path.join(homeDir, "." + appName.lower())
