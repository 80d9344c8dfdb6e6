"""
Copyright (c) 2020, the BiosCrypto developers
See LICENSE for details

Fixed bootstrap peers. A seed table is a byte string of 18-byte entries: a
16-byte IPv6 (or IPv4-mapped) address followed by a big-endian port.
"""

import random
import socket
import time

from bioscrypto import BiosError
from bioscrypto.util import helpers
from bioscrypto.util.encode import ByteArray
from bioscrypto.wire import wire
from bioscrypto.wire.netaddress import NetAddress, ipv4to16prefix


log = helpers.getLogger("SEEDS")

ONE_WEEK = 7 * 24 * 60 * 60

SEED_ENTRY_SIZE = 18


class SeedTableError(BiosError):
    pass


def convertSeed6(table, now=None, rand=None):
    """
    Convert a seed table into peer addresses. Peers only connect to one or two
    seed nodes before learning fresher addresses, so every seed gets a random
    last-seen time between one and two weeks ago.

    Args:
        table (bytes-like): Concatenated 18-byte entries.
        now (int): Optional. The current unix time. Default: time.time().
        rand (func(int) -> int): Optional. Returns a value in [0, n).
            Default: random.randrange.

    Returns:
        list(NetAddress): One address per entry, in table order, advertising
            SFNodeNetwork.
    """
    table = ByteArray(table)
    if len(table) % SEED_ENTRY_SIZE != 0:
        raise SeedTableError(
            f"seed table length {len(table)} is not a multiple of {SEED_ENTRY_SIZE}"
        )
    now = int(time.time()) if now is None else now
    rand = rand if rand else random.randrange

    seeds = []
    while len(table) > 0:
        ip = table.pop(16)
        port = table.pop(2).int()
        stamp = now - rand(ONE_WEEK) - ONE_WEEK
        seeds.append(NetAddress(ip, port, wire.SFNodeNetwork, stamp=stamp))
    log.debug(f"converted {len(seeds)} fixed seeds")
    return seeds


def parseSpec(spec, defaultPort):
    """
    Parse one textual endpoint into a seed table entry. Accepted forms are
    "1.2.3.4", "1.2.3.4:port", "[::1]:port" and a bare IPv6 address.

    Args:
        spec (str): The endpoint.
        defaultPort (int): The port used when the spec doesn't carry one.

    Returns:
        ByteArray: The 18-byte entry.
    """
    spec = spec.strip()
    host, port = spec, defaultPort
    if spec.startswith("["):
        end = spec.find("]")
        if end < 0:
            raise SeedTableError(f"unterminated IPv6 literal in {spec!r}")
        host, rest = spec[1:end], spec[end + 1 :]
        if rest:
            if not rest.startswith(":"):
                raise SeedTableError(f"malformed seed spec {spec!r}")
            port = rest[1:]
    elif spec.count(":") == 1:
        host, port = spec.split(":")

    try:
        port = int(port)
    except ValueError:
        raise SeedTableError(f"bad port in seed spec {spec!r}")
    if port < 0 or port > wire.MaxUint16:
        raise SeedTableError(f"port {port} out of range in {spec!r}")

    try:
        ip = ipv4to16prefix + socket.inet_pton(socket.AF_INET, host)
    except OSError:
        try:
            ip = ByteArray(socket.inet_pton(socket.AF_INET6, host))
        except OSError:
            raise SeedTableError(f"bad address in seed spec {spec!r}")

    return ip + ByteArray(port, length=2)


def makeSeedTable(specs, defaultPort):
    """
    Build a seed table from textual endpoints. Blank lines and lines starting
    with # are skipped, so a seed list file can be passed line by line.

    Args:
        specs (iterable(str)): The endpoints.
        defaultPort (int): The network's default port.

    Returns:
        bytes: The table.
    """
    table = ByteArray()
    for spec in specs:
        spec = spec.strip()
        if not spec or spec.startswith("#"):
            continue
        table += parseSpec(spec, defaultPort)
    return table.bytes()


# Compiled-in bootstrap tables. No fixed seeds are published for either
# network, so nodes rely on addnode/connect until they are.
MainSeeds = b""
TestSeeds = b""
