"""
Copyright (c) 2020, the Decred developers
Copyright (c) 2020, the BiosCrypto developers
See LICENSE for details

Peer addresses, as carried in addr messages and the fixed seed tables.
"""

import ipaddress
import socket
import time

from bioscrypto import BiosError
from bioscrypto.util.encode import ByteArray


# Timestamp 4 + services 8 + IP 16 + port 2.
MaxNetAddressPayload = 30

# IPv4 addresses are stored mapped into ::ffff:0:0/96.
ipv4to16prefix = ByteArray(0xFFFF, length=12)


class NetAddress:
    """
    A peer endpoint with its advertised services and last-seen time. The IP
    is always held as 16 bytes.
    """

    def __init__(self, ip, port, services, stamp=None):
        """
        Args:
            ip (str or bytes-like): Textual form, or 4 or 16 bytes.
            port (int): The port. Big-endian on the wire.
            services (int): Service flags, e.g. wire.SFNodeNetwork.
            stamp (int): Optional. Last-seen unix time. Default is now.
        """
        self.timestamp = int(time.time()) if stamp is None else stamp
        self.services = services

        if isinstance(ip, str):
            ip = decodeStringIP(ip)
        ip = ByteArray(ip)
        if len(ip) == 4:
            ip = ipv4to16prefix + ip
        if len(ip) != 16:
            raise BiosError(f"NetAddress: bad IP length {len(ip)}")
        self.ip = ip

        self.port = port

    def __eq__(self, other):
        return (
            self.ip == other.ip
            and self.port == other.port
            and self.services == other.services
            and self.timestamp == other.timestamp
        )

    def __repr__(self):
        return f"NetAddress({self.key()}, services={self.services}, stamp={self.timestamp})"

    def isIPv4(self):
        return self.ip[:12] == ipv4to16prefix

    def ipString(self):
        """
        The IP in dotted or colon form.
        """
        if self.isIPv4():
            return str(ipaddress.IPv4Address(self.ip[12:].bytes()))
        return str(ipaddress.IPv6Address(self.ip.bytes()))

    def key(self):
        """
        host:port, with IPv6 hosts bracketed.
        """
        if self.isIPv4():
            return f"{self.ipString()}:{self.port}"
        return f"[{self.ipString()}]:{self.port}"

    def hasService(self, service):
        """
        True if every flag in service is advertised.
        """
        return self.services & service == service


def readNetAddress(b, hasStamp=True):
    """
    Decode a NetAddress. The version message omits the timestamp.

    Args:
        b (byte-like): Exactly 30 bytes, or 26 without the timestamp.
        hasStamp (bool): Whether the timestamp is present.

    Returns:
        NetAddress: The address. The timestamp is 0 when absent.
    """
    b = ByteArray(b)
    expLen = 30 if hasStamp else 26
    if len(b) != expLen:
        raise BiosError(
            f"readNetAddress wrong length (hasStamp={hasStamp}) expected {expLen}, got {len(b)}"
        )

    stamp = b.pop(4).unLittle().int() if hasStamp else 0
    services = b.pop(8).unLittle().int()
    ip = b.pop(16)
    port = b.pop(2).int()

    return NetAddress(ip=ip, port=port, services=services, stamp=stamp)


def writeNetAddress(netAddr, hasStamp=True):
    """
    Encode a NetAddress, the inverse of readNetAddress.

    Args:
        netAddr (NetAddress): The address.
        hasStamp (bool): Whether to include the timestamp.

    Returns:
        ByteArray: 30 bytes, or 26 without the timestamp.
    """
    b = (
        ByteArray(netAddr.timestamp, length=4).littleEndian()
        if hasStamp
        else ByteArray()
    )
    b += ByteArray(netAddr.services, length=8).littleEndian()
    b += ByteArray(netAddr.ip, length=16)
    b += ByteArray(netAddr.port, length=2)
    return b


def decodeStringIP(ip):
    """
    The 4 or 16 bytes of a textual IPv4 or IPv6 address.
    """
    try:
        return socket.inet_pton(socket.AF_INET, ip)
    except OSError:
        pass
    try:
        return socket.inet_pton(socket.AF_INET6, ip)
    except OSError:
        raise BiosError(f"failed to decode IP {ip}")
