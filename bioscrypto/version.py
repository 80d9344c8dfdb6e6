"""
Copyright (c) 2020, the BiosCrypto developers
See LICENSE for details

Client version numbers and their string forms.
"""

# fmt: off
CLIENT_VERSION_MAJOR    = 1
CLIENT_VERSION_MINOR    = 0
CLIENT_VERSION_REVISION = 0
CLIENT_VERSION_BUILD    = 0
# fmt: on

# Set to True for release builds. Pre-release builds carry a "-beta" suffix.
CLIENT_VERSION_IS_RELEASE = False

CLIENT_NAME = "BiosCrypto"

CLIENT_VERSION = (
    1000000 * CLIENT_VERSION_MAJOR
    + 10000 * CLIENT_VERSION_MINOR
    + 100 * CLIENT_VERSION_REVISION
    + CLIENT_VERSION_BUILD
)


def formatVersion(n):
    """
    Format a packed version number. The build number is omitted when it is
    zero.

    Args:
        n (int): The version, e.g. 1000100 for 1.0.1.

    Returns:
        str: The version, e.g. "1.0.1".
    """
    major, minor, revision, build = (
        n // 1000000,
        (n // 10000) % 100,
        (n // 100) % 100,
        n % 100,
    )
    if build == 0:
        return f"{major}.{minor}.{revision}"
    return f"{major}.{minor}.{revision}.{build}"


def formatFullVersion():
    """
    The full client version, e.g. "v1.0.0.0-beta".
    """
    v = "v{}.{}.{}.{}".format(
        CLIENT_VERSION_MAJOR,
        CLIENT_VERSION_MINOR,
        CLIENT_VERSION_REVISION,
        CLIENT_VERSION_BUILD,
    )
    return v if CLIENT_VERSION_IS_RELEASE else v + "-beta"


def formatSubVersion(name=CLIENT_NAME, clientVersion=CLIENT_VERSION, comments=None):
    """
    The user agent advertised to peers, e.g. "/BiosCrypto:1.0.0/".

    Args:
        name (str): The client name.
        clientVersion (int): The packed client version.
        comments (list(str)): Optional. Parenthesized after the version.

    Returns:
        str: The sub-version string.
    """
    s = f"/{name}:{formatVersion(clientVersion)}"
    if comments:
        s += "(" + "; ".join(comments) + ")"
    return s + "/"
