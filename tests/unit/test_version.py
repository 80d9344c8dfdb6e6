"""
Copyright (c) 2020, the BiosCrypto developers
See LICENSE for details
"""

from bioscrypto import version


def test_formatVersion():
    assert version.CLIENT_VERSION == 1000000
    assert version.formatVersion(version.CLIENT_VERSION) == "1.0.0"
    assert version.formatVersion(1000100) == "1.0.1"
    assert version.formatVersion(1020304) == "1.2.3.4"
    assert version.formatVersion(12345678) == "12.34.56.78"


def test_formatFullVersion(monkeypatch):
    assert version.formatFullVersion() == "v1.0.0.0-beta"
    monkeypatch.setattr(version, "CLIENT_VERSION_IS_RELEASE", True)
    assert version.formatFullVersion() == "v1.0.0.0"
    monkeypatch.setattr(version, "CLIENT_VERSION_BUILD", 3)
    assert version.formatFullVersion() == "v1.0.0.3"


def test_formatSubVersion():
    assert version.formatSubVersion() == "/BiosCrypto:1.0.0/"
    assert (
        version.formatSubVersion(comments=["linux", "test"])
        == "/BiosCrypto:1.0.0(linux; test)/"
    )
    assert version.formatSubVersion("Other", 2010000) == "/Other:2.1.0/"
