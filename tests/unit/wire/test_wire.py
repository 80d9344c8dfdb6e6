"""
Copyright (c) 2019-2020, the Decred developers
Copyright (c) 2020, the BiosCrypto developers
See LICENSE for details
"""

import pytest

from bioscrypto import BiosError
from bioscrypto.util.encode import ByteArray
from bioscrypto.wire import wire


class TestWire:
    # fmt: off
    data = (
        (0,                  [0x00]),
        (0xFC,               [0xFC]),
        (0xFD,               [0xFD, 0xFD, 0x0]),
        (wire.MaxUint16,     [0xFD, 0xFF, 0xFF]),
        (wire.MaxUint16 + 1, [0xFE, 0x0,  0x0,  0x1,  0x0]),
        (wire.MaxUint32,     [0xFE, 0xFF, 0xFF, 0xFF, 0xFF]),
        (wire.MaxUint32 + 1, [0xFF, 0x0,  0x0,  0x0,  0x0,  0x1,  0x0,  0x0,  0x0]),
        (wire.MaxUint64,     [0xFF, 0xFF, 0xFF, 0xFF, 0xFF, 0xFF, 0xFF, 0xFF, 0xFF]),
    )
    # fmt: on

    def test_write_var_int(self, prepareLogger):
        for val, bytes_ in self.data:
            from_val = wire.writeVarInt(val)
            from_bytes = ByteArray(bytes_)
            assert from_val == from_bytes
            assert wire.varIntSerializeSize(val) == len(bytes_)
            val_from_bytes = wire.readVarInt(from_bytes)
            assert val_from_bytes == val
            assert len(from_bytes) == 0
        with pytest.raises(BiosError):
            wire.writeVarInt(wire.MaxUint64 + 1)
        with pytest.raises(BiosError):
            wire.writeVarInt(-1)

    def test_read_var_int(self, prepareLogger):
        assert wire.readVarInt(ByteArray([0xFC])) == 0xFC
        # Non-canonical encodings.
        with pytest.raises(BiosError):
            wire.readVarInt(ByteArray([0xFE, 0xFF, 0xFF, 0x0, 0x0]))
        with pytest.raises(BiosError):
            wire.readVarInt(ByteArray([0xFD, 0xFC, 0x0]))
        # Truncated.
        with pytest.raises(BiosError):
            wire.readVarInt(ByteArray([0xFD, 0x01]))

    def test_var_string(self):
        b = wire.writeVarString("BiosCrypto")
        assert b == ByteArray([10]) + b"BiosCrypto"
        assert wire.readVarString(b) == "BiosCrypto"
        assert len(b) == 0

        assert wire.writeVarString("") == ByteArray([0])

        b = wire.writeVarBytes(bytes(300))
        assert b[:3] == ByteArray([0xFD, 0x2C, 0x01])
        assert wire.readVarBytes(b, 300, "data") == bytes(300)

        with pytest.raises(BiosError):
            wire.readVarBytes(wire.writeVarBytes(bytes(10)), 9, "data")
