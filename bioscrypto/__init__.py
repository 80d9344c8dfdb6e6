"""
Copyright (c) 2019-2020, the Decred developers
Copyright (c) 2020, the BiosCrypto developers
See LICENSE for details
"""


class BiosError(Exception):
    pass
