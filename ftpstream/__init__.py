#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# ftpstream
# Copyright (c) 2014, Andrew Robbins, All rights reserved.
#
# This library ("it") is free software; it is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; you can redistribute it and/or modify it under the terms of the
# GNU Lesser General Public License ("LGPLv3") <https://www.gnu.org/licenses/lgpl.html>.
"""
ftpstream - a passive mode FTP client with a requests adapter.
"""

__version__ = '0.2.0'

from .ftp import (
    DirectoryEntry,
    FTPConnection,
    FTPDataStream,
    FTPError,
    FTPPermanentError,
    FTPProtocolError,
    FTPReply,
    FTPReplyError,
    FTPResponse,
    FTPTemporaryError,
    FTPTransferError,
)
from .adapters import FTPAdapter
from .sessions import FTPSession
