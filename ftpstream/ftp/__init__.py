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
ftpstream.ftp
"""

from .connection import FTPConnection, FTPDataStream
from .exceptions import (
    FTPError,
    FTPPermanentError,
    FTPProtocolError,
    FTPReplyError,
    FTPTemporaryError,
    FTPTransferError,
)
from .models import DirectoryEntry, FTPReply, FTPResponse, parse227
