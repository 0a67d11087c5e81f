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
ftpstream.ftp.exceptions

Transport failures are not wrapped: socket errors surface as ``OSError``
and a control stream that ends mid-reply raises ``EOFError``.
"""

from requests.exceptions import RequestException


class FTPError(RequestException):
    """Base class for everything this package raises."""


class FTPProtocolError(FTPError):
    """The server sent something that does not follow the reply grammar."""


class FTPReplyError(FTPError):
    """A well-formed reply whose code was not one the caller accepts.

    The reply is kept whole so callers can branch on ``code`` and show
    ``message`` verbatim.
    """

    def __init__(self, reply, *args, **kwargs):
        self.reply = reply
        super(FTPReplyError, self).__init__(reply.message, *args, **kwargs)

    @property
    def code(self):
        return self.reply.code

    @property
    def message(self):
        return self.reply.message

    @staticmethod
    def for_reply(reply, **kwargs):
        if 400 <= reply.code < 500:
            return FTPTemporaryError(reply, **kwargs)
        if 500 <= reply.code < 600:
            return FTPPermanentError(reply, **kwargs)
        return FTPReplyError(reply, **kwargs)


class FTPTemporaryError(FTPReplyError):
    """4xx: transient negative completion."""


class FTPPermanentError(FTPReplyError):
    """5xx: permanent negative completion."""


class FTPTransferError(FTPReplyError):
    """The completion reply after a data transfer was not 226."""
