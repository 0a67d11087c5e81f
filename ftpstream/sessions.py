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
ftpstream.sessions
"""

import requests

from .adapters import FTPAdapter
from .ftp.exceptions import FTPError
from .ftp.settings import CODE_TRANSFER_COMPLETE


class FTPSession(requests.Session):
    """A Requests session that also speaks ``ftp://``.

    Basic Usage::

      >>> import ftpstream
      >>> s = ftpstream.FTPSession()
      >>> s.get('ftp://ftp.example.org/pub/README').content
      >>> [e.name for e in s.list('ftp://ftp.example.org/pub/')]
    """

    def __init__(self, adapter=None):
        super(FTPSession, self).__init__()
        self.mount('ftp://', adapter or FTPAdapter())

    # ftplib.FTP.dir
    def list(self, url, **kwargs):
        """Sends a LIST request. Returns a list of :class:`DirectoryEntry`.

        :param url: URL of the directory, a trailing ``/`` is added if missing.
        :param \\*\\*kwargs: Optional arguments that ``request`` takes.
        """
        if not url.endswith('/'):
            url += '/'
        resp = self.get(url, **kwargs)
        resp.raise_for_status()
        if resp.status_code != CODE_TRANSFER_COMPLETE:
            raise FTPError('%s listing not completed: %s' % (resp.status_code, resp.reason),
                           response=resp)
        return resp.entries
