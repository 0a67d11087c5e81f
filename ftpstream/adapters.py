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
ftpstream.adapters
"""

import logging
import socket

from requests.adapters import BaseAdapter
from requests.compat import unquote, urlparse
from requests.exceptions import ConnectionError, InvalidURL, Timeout

from .ftp.connection import FTPConnection
from .ftp.exceptions import FTPError, FTPReplyError
from .ftp.models import DirectoryEntry, FTPResponse
from .ftp.settings import CODE_TRANSFER_COMPLETE, DEFAULT_PORT

log = logging.getLogger(__name__)


class FTPAdapter(BaseAdapter):
    """The built-in FTP Adapter.

    Lets a requests session GET ``ftp://`` urls. A path ending in ``/`` is
    listed (the body is the raw LIST output and ``response.entries`` the
    parsed entries), anything else is retrieved in binary mode. Every request
    gets its own control connection, which is closed with the response.

    There are no retries: a failed connect or login is reported once.

    Usage::

      >>> import requests
      >>> import ftpstream
      >>> s = requests.Session()
      >>> s.mount('ftp://', ftpstream.adapters.FTPAdapter())
      >>> s.get('ftp://ftp.example.org/pub/README').content
    """
    __attrs__ = ['conn_cls']

    def __init__(self, conn_cls=None):
        self.conn_cls = conn_cls or FTPConnection
        super(FTPAdapter, self).__init__()

    def close(self):
        """Disposes of any internal state.
        """
        pass

    def get_connection(self, url, timeout=None):
        parsed = urlparse(url)
        if not parsed.hostname:
            raise InvalidURL("no host in ftp url %r" % url)
        try:
            port = parsed.port or DEFAULT_PORT
        except ValueError as e:
            raise InvalidURL(e)
        return self.conn_cls(host=parsed.hostname,
                             port=port,
                             user=unquote(parsed.username or ''),
                             passwd=unquote(parsed.password or ''),
                             timeout=timeout)

    def build_response(self, req, reply, raw=None):
        response = FTPResponse()
        response.status_code = reply.code
        response.reason = reply.message
        response.url = req.url
        response.request = req
        response.raw = raw
        response.encoding = 'utf-8'
        return response

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        """Sends PreparedRequest object. Returns Response object.

        :param request: The :class:`PreparedRequest <PreparedRequest>` being sent.
        :param stream: (optional) Whether to stream the request content.
        :param timeout: (optional) The timeout on the request, applied to
            every socket of the transfer. For a ``(connect, read)`` tuple the
            read value is used when given.
        :param verify: (optional) Ignored, ftp is clear text.
        :param cert: (optional) Ignored.
        :param proxies: (optional) Ignored.
        """
        if request.method not in ('GET',):
            raise FTPError("unsupported method %r for ftp" % request.method, request=request)
        if isinstance(timeout, tuple):
            connect_timeout, read_timeout = timeout
            timeout = read_timeout if read_timeout is not None else connect_timeout

        conn = self.get_connection(request.url, timeout=timeout)
        path = unquote(urlparse(request.url).path) or '/'
        listing = path.endswith('/')

        try:
            conn.connect()
            conn.login()
            if listing:
                data = conn.transfercmd('LIST %s' % path)
            else:
                data = conn.retr(path)
        except FTPReplyError as e:
            conn.close()
            return self.build_response(request, e.reply)
        except FTPError:
            conn.close()
            raise
        except socket.timeout as e:
            conn.close()
            raise Timeout(e, request=request)
        except (OSError, EOFError) as e:
            conn.close()
            raise ConnectionError(e, request=request)

        r = self.build_response(request, data.reply, raw=data)
        r.control = conn
        if stream:
            return r

        try:
            r.content
            data.close()
            r.status_code = data.completion.code
            r.reason = data.completion.message
        except FTPReplyError as e:
            r.status_code = e.code
            r.reason = e.message
        finally:
            r.close()

        if listing and r.status_code == CODE_TRANSFER_COMPLETE:
            lines = r.content.decode(conn.encoding, 'replace').splitlines()
            r.entries = [e for e in map(DirectoryEntry.from_line, lines) if e is not None]
        log.debug("%s %s -> %s", request.method, request.url, r.status_code)
        return r
