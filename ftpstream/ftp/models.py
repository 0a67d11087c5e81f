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
ftpstream.ftp.models
"""

import collections
import re

import requests

from .settings import DEFAULT_ENCODING, DEFAULT_NEWLINE, DEFAULT_RESPONSES, MAXLINE
from .exceptions import FTPError, FTPProtocolError

_DIGITS = "0123456789"
_PASV_ADDRESS = re.compile(r"\(([^()]*)\)")


class FTPReply(object):
    """One complete server reply: the terminal line's code and every line's text.

    ``message`` is the whole reply as received (continuation lines and the
    terminal line, joined with newlines), so ``str(reply)`` is what the server
    said.
    """

    def __init__(self, code, lines):
        self.code = code
        self.lines = lines

    def __repr__(self):
        return '<FTPReply [%d]>' % self.code

    def __str__(self):
        return self.message

    @property
    def message(self):
        return "\n".join(self.lines).strip("\n")

    @property
    def reason(self):
        return DEFAULT_RESPONSES.get(self.code)

    @property
    def is_preliminary(self):
        return 100 <= self.code < 200

    @property
    def is_complete(self):
        return 200 <= self.code < 300

    @property
    def is_intermediate(self):
        return 300 <= self.code < 400

    # ftplib.FTP.getmultiline
    # ftplib.FTP.getresp
    @classmethod
    def from_file(cls, fileobj, encoding=DEFAULT_ENCODING):
        """
        from_file() - read exactly one reply from a buffered control stream.

        Lines are read until one whose three digit code is followed by a
        space. Anything read past that line stays in ``fileobj`` for the
        next reply, so the same buffered reader must be used for the whole
        life of the control connection.
        """
        lines = []
        while True:
            line = cls.readline_from_file(fileobj, encoding)
            code = line[:3]
            if len(code) != 3 or any(c not in _DIGITS for c in code):
                raise FTPProtocolError("malformed reply line %r" % line)
            lines.append(line)
            if line[3:4] == ' ':
                return cls(int(code), lines)

    # ftplib.FTP.getline
    @staticmethod
    def readline_from_file(fileobj, encoding=DEFAULT_ENCODING):
        line = fileobj.readline(MAXLINE + 1)
        if len(line) > MAXLINE:
            raise FTPProtocolError("got more than %d bytes in a reply line" % MAXLINE)
        if not line.endswith(b"\n"):
            raise EOFError("control connection closed before a complete reply")
        line = line.decode(encoding, 'replace')
        if line[-2:] == DEFAULT_NEWLINE:
            line = line[:-2]
        elif line[-1:] in DEFAULT_NEWLINE:
            line = line[:-1]
        return line


# ftplib.parse227
def parse227(message):
    """Return ``(host, port)`` from a 227 reply's ``(h1,h2,h3,h4,p1,p2)`` group.

    Exactly six comma separated decimal numbers in the range 0-255 are
    accepted; anything else is a protocol error.
    """
    match = _PASV_ADDRESS.search(message)
    if match is None:
        raise FTPProtocolError("invalid PASV response format %r" % message)
    fields = [field.strip() for field in match.group(1).split(',')]
    if len(fields) != 6:
        raise FTPProtocolError("invalid PASV response format %r" % message)
    numbers = []
    for field in fields:
        if not field or any(c not in _DIGITS for c in field):
            raise FTPProtocolError("invalid PASV response format %r" % message)
        number = int(field)
        if number > 255:
            raise FTPProtocolError("invalid PASV response format %r" % message)
        numbers.append(number)
    host = '.'.join(str(n) for n in numbers[:4])
    port = numbers[4] * 256 + numbers[5]
    return host, port


class DirectoryEntry(collections.namedtuple('DirectoryEntry', 'name directory link')):
    """A single ``ls -l`` style listing line reduced to name and kind."""

    __slots__ = ()

    @property
    def file(self):
        return not (self.directory or self.link)

    @classmethod
    def from_line(cls, line):
        if isinstance(line, bytes):
            line = line.decode(DEFAULT_ENCODING, 'replace')
        parts = line.split()
        if not parts:
            return None
        mode = parts[0]
        directory = mode.startswith('d')
        link = mode.startswith('l')
        # "name -> target"
        if link and len(parts) >= 3:
            name = parts[-3]
        else:
            name = parts[-1]
        return cls(name.strip(DEFAULT_NEWLINE), directory, link)


class FTPResponse(requests.Response):
    """A :class:`requests.Response` for an FTP transfer.

    ``status_code`` is the FTP reply code of the transfer (226 when the
    body was fully received, the failing code otherwise).
    """

    def __init__(self):
        super(FTPResponse, self).__init__()
        self.entries = None
        self.control = None

    def close(self):
        control, self.control = self.control, None
        try:
            if self.raw is not None and not self.raw.closed:
                self.raw.close()
        finally:
            if control is not None:
                control.close()

    @property
    def ok(self):
        try:
            self.raise_for_status()
        except FTPError:
            return False
        return True

    @property
    def ok1(self):
        return 100 <= self.status_code < 200

    @property
    def ok2(self):
        return 200 <= self.status_code < 300

    @property
    def ok3(self):
        return 300 <= self.status_code < 400

    def raise_for_status(self):
        ftp_error_msg = ''

        if 400 <= self.status_code < 500:
            ftp_error_msg = '%s Transient Error: %s' % (self.status_code, self.reason)

        elif 500 <= self.status_code < 600:
            ftp_error_msg = '%s Permanent Error: %s' % (self.status_code, self.reason)

        if ftp_error_msg:
            raise FTPError(ftp_error_msg, response=self)
