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
ftpstream.ftp.connection
"""

import logging
import socket

from .exceptions import FTPError, FTPReplyError, FTPTransferError
from .models import DirectoryEntry, FTPReply, parse227
from .settings import (
    CODE_COMMAND_OK,
    CODE_COMMAND_SUPERFLUOUS,
    CODE_DATA_ALREADY_OPEN,
    CODE_DATA_OPENING,
    CODE_LOGGED_IN,
    CODE_NEED_ACCOUNT,
    CODE_NEED_PASSWORD,
    CODE_PASSIVE_MODE,
    CODE_SERVICE_CLOSING,
    CODE_SERVICE_READY,
    CODE_TRANSFER_COMPLETE,
    DEFAULT_ANONYMOUS_PASSWORD,
    DEFAULT_BUFFER_SIZE,
    DEFAULT_ENCODING,
    DEFAULT_NEWLINE,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    DEFAULT_TRUST_PASV_HOST,
    DEFAULT_USER,
)

log = logging.getLogger(__name__)

STATE_DISCONNECTED = 'disconnected'
STATE_CONNECTED = 'connected'
STATE_READY = 'ready'
STATE_AUTHENTICATED = 'authenticated'
STATE_CLOSED = 'closed'

PRELIMINARY_CODES = (CODE_DATA_OPENING, CODE_DATA_ALREADY_OPEN)


class FTPDataStream(object):
    """
    ftpstream.ftp.connection.FTPDataStream

    The data connection of one LIST/RETR-style transfer, readable like a
    binary file. The transfer is only finished once close() has run: it
    releases the socket and then consumes the completion reply from the
    control connection, raising FTPTransferError unless it is 226. Until
    then the owning FTPConnection must not be sent another command.
    """

    def __init__(self, connection, sock, reply):
        self.connection = connection
        self.sock = sock
        self.file = sock.makefile('rb')
        self.reply = reply
        self.completion = None
        self.closed = False

    def __repr__(self):
        return '<FTPDataStream %s>' % ('closed' if self.closed else 'open')

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def __iter__(self):
        while True:
            line = self.readline()
            if not line:
                break
            yield line

    def readable(self):
        return not self.closed

    def read(self, size=-1):
        self._check_open()
        return self.file.read(size)

    def readline(self, size=-1):
        self._check_open()
        return self.file.readline(size)

    def close(self):
        if self.closed:
            return
        self.closed = True
        try:
            try:
                self.file.close()
            finally:
                self.sock.close()
        finally:
            self.completion = self.connection._getresponse()
        if self.completion.code != CODE_TRANSFER_COMPLETE:
            raise FTPTransferError(self.completion)

    def _check_open(self):
        if self.closed:
            raise ValueError("I/O operation on closed data stream")


class FTPConnection(object):
    """
    ftpstream.ftp.connection.FTPConnection

    This represents the control channel of one FTP session.

    It has the following constants:
      - scheme (constant for each connection class)
      - port (default control port)

    It has the following configuration:
      - current host, port (where the control connection goes)
      - current user, passwd (credentials for login())
      - current timeout (deadline for every socket this connection opens)
      - current encoding (of command and reply text)
      - current logger (receives a DEBUG trace of every line sent and reply read)
      - current trust_server_pasv_host (use the 227 host instead of our own)

    It has the following readonly state:
      - current state (disconnected, connected, ready, authenticated, closed)
      - current welcome (reply read immediately after connect)

    Only one command may be outstanding at a time, and a data stream returned
    by transfercmd() must be closed before the next command is sent. Instances
    are not safe to share between threads.
    """

    scheme = 'ftp'
    host = ''
    port = DEFAULT_PORT
    bufferSize = DEFAULT_BUFFER_SIZE
    timeout = DEFAULT_TIMEOUT
    encoding = DEFAULT_ENCODING
    trust_server_pasv_host = DEFAULT_TRUST_PASV_HOST

    def __init__(self, host='', port=DEFAULT_PORT, user='', passwd='',
                 timeout=DEFAULT_TIMEOUT, encoding=DEFAULT_ENCODING, logger=None):
        self.host = host
        self.port = port
        self.user = user
        self.passwd = passwd
        self.timeout = timeout
        self.encoding = encoding
        self.logger = logger if logger is not None else log
        self.sock = None
        self.file = None
        self.welcome = None
        self.state = STATE_DISCONNECTED

    def __repr__(self):
        return '<FTPConnection %s://%s:%s [%s]>' % (self.scheme, self.host, self.port, self.state)

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def connect(self, host='', port=None):
        '''Connect to host and read the greeting. Arguments are:
         - host: hostname to connect to (string, default previous host)
         - port: port to connect to (integer, default previous port)
        '''
        if host:
            self.host = host
        if port is not None:
            self.port = port
        self.logger.debug("connecting to %s:%s", self.host, self.port)
        self.sock = socket.create_connection((self.host, self.port), self.timeout)
        self.state = STATE_CONNECTED
        try:
            # the buffered reader lives as long as the control connection
            self.file = self.sock.makefile('rb')
            self.welcome = self._getresponse()
            if self.welcome.code != CODE_SERVICE_READY:
                raise FTPReplyError.for_reply(self.welcome)
        except Exception:
            self.close()
            raise
        self.state = STATE_READY
        return self.welcome

    def login(self, user=None, passwd=None):
        '''Login, default anonymous.'''
        if user is None:
            user = self.user
        if passwd is None:
            passwd = self.passwd
        if not user:
            user = DEFAULT_USER
        if user == DEFAULT_USER and passwd in ('', '-'):
            passwd = passwd + DEFAULT_ANONYMOUS_PASSWORD
        resp = self.sendcmd('USER %s' % user,
                            CODE_LOGGED_IN, CODE_NEED_PASSWORD, CODE_NEED_ACCOUNT)
        resp = self.sendcmd('PASS %s' % passwd, CODE_LOGGED_IN, CODE_COMMAND_SUPERFLUOUS)
        self.state = STATE_AUTHENTICATED
        return resp

    # ftplib.FTP.sendcmd
    # ftplib.FTP.voidcmd
    def sendcmd(self, command, *expected):
        """Send one command and return its reply.

        Raises FTPReplyError (or its 4xx/5xx subclass) when the reply code
        is not one of ``expected``.
        """
        return self._request(command, expected)

    def _request(self, line, expected):
        self._putline(line)
        resp = self._getresponse()
        if resp.code not in expected:
            raise FTPReplyError.for_reply(resp)
        return resp

    # ftplib.FTP.putline
    def _putline(self, line):
        if '\r' in line or '\n' in line:
            raise ValueError('an illegal newline character should not be contained')
        if self.sock is None:
            raise FTPError("not connected")
        self.logger.debug('*cmd* %r', self._sanitize(line))
        self.sock.sendall((line + DEFAULT_NEWLINE).encode(self.encoding))

    # ftplib.FTP.getresp
    def _getresponse(self):
        if self.file is None:
            raise FTPError("not connected")
        resp = FTPReply.from_file(self.file, self.encoding)
        self.logger.debug('*resp* %r', resp.message)
        return resp

    # ftplib.FTP.sanitize
    def _sanitize(self, line):
        if line[:5] in ('pass ', 'PASS '):
            return line[:5] + '*' * len(line[5:])
        return line

    # ftplib.FTP.makepasv
    def makepasv(self):
        '''Send PASV and return the (host, port) the data connection should use.'''
        resp = self._request('PASV', (CODE_PASSIVE_MODE,))
        untrusted_host, port = parse227(resp.message)
        if self.trust_server_pasv_host:
            host = untrusted_host
        else:
            # servers behind NAT advertise addresses we cannot reach
            host = self.host
        return host, port

    # ftplib.FTP.ntransfercmd
    # ftplib.FTP.transfercmd
    def transfercmd(self, command, expected=PRELIMINARY_CODES):
        """Open a passive data connection and start ``command`` on it.

        Returns an open :class:`FTPDataStream`. If the command is refused
        the data socket is closed before the error propagates.
        """
        host, port = self.makepasv()
        self.logger.debug("opening data connection to %s:%s", host, port)
        sock = socket.create_connection((host, port), self.timeout)
        try:
            resp = self._request(command, expected)
        except Exception:
            sock.close()
            raise
        return FTPDataStream(self, sock, resp)

    def binary(self):
        '''Switch to image (binary) representation type.'''
        return self.sendcmd('TYPE I', CODE_COMMAND_OK)

    def list(self, path=''):
        """Return the entries of a LIST as :class:`DirectoryEntry` objects.

        The listing is read to the end and the completion reply checked
        before anything is returned.
        """
        command = 'LIST %s' % path if path else 'LIST'
        entries = []
        with self.transfercmd(command) as stream:
            for line in stream:
                entry = DirectoryEntry.from_line(line.decode(self.encoding, 'replace'))
                if entry is not None:
                    entries.append(entry)
        return entries

    def retr(self, path):
        """Start a binary download of ``path`` and return the data stream.

        The caller reads it and then closes it; close() raises if the
        server does not confirm the transfer with 226.
        """
        self.binary()
        return self.transfercmd('RETR %s' % path)

    def quit(self):
        '''Say goodbye to the server and close the connection.'''
        try:
            resp = self.sendcmd('QUIT', CODE_SERVICE_CLOSING)
        finally:
            self.close()
        return resp

    def close(self):
        '''Close the control connection without telling the server.'''
        self.logger.debug("closing connection to %s:%s", self.host, self.port)
        file, self.file = self.file, None
        sock, self.sock = self.sock, None
        try:
            if file is not None:
                file.close()
        finally:
            if sock is not None:
                sock.close()
        self.state = STATE_CLOSED
