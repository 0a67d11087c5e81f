#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# ftpstream
# Copyright (c) 2014, Andrew Robbins, All rights reserved.
#
# This library ("it") is free software; it is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; you can redistribute it and/or modify it under the terms of the
# GNU Lesser General Public License ("LGPLv3") <https://www.gnu.org/licenses/lgpl.html>.

import contextlib
import os
import shutil
import socket
import tempfile
import threading
import unittest

from pyftpdlib.authorizers import DummyAuthorizer
from pyftpdlib.handlers import FTPHandler
from pyftpdlib.servers import FTPServer

from ftpstream.ftp.connection import FTPConnection

# Attempt to use IP rather than hostname (test suite will run a lot faster)
try:
    HOST = socket.gethostbyname("localhost")
except OSError:
    HOST = "localhost"

USER = "user"
PASSWD = "12345"
GLOBAL_TIMEOUT = 5
POSIX = os.name == "posix"

LISTING = (
    b"drwxr-xr-x 2 u g 4096 Jan 1 00:00 pub\r\n"
    b"lrwxrwxrwx 1 u g 7 Jan 1 00:00 cur -> current\r\n"
    b"-rw-r--r-- 1 u g 12 Jan 1 00:00 README\r\n"
)
PAYLOAD = b"\x00\x01binary\r\npayload\xff" * 64

DEFAULT_REPLIES = {
    'USER': b"331 Password required.\r\n",
    'PASS': b"230 Logged in.\r\n",
    'TYPE': b"200 Type set to I.\r\n",
    'NOOP': b"200 NOOP ok.\r\n",
    'QUIT': b"221 Goodbye.\r\n",
}


class ScriptedFTPServer(threading.Thread):
    """A single-client FTP server that follows a fixed script.

    Replies can be overridden per command verb, which is how tests put the
    client in front of refusals and broken transfers. Every line received
    is recorded in ``commands`` and every accepted data connection's peer
    in ``data_peers``.
    """
    daemon = True

    def __init__(self, greeting=b"220 Scripted server ready.\r\n", replies=None,
                 listing=LISTING, payload=PAYLOAD,
                 completion=b"226 Transfer complete.\r\n", pasv_host="10,0,0,1"):
        super(ScriptedFTPServer, self).__init__(name='scripted-ftpd')
        self.greeting = greeting
        self.replies = dict(DEFAULT_REPLIES)
        self.replies.update(replies or {})
        self.listing = listing
        self.payload = payload
        self.completion = completion
        self.pasv_host = pasv_host
        self.commands = []
        self.data_peers = []

        self.control = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.control.bind((HOST, 0))
        self.control.listen(1)
        self.control.settimeout(GLOBAL_TIMEOUT)
        self.data = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.data.bind((HOST, 0))
        self.data.listen(1)
        self.data.settimeout(GLOBAL_TIMEOUT)
        self.host, self.port = self.control.getsockname()[:2]
        self.data_port = self.data.getsockname()[1]

    @property
    def verbs(self):
        return [line.split(' ', 1)[0].upper() for line in self.commands]

    def run(self):
        try:
            conn, _ = self.control.accept()
        except OSError:
            return
        with contextlib.closing(conn), contextlib.closing(conn.makefile('rb')) as f:
            try:
                conn.sendall(self.greeting)
                while True:
                    line = f.readline()
                    if not line:
                        break
                    line = line.decode('utf-8').rstrip('\r\n')
                    self.commands.append(line)
                    if not self.handle(conn, line):
                        break
            except OSError:
                pass

    def handle(self, conn, line):
        verb = line.split(' ', 1)[0].upper()
        if verb in self.replies:
            conn.sendall(self.replies[verb])
            return verb != 'QUIT'
        if verb == 'PASV':
            conn.sendall(b"227 Entering Passive Mode (%s,%d,%d).\r\n" % (
                self.pasv_host.encode('ascii'), self.data_port // 256, self.data_port % 256))
        elif verb in ('LIST', 'RETR', 'NLST'):
            conn.sendall(b"150 Opening data connection.\r\n")
            data, peer = self.data.accept()
            self.data_peers.append(peer)
            with contextlib.closing(data):
                data.sendall(self.listing if verb != 'RETR' else self.payload)
            conn.sendall(self.completion)
        else:
            conn.sendall(b"502 Command not implemented.\r\n")
        return True

    def stop(self):
        self.control.close()
        self.data.close()
        self.join(GLOBAL_TIMEOUT)


class ThreadedTestFTPd(threading.Thread):
    """A threaded pyftpdlib server used for running tests.
    This wraps the polling loop into a thread.
    The instance returned can be start()ed and stop()ped.
    """
    handler = FTPHandler
    server_class = FTPServer
    poll_interval = 0.001
    # Makes the thread stop on interpreter exit.
    daemon = True

    def __init__(self, homedir, addr=None):
        super(ThreadedTestFTPd, self).__init__(name='test-ftpd')
        addr = (HOST, 0) if addr is None else addr
        authorizer = DummyAuthorizer()
        authorizer.add_user(USER, PASSWD, homedir, perm="elr")
        authorizer.add_anonymous(homedir)
        handler = type('TestFTPHandler', (self.handler,), {})
        handler.authorizer = authorizer
        handler.auth_failed_timeout = 0.001
        self.server = self.server_class(addr, handler)
        self.host, self.port = self.server.socket.getsockname()[:2]

        self.lock = threading.Lock()
        self._stop_flag = False
        self._event_stop = threading.Event()

    def run(self):
        try:
            while not self._stop_flag:
                with self.lock:
                    self.server.serve_forever(timeout=self.poll_interval,
                                              blocking=False)
        finally:
            self._event_stop.set()

    def stop(self):
        self._stop_flag = True  # signal the main loop to exit
        self._event_stop.wait()
        self.server.close_all()
        self.join()


class FtpstreamTestCase(unittest.TestCase):
    """All test classes inherit from this one."""

    def scripted_server(self, **kwargs):
        server = ScriptedFTPServer(**kwargs)
        server.start()
        self.addCleanup(server.stop)
        return server

    def connection(self, server, **kwargs):
        kwargs.setdefault('timeout', GLOBAL_TIMEOUT)
        conn = FTPConnection(server.host, server.port, **kwargs)
        self.addCleanup(conn.close)
        return conn

    def make_tempdir(self):
        path = os.path.realpath(tempfile.mkdtemp(prefix='ftpstream-'))
        self.addCleanup(shutil.rmtree, path, True)
        return path
