#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# ftpstream
# Copyright (c) 2014, Andrew Robbins, All rights reserved.
# 
# This library ("it") is free software; it is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; you can redistribute it and/or modify it under the terms of the
# GNU Lesser General Public License ("LGPLv3") <https://www.gnu.org/licenses/lgpl.html>.

DEFAULT_PORT = 21
DEFAULT_NEWLINE = "\r\n"
DEFAULT_ENCODING = "utf-8"
DEFAULT_TIMEOUT = None
DEFAULT_BUFFER_SIZE = 8192
DEFAULT_TRUST_PASV_HOST = False

DEFAULT_USER = "anonymous"
DEFAULT_ANONYMOUS_PASSWORD = "anonymous@"

# ftplib.MAXLINE
MAXLINE = 8192

CODE_DATA_ALREADY_OPEN = 125
CODE_DATA_OPENING = 150
CODE_COMMAND_OK = 200
CODE_COMMAND_SUPERFLUOUS = 202
CODE_SERVICE_READY = 220
CODE_SERVICE_CLOSING = 221
CODE_TRANSFER_COMPLETE = 226
CODE_PASSIVE_MODE = 227
CODE_LOGGED_IN = 230
CODE_NEED_PASSWORD = 331
CODE_NEED_ACCOUNT = 332

DEFAULT_RESPONSES = {
    110: 'Restart marker replay.',
    120: 'Service ready in nnn minutes.',
    125: 'Data connection already open; transfer starting.',
    150: 'File status okay; about to open data connection.',
    200: 'Command okay.',
    202: 'Command not implemented, superfluous at this site.',
    211: 'System status.',
    212: 'Directory status.',
    213: 'File status.',
    214: 'Help message.',
    215: 'NAME system type.',
    220: 'Service ready for new user.',
    221: 'Service closing control connection.',
    225: 'Data connection open; no transfer in progress.',
    226: 'Closing data connection.',
    227: 'Entering Passive Mode.',
    230: 'User logged in, proceed.',
    250: 'Requested file action okay, completed.',
    257: '"PATHNAME" created.',
    331: 'User name okay, need password.',
    332: 'Need account for login.',
    421: 'Service not available, closing control connection.',
    425: "Can't open data connection.",
    426: 'Connection closed; transfer aborted.',
    450: 'Requested file action not taken.',
    451: 'Requested action aborted: local error in processing.',
    500: 'Syntax error, command unrecognized.',
    501: 'Syntax error in parameters or arguments.',
    502: 'Command not implemented.',
    504: 'Command not implemented for that parameter.',
    530: 'Not logged in.',
    550: 'Requested action not taken.',
}
