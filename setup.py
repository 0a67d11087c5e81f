#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# ftpstream
# Copyright (c) 2014, Andrew Robbins, All rights reserved.
#
# This library ("it") is free software; it is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; you can redistribute it and/or modify it under the terms of the
# GNU Lesser General Public License ("LGPLv3") <https://www.gnu.org/licenses/lgpl.html>.
import json
import os

from setuptools import setup

HERE = os.path.abspath(os.path.dirname(__file__))

if __name__ == '__main__':
    with open(os.path.join(HERE, "package.json")) as f:
        setup_config = json.load(f)
    with open(os.path.join(HERE, "README.md")) as f:
        long_description = f.read()
    setup(
        long_description = long_description,
        **setup_config
    )
