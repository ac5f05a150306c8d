#!/usr/bin/env python

# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- encoding: utf-8 -*-

from setuptools import find_packages
from setuptools import setup

setup(
    name="keyhint",
    version="0.0.0",
    license="GPL-3.0-or-later",
    description="Key event core for a word-hinting keyboard input method",
    long_description="Turns raw key events into forwarded keys, a word hint buffer with candidates, or committed text.",
    packages=find_packages("src"),
    package_dir={"": "src"},
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        # complete classifier list: http://pypi.python.org/pypi?%3Aaction=list_classifiers
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: Implementation :: CPython",
        "Topic :: Text Processing :: Linguistic",
    ],
    python_requires=">=3.10",
    install_requires=[
        "attrs",
        "cattrs>=22.1.0",
        "msgspec",
        "pygtrie>=2.4.2",
        "timeflake>=0.4.0",
        "trio>=0.20.0",
    ],
    tests_require=["pytest>=6.2.4", "pytest-trio"],
    extras_require={
        "test": ["pytest>=6.2.4", "pytest-trio"],
    },
    entry_points={
        "console_scripts": [
            "keyhint-replay=keyhint.app:main",
        ],
    },
)
