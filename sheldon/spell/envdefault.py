# Copyright 2025, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""
Configurable parameters via environment variables
"""

import os

USER_HOME = os.path.expanduser("~")
PACKAGE_LANG_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "lang")

SHELDON_CONFIG_DIR = os.environ.get("SHELDON_CONFIG_DIR", os.path.join(USER_HOME, ".config", "sheldon"))

SHELDON_CLIENT_CONFIG = os.environ.get("SHELDON_CLIENT_CONFIG", os.path.join(SHELDON_CONFIG_DIR, "sheldon.json"))
SHELDON_LANG_DIR = os.environ.get("SHELDON_LANG_DIR", PACKAGE_LANG_DIR)
SHELDON_LANGUAGE = os.environ.get("SHELDON_LANGUAGE", "eng")
SHELDON_LANG_URL = os.environ.get("SHELDON_LANG_URL")
