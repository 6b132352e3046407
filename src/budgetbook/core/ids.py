#!/usr/bin/env python3
"""Identifier generation for templates and month entries."""

import itertools
import secrets
import time

_counter = itertools.count(1)


def create_id(prefix: str) -> str:
    """
    Create an identifier unique within the process lifetime.

    Format: ``<prefix>_<epoch-millis>_<sequence><random>``, e.g. ``tpl_1767225600000_1a3f9c2e1``.
    """
    return f"{prefix}_{int(time.time() * 1000)}_{next(_counter)}{secrets.token_hex(4)}"
