#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ****************************************************************************************************************************************************
# * BSD 3-Clause License
# *
# * Copyright (c) 2025, Mana Battery
# * All rights reserved.
# *
# * Redistribution and use in source and binary forms, with or without modification, are permitted provided that the following conditions are met:
# *
# * 1. Redistributions of source code must retain the above copyright notice, this list of conditions and the following disclaimer.
# * 2. Redistributions in binary form must reproduce the above copyright notice, this list of conditions and the following disclaimer in the
# *    documentation and/or other materials provided with the distribution.
# * 3. Neither the name of the copyright holder nor the names of its contributors may be used to endorse or promote products derived from this
# *    software without specific prior written permission.
# *
# * THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO,
# * THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR
# * CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO,
# * PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
# * LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
# * EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
# ****************************************************************************************************************************************************
"""Minimal substring scanner for loosely JSON-shaped configuration files.

gwrap only ever needs scalar string fields out of its two configuration
files, and must keep working when those files are hand-edited into invalid
JSON. Instead of a structural parser it uses a fixed scanning contract:

1. Find the literal token ``"<key>"`` (quotes included).
2. Starting immediately after that token, the next ``"`` opens the value.
3. The next ``"`` after that closes it; the text in between is the value.

Consequences of the contract:

- Nesting is ignored; a key is found anywhere in the text.
- The first occurrence wins for single-value lookups.
- Escaped quotes are not understood; ``\\"`` ends the value.
- A value equal to the key is itself an occurrence of the key, so
  iter_quoted_values() will also take the quoted string after it.
- A key followed by a non-string value (number, list, object) yields
  the next quoted string in the file, whatever it is.
"""

import logging
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

QUOTE = '"'


def _key_token(key: str) -> str:
    return f"{QUOTE}{key}{QUOTE}"


def _quoted_after(text: str, pos: int) -> Optional[str]:
    """Return the first quoted string starting at or after pos."""
    start = text.find(QUOTE, pos)
    if start == -1:
        return None
    end = text.find(QUOTE, start + 1)
    if end == -1:
        return None
    return text[start + 1 : end]


def find_quoted_value(text: str, key: str, start: int = 0) -> Optional[str]:
    """Find the value of the first occurrence of key at or after start.

    Args:
        text: Raw file text
        key: Field name without quotes (e.g., "gpp_path")
        start: Offset to begin searching for the key

    Returns:
        The quoted string following the key, or None if the key is absent
        or no complete quoted string follows it
    """
    token = _key_token(key)
    pos = text.find(token, start)
    if pos == -1:
        return None
    return _quoted_after(text, pos + len(token))


def iter_quoted_values(text: str, key: str) -> Iterator[str]:
    """Yield the value following every occurrence of key, in text order.

    After each occurrence the key search resumes one character past the
    start of that occurrence, so overlapping occurrences are all visited.

    Args:
        text: Raw file text
        key: Field name without quotes (e.g., "include")

    Yields:
        One string per occurrence that has a complete quoted string after it
    """
    token = _key_token(key)
    pos = text.find(token)
    while pos != -1:
        value = _quoted_after(text, pos + len(token))
        if value is not None:
            yield value
        pos = text.find(token, pos + 1)


def read_joined_text(path: str) -> Optional[str]:
    """Read a text file with its line breaks removed.

    Lines are concatenated without separators, so a quoted value broken
    across lines is read as one string.

    Args:
        path: File to read

    Returns:
        File content, or None if the file cannot be read
    """
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return f.read().replace("\n", "")
    except OSError as e:
        logger.debug("Cannot read %s: %s", path, e)
        return None
