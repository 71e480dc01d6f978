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
"""Include directory discovery for packages under the dependency directory.

Two mutually exclusive modes, selected by whether the package manifest
exists:

- manifest mode: every "include" field of the manifest, verbatim, in file
  order (duplicates kept)
- scan mode: every immediate subdirectory of the dependency directory that
  has an include folder, as <modules_dir>/<package>/<include_subdir>

Neither mode raises; the worst case is an empty list.
"""

import os
import logging
from typing import List

from .constants import INCLUDE_KEY
from .loose_json import iter_quoted_values, read_joined_text
from .wrapper_types import GwrapConfig

logger = logging.getLogger(__name__)


def format_include_flag(path: str) -> str:
    """Render an include directory as a single compiler argument."""
    return f"-I{path}"


def parse_manifest_includes(text: str) -> List[str]:
    """Extract include flags from manifest text.

    Empty values are skipped because a bare -I would consume the next
    compiler argument as its directory.

    Args:
        text: Raw manifest text

    Returns:
        List of -I flags in manifest order
    """
    flags = []
    for value in iter_quoted_values(text, INCLUDE_KEY):
        if not value:
            logger.debug("Skipping empty %s value", INCLUDE_KEY)
            continue
        flags.append(format_include_flag(value))
    return flags


def scan_module_includes(modules_dir: str, include_subdir: str, sort: bool = True) -> List[str]:
    """Find per-package include folders directly under modules_dir.

    Args:
        modules_dir: Dependency directory
        include_subdir: Include folder name looked for in each package
        sort: Sort packages by name; otherwise keep filesystem order,
            which is platform dependent

    Returns:
        List of -I flags, one per package with an include folder
    """
    try:
        with os.scandir(modules_dir) as it:
            entries = [entry for entry in it if entry.is_dir()]
    except OSError as e:
        logger.warning("Cannot scan %s: %s", modules_dir, e)
        return []

    if sort:
        entries.sort(key=lambda entry: entry.name)

    flags = []
    for entry in entries:
        include_dir = os.path.join(modules_dir, entry.name, include_subdir)
        if os.path.exists(include_dir):
            flags.append(format_include_flag(include_dir))
        else:
            logger.debug("Package %s has no %s folder", entry.name, include_subdir)
    return flags


def resolve_includes(config: GwrapConfig) -> List[str]:
    """Compute the include flags to inject into a compilation.

    Args:
        config: Wrapper configuration

    Returns:
        Ordered list of -I flags (possibly empty)
    """
    if not os.path.exists(config.modules_dir):
        logger.debug("No %s directory, no extra includes", config.modules_dir)
        return []

    if not os.path.exists(config.package_manifest):
        flags = scan_module_includes(config.modules_dir, config.include_subdir, config.sort_scan_results)
        logger.debug("Scanned %s: %d include folder(s)", config.modules_dir, len(flags))
        return flags

    content = read_joined_text(config.package_manifest)
    if content is None:
        logger.warning("Cannot read %s, no extra includes", config.package_manifest)
        return []

    flags = parse_manifest_includes(content)
    logger.debug("Read %d include path(s) from %s", len(flags), config.package_manifest)
    return flags
