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
"""Compiler path resolution from the gwrap tool configuration file."""

import os
import logging

from .constants import GPP_PATH_KEY
from .loose_json import find_quoted_value, read_joined_text
from .wrapper_types import GwrapConfig

logger = logging.getLogger(__name__)


def resolve_tool_path(config: GwrapConfig) -> str:
    """Resolve the compiler executable to forward to.

    The first "gpp_path" value in config.config_file is used when it names
    an existing file. Any other outcome (missing file, unreadable file,
    missing key, malformed quotes, empty or nonexistent path) falls back to
    config.default_tool. Never raises.

    Args:
        config: Wrapper configuration

    Returns:
        Configured compiler path verbatim, or the default tool name
    """
    if not os.path.exists(config.config_file):
        logger.debug("No %s, using %s", config.config_file, config.default_tool)
        return config.default_tool

    content = read_joined_text(config.config_file)
    if content is None:
        return config.default_tool

    gpp_path = find_quoted_value(content, GPP_PATH_KEY)
    if gpp_path is None:
        logger.debug("No usable %s in %s", GPP_PATH_KEY, config.config_file)
        return config.default_tool

    if gpp_path and os.path.exists(gpp_path):
        logger.debug("Using configured compiler %s", gpp_path)
        return gpp_path

    logger.debug("Configured compiler '%s' does not exist, using %s", gpp_path, config.default_tool)
    return config.default_tool
