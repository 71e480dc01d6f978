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
"""Type definitions for gwrap.

This module contains the dataclasses passed through the resolution and
dispatch functions. All well-known names live in GwrapConfig so that nothing
reads implicit global state.
"""

import os
from typing import Tuple, Union
from dataclasses import dataclass, field

from .constants import (
    TOOL_CONFIG_FILE,
    PACKAGE_MANIFEST_FILE,
    MODULES_DIR,
    INCLUDE_SUBDIR,
    DEFAULT_TOOL,
    CONFIG_SCRIPT,
    INSTALL_SCRIPT,
    UPDATE_SCRIPT,
    CONFIG_PARAMS,
    INSTALL_PARAMS,
    REBUILD_HINT,
)


@dataclass
class HelperScript:
    """A PowerShell helper script and the named parameters it accepts.

    Attributes:
        path: Script file path handed to PowerShell's -File option
        params: Parameter names in positional order (e.g., ("Action", "Tool", "Path"))
    """

    path: str
    params: Tuple[str, ...] = ()


@dataclass
class GwrapConfig:
    """Well-known names used to resolve one gwrap invocation.

    Relative paths are resolved against the process working directory,
    which is where the wrapped build runs the compiler from.

    Attributes:
        config_file: Tool configuration file holding "gpp_path"
        package_manifest: Dependency manifest holding "include" fields
        modules_dir: Dependency directory scanned when no manifest exists
        include_subdir: Per-package include folder name looked for by the scan
        default_tool: Compiler used when no valid gpp_path is configured
        config_script: Helper run by "gwrap config"
        install_script: Helper run by "gwrap install <package>"
        update_script: Helper run by "gwrap update"
        rebuild_hint: Command shown after a successful install
        sort_scan_results: Sort scanned package directories by name
    """

    config_file: str = TOOL_CONFIG_FILE
    package_manifest: str = PACKAGE_MANIFEST_FILE
    modules_dir: str = MODULES_DIR
    include_subdir: str = INCLUDE_SUBDIR
    default_tool: str = DEFAULT_TOOL
    config_script: HelperScript = field(default_factory=lambda: HelperScript(CONFIG_SCRIPT, CONFIG_PARAMS))
    install_script: HelperScript = field(default_factory=lambda: HelperScript(INSTALL_SCRIPT, INSTALL_PARAMS))
    update_script: HelperScript = field(default_factory=lambda: HelperScript(UPDATE_SCRIPT))
    rebuild_hint: str = REBUILD_HINT
    sort_scan_results: bool = True

    @classmethod
    def for_directory(cls, root: Union[str, "os.PathLike[str]"], **overrides: object) -> "GwrapConfig":
        """Create a config whose files and helper scripts live under root.

        Args:
            root: Project directory
            **overrides: Field values replacing the defaults

        Returns:
            GwrapConfig with every default path joined onto root
        """
        root_str = os.fspath(root)
        cfg = cls(
            config_file=os.path.join(root_str, TOOL_CONFIG_FILE),
            package_manifest=os.path.join(root_str, PACKAGE_MANIFEST_FILE),
            modules_dir=os.path.join(root_str, MODULES_DIR),
            config_script=HelperScript(os.path.join(root_str, CONFIG_SCRIPT), CONFIG_PARAMS),
            install_script=HelperScript(os.path.join(root_str, INSTALL_SCRIPT), INSTALL_PARAMS),
            update_script=HelperScript(os.path.join(root_str, UPDATE_SCRIPT)),
        )
        for name, value in overrides.items():
            if not hasattr(cfg, name):
                raise ValueError(f"Unknown GwrapConfig field: {name}")
            setattr(cfg, name, value)
        return cfg
