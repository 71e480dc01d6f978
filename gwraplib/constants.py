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
"""Shared constants for gwrap.

This module provides the well-known file names, default tool name and exit
codes used across gwrap, plus the exception hierarchy raised when a delegated
process cannot be started.
"""

# =============================================================================
# Exit Codes
# =============================================================================

EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 2
EXIT_LAUNCH_FAILED = 127  # Same code a POSIX shell uses for "command not found"
EXIT_KEYBOARD_INTERRUPT = 130
EXIT_SIGNAL_BASE = 128  # Child killed by signal N exits with 128 + N

# =============================================================================
# Compiler Defaults
# =============================================================================

DEFAULT_TOOL = "g++"  # Resolved through PATH when no usable gpp_path is configured

# =============================================================================
# Well-known Files and Directories
# =============================================================================

TOOL_CONFIG_FILE = "gwrap_config.json"  # Holds the optional "gpp_path" field
PACKAGE_MANIFEST_FILE = "cpp_package.json"  # Holds zero or more "include" fields
MODULES_DIR = "cpp_modules"  # One subdirectory per installed package
INCLUDE_SUBDIR = "include"  # Conventional per-package header folder

GPP_PATH_KEY = "gpp_path"
INCLUDE_KEY = "include"

# =============================================================================
# Helper Scripts
# =============================================================================

CONFIG_SCRIPT = "gwrap_config.ps1"
INSTALL_SCRIPT = "vcpkg_install.ps1"
UPDATE_SCRIPT = "vcpkg_update.ps1"

CONFIG_PARAMS = ("Action", "Tool", "Path")
INSTALL_PARAMS = ("Package",)

POWERSHELL_ARGS = ("-ExecutionPolicy", "Bypass", "-File")
DEFAULT_POWERSHELL = "powershell"

REBUILD_HINT = "gwrap <sources> -o <output>"

# =============================================================================
# Logging
# =============================================================================

VERBOSE_ENV_VAR = "GWRAP_VERBOSE"

# =============================================================================
# Exception Classes
# =============================================================================


class GwrapError(Exception):
    """Base exception for all gwrap errors.

    All gwrap exceptions carry an exit_code attribute that indicates
    what exit code the program should use when this error is caught at the
    main entry point.
    """

    def __init__(self, message: str, exit_code: int = EXIT_RUNTIME_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class ExternalToolError(GwrapError):
    """Raised when an external tool (compiler, PowerShell helper) fails."""


class ProcessLaunchError(ExternalToolError):
    """Raised when a delegated process could not be started at all."""

    def __init__(self, message: str):  # pylint: disable=useless-parent-delegation
        super().__init__(message, EXIT_LAUNCH_FAILED)
