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
"""External tool detection for gwrap.

Locates the PowerShell interpreter used for the helper scripts and checks
that the compiler gwrap forwards to can actually be run. Results are cached
per session so repeated lookups avoid extra subprocess calls.

CLI Interface:
    python3 -m gwraplib.tool_detection --find-powershell   # Output command name, exit 0/1
    python3 -m gwraplib.tool_detection --find-compiler     # Output compiler path, exit 0/1
    python3 -m gwraplib.tool_detection --check-all         # Output JSON with all tools
    python3 -m gwraplib.tool_detection --verbose           # Enable debug logging
"""

import os
import sys
import json
import shutil
import logging
import argparse
import subprocess
from typing import Optional, Dict, List
from dataclasses import dataclass

from .manifest_reader import resolve_tool_path
from .wrapper_types import GwrapConfig

logger = logging.getLogger(__name__)

# Interpreters to try (in order of preference)
POWERSHELL_COMMANDS = ["powershell", "pwsh"]

# Session-level cache for tool detection results
_tool_cache: Dict[str, "ToolInfo"] = {}


@dataclass
class ToolInfo:
    """Information about a detected external tool.

    Attributes:
        command: Command name as invoked (e.g., "pwsh", "g++")
        full_command: Resolved executable path (e.g., "/usr/bin/pwsh")
        version: First line of the tool's version output, if queried
    """

    command: Optional[str]
    full_command: Optional[str]
    version: Optional[str]

    def is_found(self) -> bool:
        """Check if tool was found.

        Returns:
            True if command is not None
        """
        return self.command is not None


NOT_FOUND = ToolInfo(command=None, full_command=None, version=None)


def clear_cache() -> None:
    """Clear the tool detection cache.

    Useful for testing or when environment changes during process lifetime.
    """
    _tool_cache.clear()
    logger.debug("Tool detection cache cleared")


def _try_command(cmd_parts: List[str], timeout: int = 5) -> Optional[str]:
    """Try to run a command with --version and return version output.

    Args:
        cmd_parts: Command parts (e.g., ["g++"])
        timeout: Timeout in seconds for subprocess call

    Returns:
        Version output string if successful, None otherwise
    """
    try:
        result = subprocess.run(cmd_parts + ["--version"], capture_output=True, text=True, check=True, timeout=timeout)
        return result.stdout.strip()
    except (subprocess.CalledProcessError, OSError, subprocess.TimeoutExpired):
        return None


def _extract_version(output: str) -> str:
    """Return the first line of a version banner."""
    lines = output.split("\n")
    return lines[0].strip() if lines else output.strip()


def _locate(command: str) -> Optional[str]:
    """Resolve a command through PATH, or accept it as an existing file path."""
    found = shutil.which(command)
    if found:
        return found
    if os.path.isfile(command):
        return command
    return None


def find_powershell() -> ToolInfo:
    """Find the PowerShell interpreter used to run helper scripts.

    Tries commands in order: powershell, pwsh. Only PATH presence is checked;
    PowerShell start-up is too slow to run on every wrapper call.

    Returns:
        ToolInfo with command if found, or empty ToolInfo if not found
    """
    cache_key = "find_powershell"
    if cache_key in _tool_cache:
        return _tool_cache[cache_key]

    tool_info = NOT_FOUND
    for cmd in POWERSHELL_COMMANDS:
        logger.debug("Trying %s...", cmd)
        path = shutil.which(cmd)
        if path:
            logger.debug("Found %s at %s", cmd, path)
            tool_info = ToolInfo(command=cmd, full_command=path, version=None)
            break
        logger.debug("%s not found", cmd)
    else:
        logger.debug("PowerShell not found")

    _tool_cache[cache_key] = tool_info
    return tool_info


def find_compiler(tool: str) -> ToolInfo:
    """Check that a compiler responds to --version.

    Args:
        tool: Compiler name or path (e.g., "g++", "C:/mingw64/bin/g++.exe")

    Returns:
        ToolInfo with command and version if usable, or empty ToolInfo
    """
    cache_key = f"find_compiler:{tool}"
    if cache_key in _tool_cache:
        return _tool_cache[cache_key]

    tool_info = NOT_FOUND
    logger.debug("Trying %s...", tool)
    version_output = _try_command([tool])
    if version_output:
        path = _locate(tool)
        if path:
            version = _extract_version(version_output)
            logger.debug("Found %s version %s", tool, version)
            tool_info = ToolInfo(command=tool, full_command=path, version=version)
        else:
            logger.debug("%s responded but is not in PATH", tool)
    else:
        logger.debug("%s not found", tool)

    _tool_cache[cache_key] = tool_info
    return tool_info


def check_all_tools(config: GwrapConfig) -> Dict[str, Dict[str, str]]:
    """Check every tool gwrap delegates to.

    Args:
        config: Wrapper configuration (used to resolve the compiler)

    Returns:
        Dictionary with tool names as keys, each containing command and version.
        Missing tools are omitted from the result.
    """
    tools: Dict[str, Dict[str, str]] = {}

    tool_checks = [
        ("powershell", find_powershell()),
        ("compiler", find_compiler(resolve_tool_path(config))),
    ]

    for tool_name, tool_info in tool_checks:
        if tool_info.command is not None:
            tools[tool_name] = {"command": tool_info.command, "version": tool_info.version or "unknown"}

    return tools


def main() -> int:
    """Main entry point for CLI usage.

    Returns:
        Exit code: 0 if tool found (or check-all succeeds), 1 if not found
    """
    parser = argparse.ArgumentParser(description="Detect external tools used by gwrap", formatter_class=argparse.RawDescriptionHelpFormatter)

    parser.add_argument("--find-powershell", action="store_true", help="Find the PowerShell interpreter")
    parser.add_argument("--find-compiler", action="store_true", help="Find the compiler gwrap forwards to")
    parser.add_argument("--check-all", action="store_true", help="Check all tools and output JSON")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose debug logging")

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(message)s", stream=sys.stderr)
    else:
        logging.basicConfig(level=logging.WARNING)

    config = GwrapConfig()

    if args.check_all:
        output = {"tools": check_all_tools(config)}
        print(json.dumps(output, indent=2))
        return 0

    if args.find_powershell or args.find_compiler:
        tool_info = find_powershell() if args.find_powershell else find_compiler(resolve_tool_path(config))
        if tool_info.is_found():
            print(tool_info.command)
            return 0
        return 1

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
