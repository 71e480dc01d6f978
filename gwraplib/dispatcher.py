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
"""Routes a gwrap invocation to exactly one external process.

The first argument selects the route:

- ``config [action] [tool] [path]``: configuration helper script
- ``install <package>``: package install helper script
- ``update``: package update helper script
- anything else: the compiler, with include flags injected when the
  arguments look like a compile or link step

Resolution problems never abort a run; only the exit code of the process
that ends up running is reported back.
"""

import logging
import subprocess
from typing import List, Optional, Sequence

from .command_classifier import is_compilation
from .constants import EXIT_SIGNAL_BASE, ProcessLaunchError
from .color_utils import print_info, print_success, print_error
from .helper_runner import run_helper, waiting_for_child
from .include_resolver import resolve_includes
from .manifest_reader import resolve_tool_path
from .wrapper_types import GwrapConfig

logger = logging.getLogger(__name__)

CONFIG_COMMAND = "config"
INSTALL_COMMAND = "install"
UPDATE_COMMAND = "update"


def build_forward_command(tool: str, includes: Sequence[str], args: Sequence[str]) -> str:
    """Assemble the compiler command line.

    The tool path is quoted so paths with spaces survive the shell; include
    flags come next, then the user's arguments verbatim. Tokens are joined
    with single spaces.

    Args:
        tool: Compiler path or name
        includes: -I flags to inject
        args: Command-line arguments, passed through unchanged

    Returns:
        Command line for the system shell

    Example:
        >>> build_forward_command("/usr/bin/g++", ["-Iinc"], ["main.cpp", "-o", "out"])
        '"/usr/bin/g++" -Iinc main.cpp -o out'
    """
    return " ".join([f'"{tool}"', *includes, *args])


def _normalize_returncode(returncode: int) -> int:
    # subprocess reports death by signal N as -N; shells report 128 + N
    if returncode < 0:
        return EXIT_SIGNAL_BASE - returncode
    return returncode


def run_command_line(command: str) -> int:
    """Run a command line through the system shell and wait for it.

    gwrap stays until the command has exited, even when it is interrupted
    or asked to terminate meanwhile.

    Args:
        command: Complete command line

    Returns:
        Exit code of the command

    Raises:
        ProcessLaunchError: If the shell could not be started
    """
    logger.debug("Running: %s", command)
    try:
        with waiting_for_child():
            result = subprocess.run(command, shell=True, check=False)
    except OSError as e:
        raise ProcessLaunchError(f"Could not run '{command}': {e}") from e
    return _normalize_returncode(result.returncode)


def forward_to_compiler(args: Sequence[str], config: GwrapConfig) -> int:
    """Forward an invocation to the real compiler.

    Args:
        args: Compiler arguments, excluding the program name
        config: Wrapper configuration

    Returns:
        Compiler exit code
    """
    tool = resolve_tool_path(config)

    includes: List[str] = []
    if is_compilation(args):
        includes = resolve_includes(config)
    else:
        logger.debug("Not a compilation, no include flags injected")

    return run_command_line(build_forward_command(tool, includes, args))


def run_config(extra_args: Sequence[str], config: GwrapConfig, interpreter: Optional[str] = None) -> int:
    """Run the configuration helper.

    Trailing arguments map positionally onto the helper's parameters
    (Action, Tool, Path); anything beyond those is ignored.

    Args:
        extra_args: Arguments after "config"
        config: Wrapper configuration
        interpreter: PowerShell command (default: detected)

    Returns:
        Helper exit code
    """
    script = config.config_script
    params = dict(zip(script.params, extra_args))
    if len(extra_args) > len(script.params):
        logger.debug("Ignoring extra config argument(s): %s", " ".join(extra_args[len(script.params) :]))
    return run_helper(script, params, interpreter)


def run_install(package: str, config: GwrapConfig, interpreter: Optional[str] = None) -> int:
    """Install a package through the install helper.

    Args:
        package: Package name handed to the helper as -Package
        config: Wrapper configuration
        interpreter: PowerShell command (default: detected)

    Returns:
        Helper exit code, unchanged
    """
    print_info(f"Installing {package} using vcpkg...")

    ret = run_helper(config.install_script, {"Package": package}, interpreter)

    if ret == 0:
        print()
        print_success("Package installed successfully!")
        print("Rebuild your project to use the new package:", flush=True)
        print(f"  {config.rebuild_hint}", flush=True)
    else:
        print_error("Installation failed. Check the output above for errors.", prefix=False)

    return ret


def run_update(config: GwrapConfig, interpreter: Optional[str] = None) -> int:
    """Check for package updates through the update helper.

    Args:
        config: Wrapper configuration
        interpreter: PowerShell command (default: detected)

    Returns:
        Helper exit code
    """
    print_info("Checking for package updates...")
    return run_helper(config.update_script, {}, interpreter)


def dispatch(args: Sequence[str], config: GwrapConfig) -> int:
    """Run one gwrap invocation.

    "install" without a package name is not a subcommand and is forwarded
    to the compiler like any other argument list.

    Args:
        args: Command-line arguments, excluding the program name
        config: Wrapper configuration

    Returns:
        Exit code of the process that was run

    Raises:
        ProcessLaunchError: If that process could not be started
    """
    if args and args[0] == CONFIG_COMMAND:
        return run_config(args[1:], config)

    if len(args) >= 2 and args[0] == INSTALL_COMMAND:
        return run_install(args[1], config)

    if args and args[0] == UPDATE_COMMAND:
        return run_update(config)

    return forward_to_compiler(args, config)
