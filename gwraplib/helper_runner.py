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
"""Runs the PowerShell helper scripts behind the config/install/update commands.

The helpers are opaque collaborators: gwrap hands them a script path and a
few named string parameters and reports back their exit code.
"""

import signal
import logging
import threading
import subprocess
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from .constants import POWERSHELL_ARGS, DEFAULT_POWERSHELL, ProcessLaunchError
from .tool_detection import find_powershell
from .wrapper_types import HelperScript

logger = logging.getLogger(__name__)

# Signals gwrap sits out while a child process runs (SIGQUIT is POSIX only)
CHILD_WAIT_SIGNALS = tuple(getattr(signal, name) for name in ("SIGINT", "SIGTERM", "SIGQUIT") if hasattr(signal, name))


def _note_signal(signum: int, frame: Any) -> None:
    logger.debug("Received signal %d, still waiting for the child process", signum)


@contextmanager
def waiting_for_child() -> Iterator[None]:
    """Keep gwrap alive until the child process it started has exited.

    Interrupt and termination signals that reach gwrap inside the block are
    logged and otherwise ignored, so the reported exit code is always the
    child's. Python-level handlers do not survive exec, so the child itself
    still reacts to those signals normally. Handlers are restored on exit.

    Outside the main thread handlers cannot be installed and the block runs
    unchanged.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    previous = {signum: signal.signal(signum, _note_signal) for signum in CHILD_WAIT_SIGNALS}
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler if handler is not None else signal.SIG_DFL)


def default_interpreter() -> str:
    """Return the PowerShell command to run helpers with.

    Falls back to "powershell" when none is on PATH, so the launch failure
    surfaces from the actual spawn attempt.
    """
    tool_info = find_powershell()
    if tool_info.command is None:
        return DEFAULT_POWERSHELL
    return tool_info.command


def build_helper_command(script: HelperScript, params: Dict[str, str], interpreter: str) -> List[str]:
    """Build the argument list for one helper invocation.

    Parameters are emitted in the order declared by the script; names the
    script does not declare, and declared names missing from params, are
    left out.

    Args:
        script: Helper script descriptor
        params: Parameter values by name (e.g., {"Package": "fmt"})
        interpreter: PowerShell command

    Returns:
        Command as a list suitable for subprocess.run
    """
    cmd = [interpreter, *POWERSHELL_ARGS, script.path]
    for name in script.params:
        if name in params:
            cmd.extend((f"-{name}", params[name]))
    ignored = sorted(set(params) - set(script.params))
    if ignored:
        logger.debug("%s does not take parameter(s) %s", script.path, ", ".join(ignored))
    return cmd


def run_helper(script: HelperScript, params: Optional[Dict[str, str]] = None, interpreter: Optional[str] = None) -> int:
    """Run a helper script and wait for it.

    The helper inherits this process's standard streams.

    Args:
        script: Helper script descriptor
        params: Parameter values by name
        interpreter: PowerShell command (default: detected)

    Returns:
        Helper exit code

    Raises:
        ProcessLaunchError: If the interpreter could not be started
    """
    cmd = build_helper_command(script, params or {}, interpreter or default_interpreter())
    logger.debug("Running helper: %s", " ".join(cmd))
    try:
        with waiting_for_child():
            result = subprocess.run(cmd, check=False)
    except OSError as e:
        raise ProcessLaunchError(f"Could not start '{cmd[0]}' for {script.path}: {e}") from e
    return result.returncode
