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
"""
gwrap - g++ wrapper that injects include paths for local C++ packages.

Use gwrap in place of g++ (e.g., CMAKE_CXX_COMPILER=gwrap). Compile and link
steps get one -I flag per package include folder, taken from cpp_package.json
or, when there is no manifest, found by scanning cpp_modules/. Everything else
(--version, -E, ...) is passed to the compiler untouched.

The compiler is the "gpp_path" from gwrap_config.json when that file exists,
otherwise g++ from PATH.

Requirements:
    - Python 3.8+
    - colorama, packaging
    - PowerShell (powershell or pwsh) for the config/install/update commands

Usage:
    gwrap <compiler arguments...>
    gwrap config [action] [tool] [path]
    gwrap install <package>
    gwrap update

Environment:
    GWRAP_VERBOSE=1   Log wrapper decisions to stderr

Exit Codes:
    Exit code of the compiler or helper script that was run
    127: The compiler or helper could not be started
    130: Interrupted before a child process was started
"""

import os
import sys
import logging
from typing import List, Optional

__version__ = "1.0.0"
__author__ = "Mana Battery"

from gwraplib.color_utils import Colors, print_error, print_warning, should_use_color
from gwraplib.constants import EXIT_KEYBOARD_INTERRUPT, VERBOSE_ENV_VAR, GwrapError
from gwraplib.dispatcher import dispatch
from gwraplib.wrapper_types import GwrapConfig

__all__ = ["main"]

logger = logging.getLogger("gwrap")


def configure_logging() -> None:
    """Send wrapper logs to stderr; DEBUG when GWRAP_VERBOSE is set."""
    verbose = os.environ.get(VERBOSE_ENV_VAR, "") not in ("", "0")
    log_level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s", stream=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the script.

    Args:
        argv: Arguments excluding the program name (default: sys.argv[1:])

    Returns:
        Exit code of the process gwrap ran
    """
    configure_logging()

    if not should_use_color():
        Colors.disable()

    args = sys.argv[1:] if argv is None else argv
    logger.debug("gwrap %s: %s", __version__, " ".join(args))

    try:
        return dispatch(args, GwrapConfig())
    except GwrapError as e:
        print_error(str(e))
        return e.exit_code
    except KeyboardInterrupt:
        print_warning("\nInterrupted by user. Exiting...", prefix=False)
        return EXIT_KEYBOARD_INTERRUPT


if __name__ == "__main__":
    sys.exit(main())
