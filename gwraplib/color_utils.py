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
"""Colored status lines for the install/update commands and wrapper errors.

Compiler output never passes through here; it goes straight from the child
process to the terminal.
"""

import os
import sys
from typing import Optional, TextIO

from colorama import Fore, Style, init

# Leave escape codes alone; gwrap.main() calls Colors.disable() for non-TTY output
init(autoreset=False, strip=False)


class Colors:
    """Escape codes used by the status helpers."""

    INFO = Fore.CYAN
    SUCCESS = Fore.GREEN
    WARNING = Fore.YELLOW
    ERROR = Fore.RED
    RESET = Style.RESET_ALL

    @staticmethod
    def disable() -> None:
        """Replace every escape code with an empty string."""
        for attr in ("INFO", "SUCCESS", "WARNING", "ERROR", "RESET"):
            setattr(Colors, attr, "")


def _emit(text: str, color: str, file: TextIO) -> None:
    line = f"{color}{text}{Colors.RESET}" if color else text
    print(line, file=file, flush=True)


def print_info(text: str, file: Optional[TextIO] = None) -> None:
    """Print a progress line in cyan to stdout."""
    _emit(text, Colors.INFO, file or sys.stdout)


def print_success(text: str, file: Optional[TextIO] = None) -> None:
    """Print a success line in green to stdout."""
    _emit(text, Colors.SUCCESS, file or sys.stdout)


def print_warning(text: str, file: Optional[TextIO] = None, prefix: bool = True) -> None:
    """Print a warning in yellow to stderr.

    Args:
        text: Warning message
        file: Output stream (default: sys.stderr)
        prefix: Prepend "Warning: " to the message
    """
    _emit(f"Warning: {text}" if prefix else text, Colors.WARNING, file or sys.stderr)


def print_error(text: str, file: Optional[TextIO] = None, prefix: bool = True) -> None:
    """Print an error in red to stderr.

    Args:
        text: Error message
        file: Output stream (default: sys.stderr)
        prefix: Prepend "Error: " to the message
    """
    _emit(f"Error: {text}" if prefix else text, Colors.ERROR, file or sys.stderr)


def should_use_color() -> bool:
    """Return True when stdout is a terminal and NO_COLOR is not set (see no-color.org)."""
    if not sys.stdout.isatty():
        return False
    return not os.environ.get("NO_COLOR")
