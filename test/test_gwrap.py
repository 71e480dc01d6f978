#!/usr/bin/env python3
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
"""Integration tests for gwrap.py"""
import os
import sys
import stat
import time
import signal
import logging
import subprocess
from pathlib import Path
import pytest
from typing import Any, Dict, List
from unittest.mock import MagicMock, Mock

# Import the module to test
sys.path.insert(0, str(Path(__file__).parent.parent))
import gwrap
from gwraplib.constants import EXIT_LAUNCH_FAILED, VERBOSE_ENV_VAR
from gwraplib.wrapper_types import GwrapConfig

from conftest import make_package, write_manifest

GWRAP_SCRIPT = Path(__file__).parent.parent / "gwrap.py"


@pytest.fixture
def project(temp_dir: str, monkeypatch: Any) -> GwrapConfig:
    """Run gwrap from an empty project directory with colors left on."""
    monkeypatch.chdir(temp_dir)
    monkeypatch.setattr(gwrap, "should_use_color", lambda: True)
    return GwrapConfig()


class TestMain:
    """Tests for gwrap.main."""

    def test_forward_query(self, project: GwrapConfig, monkeypatch: Any) -> None:
        """Test that a version query is forwarded untouched."""
        mock_run = Mock(return_value=MagicMock(returncode=0))
        monkeypatch.setattr("subprocess.run", mock_run)

        assert gwrap.main(["--version"]) == 0
        assert mock_run.call_args[0][0] == '"g++" --version'

    def test_forward_compilation(self, project: GwrapConfig, monkeypatch: Any) -> None:
        """Test include injection from the working directory layout."""
        os.mkdir(project.modules_dir)
        write_manifest(project, ["cpp_modules/fmt/include"])
        mock_run = Mock(return_value=MagicMock(returncode=1))
        monkeypatch.setattr("subprocess.run", mock_run)

        assert gwrap.main(["-c", "main.cpp"]) == 1
        assert mock_run.call_args[0][0] == '"g++" -Icpp_modules/fmt/include -c main.cpp'

    def test_argv_default(self, project: GwrapConfig, monkeypatch: Any) -> None:
        """Test that sys.argv is used when no arguments are passed."""
        mock_run = Mock(return_value=MagicMock(returncode=0))
        monkeypatch.setattr("subprocess.run", mock_run)
        monkeypatch.setattr(sys, "argv", ["gwrap", "-dumpversion"])

        gwrap.main()
        assert mock_run.call_args[0][0] == '"g++" -dumpversion'

    def test_install(self, project: GwrapConfig, monkeypatch: Any, capsys: Any) -> None:
        """Test install routing and output."""
        calls: List[Dict[str, str]] = []

        def fake_helper(script: Any, params: Any = None, interpreter: Any = None) -> int:
            calls.append(dict(params or {}))
            return 0

        monkeypatch.setattr("gwraplib.dispatcher.run_helper", fake_helper)

        assert gwrap.main(["install", "libfoo"]) == 0
        assert calls == [{"Package": "libfoo"}]
        assert "Package installed successfully!" in capsys.readouterr().out

    def test_launch_failure(self, project: GwrapConfig, monkeypatch: Any, capsys: Any) -> None:
        """Test that a process that cannot start yields exit code 127 and an error line."""
        monkeypatch.setattr("subprocess.run", Mock(side_effect=FileNotFoundError("powershell")))
        monkeypatch.setattr("shutil.which", lambda cmd: None)

        assert gwrap.main(["update"]) == EXIT_LAUNCH_FAILED
        assert "Error:" in capsys.readouterr().err


class TestConfigureLogging:
    """Tests for gwrap.configure_logging."""

    @pytest.mark.parametrize("value, level", [("", logging.WARNING), ("0", logging.WARNING), ("1", logging.DEBUG), ("yes", logging.DEBUG)])
    def test_verbose_env(self, monkeypatch: Any, value: str, level: int) -> None:
        """Test log level selection from GWRAP_VERBOSE."""
        captured: Dict[str, Any] = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: captured.update(kwargs))
        monkeypatch.setenv(VERBOSE_ENV_VAR, value)

        gwrap.configure_logging()
        assert captured["level"] == level
        assert captured["stream"] is sys.stderr


@pytest.mark.integration
@pytest.mark.skipif(sys.platform == "win32", reason="uses a POSIX shell script as the compiler")
class TestEndToEnd:
    """Runs gwrap against a stand-in compiler script through the real shell."""

    def test_fake_compiler_receives_arguments(self, project: GwrapConfig, temp_dir: str) -> None:
        """Test the full forward path with a real child process."""
        bin_dir = Path(temp_dir) / "tool chain"
        bin_dir.mkdir()
        compiler = bin_dir / "fake-g++"
        compiler.write_text('#!/bin/sh\necho "$@" > "$(dirname "$0")/args.txt"\nexit 3\n')
        compiler.chmod(compiler.stat().st_mode | stat.S_IXUSR)
        Path(project.config_file).write_text(f'{{"gpp_path": "{compiler}"}}')
        make_package(project, "pkg1")
        make_package(project, "pkg2", with_include=False)

        assert gwrap.main(["main.cpp", "-o", "out"]) == 3
        assert (bin_dir / "args.txt").read_text().strip() == "-Icpp_modules/pkg1/include main.cpp -o out"

    @pytest.mark.parametrize("signum", [signal.SIGTERM, signal.SIGINT])
    def test_signal_waits_for_compiler(self, temp_dir: str, signum: int) -> None:
        """Test that a signal sent to gwrap mid-compile still reports the compiler's own exit code."""
        bin_dir = Path(temp_dir) / "tool chain"
        bin_dir.mkdir()
        compiler = bin_dir / "slow-g++"
        compiler.write_text('#!/bin/sh\nd="$(dirname "$0")"\ntouch "$d/started"\nsleep 1\ntouch "$d/finished"\nexit 3\n')
        compiler.chmod(compiler.stat().st_mode | stat.S_IXUSR)
        Path(temp_dir, "gwrap_config.json").write_text(f'{{"gpp_path": "{compiler}"}}')

        proc = subprocess.Popen(
            [sys.executable, str(GWRAP_SCRIPT), "main.cpp"], cwd=temp_dir, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True
        )
        deadline = time.monotonic() + 15
        while not (bin_dir / "started").exists() and time.monotonic() < deadline:
            time.sleep(0.05)
        assert (bin_dir / "started").exists()

        proc.send_signal(signum)
        _, err = proc.communicate(timeout=30)

        assert proc.returncode == 3
        assert (bin_dir / "finished").exists()
        assert "Interrupted" not in err
