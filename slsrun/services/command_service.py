# Copyright The Volcano Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Command service for running external tools.

Child output is forwarded live to the caller's streams while also being
buffered, so operators can follow long builds and deploys and callers still
get the captured text back.
"""

import io
import logging
import os
import subprocess
import sys
import threading
from pathlib import Path
from typing import Dict, List, Optional, TextIO, Union

from slsrun.exceptions import CommandExecutionError, CommandStartError, StreamCaptureError

logger = logging.getLogger(__name__)


class _StreamCopier(threading.Thread):
    """Drains one child pipe into a sink and an in-memory buffer."""

    def __init__(self, source, sink: TextIO) -> None:
        super().__init__(daemon=True)
        self.source = source
        self.sink = sink
        self.buffer = io.StringIO()
        self.error: Optional[BaseException] = None

    def run(self) -> None:
        forward = True
        try:
            for chunk in self.source:
                self.buffer.write(chunk)
                if not forward:
                    continue
                try:
                    self.sink.write(chunk)
                    self.sink.flush()
                except Exception as e:
                    # keep draining so the child never blocks on a full pipe
                    self.error = e
                    forward = False
        except Exception as e:
            self.error = e
        finally:
            self.source.close()


def execute_command(
    command: str,
    args: List[str],
    cwd: Union[str, Path],
    env: Optional[Dict[str, str]] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> str:
    """
    Run an external command, streaming and capturing its output.

    Args:
        command: Program to run
        args: Program arguments
        cwd: Working directory for the child
        env: Extra environment variables layered over the current environment
        stdout: Sink for live stdout (defaults to sys.stdout)
        stderr: Sink for live stderr (defaults to sys.stderr)

    Returns:
        Captured stdout with surrounding whitespace removed

    Raises:
        CommandStartError: If the process cannot be started
        StreamCaptureError: If copying stdout or stderr failed
        CommandExecutionError: If the process exits non-zero
    """
    cmd = [command, *args]
    child_env = None
    if env:
        child_env = os.environ.copy()
        child_env.update(env)

    logger.debug(f"Running {' '.join(cmd)} in {cwd}")

    try:
        process = subprocess.Popen(
            cmd,
            cwd=str(cwd),
            env=child_env,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            bufsize=1,
        )
    except OSError as e:
        raise CommandStartError(cmd, e) from e

    out_copier = _StreamCopier(process.stdout, stdout or sys.stdout)
    err_copier = _StreamCopier(process.stderr, stderr or sys.stderr)
    out_copier.start()
    err_copier.start()

    exit_code = process.wait()
    out_copier.join()
    err_copier.join()

    if out_copier.error is not None or err_copier.error is not None:
        raise StreamCaptureError(cmd) from (out_copier.error or err_copier.error)

    captured = out_copier.buffer.getvalue().strip()
    if exit_code != 0:
        raise CommandExecutionError(
            exit_code,
            err_copier.buffer.getvalue().strip(),
            command=cmd,
            stdout=captured,
        )
    return captured
