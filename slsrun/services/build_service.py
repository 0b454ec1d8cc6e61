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
Build service for per-runtime function packaging.

Each supported runtime owns a subdirectory of the service directory named
after it. A runtime whose directory is absent is not used by the service and
its build step does nothing. Builds run once; they are never retried.
"""

import logging
from functools import partial
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from slsrun.constants import (
    ADVISORY_PREFIX,
    BUILD_ORDER,
    CSHARP_RUNTIME,
    DOTNET_PACKAGE,
    DOTNET_RESTORE,
    GO_BUILD,
    GO_BUILD_ENV,
    GOLANG_RUNTIME,
    JAVA11_RUNTIME,
    JAVA8_RUNTIME,
    MAVEN_PACKAGE,
)
from slsrun.exceptions import CommandExecutionError
from slsrun.services.command_service import execute_command

logger = logging.getLogger(__name__)


def is_advisory_error(error: Exception) -> bool:
    """
    Classify a build failure as advisory (non-fatal).

    Only a tool that ran and reported diagnostics starting with the advisory
    prefix qualifies. The check depends on the tool's exact English wording.
    """
    if not isinstance(error, CommandExecutionError):
        return False
    diagnostics = (error.stderr or str(error)).lstrip()
    return diagnostics.startswith(ADVISORY_PREFIX)


class BuildService:
    """Service for building runtime-specific function packages."""

    def __init__(
        self,
        service_path: Union[str, Path],
        executor: Callable[..., str] = execute_command,
        verbose: bool = False,
    ) -> None:
        self.service_path = Path(service_path)
        self.executor = executor
        self.verbose = verbose

    def runtime_path(self, runtime: str) -> Optional[Path]:
        """
        Locate the source directory for a runtime.

        Returns:
            The directory, or None when the runtime is not used

        Raises:
            OSError: If the directory cannot be inspected for another reason
        """
        src_path = self.service_path / runtime
        try:
            src_path.stat()
        except FileNotFoundError:
            return None
        return src_path

    def steps(self) -> List[Tuple[str, Callable[[], None]]]:
        """Build steps keyed by runtime, in execution order."""
        registry = {
            JAVA8_RUNTIME: partial(self.build_java, JAVA8_RUNTIME),
            JAVA11_RUNTIME: partial(self.build_java, JAVA11_RUNTIME),
            CSHARP_RUNTIME: self.build_csharp,
            GOLANG_RUNTIME: self.build_golang,
        }
        return [(runtime, registry[runtime]) for runtime in BUILD_ORDER]

    def build_all(self) -> None:
        """Run every build step in order, stopping at the first failure."""
        for runtime, step in self.steps():
            if self.verbose:
                logger.debug(f"Build step: {runtime}")
            step()

    def build_java(self, version: str) -> None:
        java_path = self.runtime_path(version)
        if java_path is None:
            return
        if self.verbose:
            logger.info(f"Packaging {version} functions with Maven")
        try:
            self._run(java_path, MAVEN_PACKAGE)
        except CommandExecutionError as e:
            if not is_advisory_error(e):
                raise
            logger.warning(f"Ignoring advisory Maven error in {java_path}: {e.stderr}")

    def build_csharp(self) -> None:
        csharp_path = self.runtime_path(CSHARP_RUNTIME)
        if csharp_path is None:
            return
        if self.verbose:
            logger.info("Restoring and packaging C# functions")
        self._run(csharp_path, DOTNET_RESTORE)
        self._run(csharp_path, DOTNET_PACKAGE)

    def build_golang(self) -> None:
        golang_path = self.runtime_path(GOLANG_RUNTIME)
        if golang_path is None:
            return
        if self.verbose:
            logger.info("Cross-compiling Go functions for linux")
        self._run(golang_path, GO_BUILD, env=GO_BUILD_ENV)

    def _run(self, cwd: Path, command: List[str], env=None) -> str:
        if env:
            return self.executor(command[0], command[1:], cwd, env=dict(env))
        return self.executor(command[0], command[1:], cwd)
