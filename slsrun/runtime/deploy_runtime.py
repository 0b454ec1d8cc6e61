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
Serverless runtime for slsrun.

This module drives the deploy, remove and list lifecycle of one serverless
service: it owns the parsed descriptor and the run suffix, builds every
runtime present in the service directory and hands the final command to the
serverless framework.
"""

import logging
import shutil
import time
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from slsrun.constants import SLS_EXECUTABLE, SUFFIX_PLACEHOLDER
from slsrun.exceptions import ToolNotFoundError
from slsrun.services.build_service import BuildService
from slsrun.services.command_service import execute_command
from slsrun.services.descriptor_service import DescriptorService, FunctionSpec
from slsrun.services.sls_service import RetryPolicy, ServerlessInvoker

logger = logging.getLogger(__name__)


class ServerlessRuntime:
    """Runtime for deploying, removing and listing a serverless service."""

    def __init__(
        self,
        provider: str,
        service_path: Union[str, Path],
        options: Optional[Dict[str, str]] = None,
        verbose: bool = False,
        executor: Callable[..., str] = execute_command,
        policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Locate the serverless framework and load the service descriptor.

        Args:
            provider: Provider the descriptor must declare
            service_path: Directory holding serverless.yml and runtime sources
            options: Extra options forwarded to every sls invocation
            verbose: Enable detailed logging
            executor: Command executor, replaceable for testing
            policy: Retry policy for sls invocations
            sleep: Delay function used between retries

        Raises:
            ToolNotFoundError: If sls is not on PATH
            DescriptorError: If the descriptor cannot be loaded or targets another provider
        """
        self.verbose = verbose
        self.provider = provider
        self.service_path = Path(service_path)

        self.tool_path = shutil.which(SLS_EXECUTABLE)
        if self.tool_path is None:
            raise ToolNotFoundError("serverless framework is not installed")

        self.descriptor = DescriptorService(verbose=verbose).load_descriptor(self.service_path, provider)
        self.options: Dict[str, str] = dict(options or {})
        self.suffix = ""

        self.build_service = BuildService(self.service_path, executor=executor, verbose=verbose)
        self.invoker = ServerlessInvoker(
            executable=self.tool_path,
            policy=policy,
            executor=executor,
            sleep=sleep,
            verbose=verbose,
        )

    @property
    def stack_id(self) -> str:
        """Stack identifier without the suffix placeholder."""
        return self.descriptor.stack_name

    @property
    def project(self) -> str:
        return self.descriptor.provider.project

    @property
    def stage(self) -> str:
        return self.descriptor.provider.stage

    @property
    def functions(self) -> Dict[str, FunctionSpec]:
        return self.descriptor.functions

    def deploy(self) -> str:
        """
        Deploy the service under a fresh run suffix.

        Generates the suffix, substitutes it into function names, builds
        every runtime present and runs ``sls deploy``. Renamed functions are
        kept after the call.

        Returns:
            Output of the deploy command

        Raises:
            CommandError: If a build step or the deploy command fails
        """
        self.suffix = self._next_suffix()
        if self.verbose:
            logger.info(f"Deploying {self.stack_id} with suffix {self.suffix}")

        self.descriptor.functions = {
            key: spec.model_copy(update={"name": spec.name.replace(SUFFIX_PLACEHOLDER, self.suffix)})
            for key, spec in self.descriptor.functions.items()
        }

        self.build_service.build_all()

        return self.invoker.invoke(
            self.service_path,
            ["deploy", "--no-aws-s3-accelerate"],
            suffix=self.suffix,
            options=self.options,
        )

    def remove(self) -> str:
        """Remove the deployed service using the current suffix."""
        if self.verbose:
            logger.info(f"Removing {self.stack_id} (suffix '{self.suffix}')")
        return self.invoker.invoke(self.service_path, ["remove"], suffix=self.suffix, options=self.options)

    def list_functions(self) -> str:
        """List deployed functions and their versions."""
        return self.invoker.invoke(
            self.service_path,
            ["deploy", "list", "functions"],
            suffix=self.suffix,
            options=self.options,
        )

    def _next_suffix(self) -> str:
        suffix = time.time_ns()
        # clocks with coarse resolution can repeat a value
        if self.suffix and suffix <= int(self.suffix):
            suffix = int(self.suffix) + 1
        return str(suffix)
