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
Serverless framework service.

Wraps every ``sls`` invocation with the run suffix, the configured extra
options and a fixed retry loop for transient provider failures.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from slsrun.constants import SLS_ATTEMPTS, SLS_EXECUTABLE, SLS_RETRY_DELAY
from slsrun.exceptions import SlsRunError
from slsrun.services.command_service import execute_command

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """Fixed-delay retry policy; every failure is retried."""
    attempts: int = SLS_ATTEMPTS
    delay: float = SLS_RETRY_DELAY

    def should_retry(self, error: Exception) -> bool:
        return True


class ServerlessInvoker:
    """Runs serverless framework commands with bounded retry."""

    def __init__(
        self,
        executable: str = SLS_EXECUTABLE,
        policy: Optional[RetryPolicy] = None,
        executor: Callable[..., str] = execute_command,
        sleep: Callable[[float], None] = time.sleep,
        verbose: bool = False,
    ) -> None:
        self.executable = executable
        self.policy = policy or RetryPolicy()
        self.executor = executor
        self.sleep = sleep
        self.verbose = verbose

    def build_args(self, subcommand: List[str], suffix: str, options: Dict[str, str]) -> List[str]:
        """Append the suffix flag and every extra option to a subcommand."""
        args = list(subcommand) + ["--suffix", suffix]
        for name, value in options.items():
            args += [f"--{name}", value]
        return args

    def invoke(
        self,
        cwd: Union[str, Path],
        subcommand: List[str],
        suffix: str = "",
        options: Optional[Dict[str, str]] = None,
    ) -> str:
        """
        Run one serverless command, retrying failed attempts.

        Args:
            cwd: Directory holding the service descriptor
            subcommand: Serverless subcommand and its own flags
            suffix: Run suffix passed as --suffix
            options: Extra options passed as --<name> <value>

        Returns:
            Captured stdout of the first successful attempt

        Raises:
            SlsRunError: The last attempt's error once the policy gives up
        """
        args = self.build_args(subcommand, suffix, options or {})
        attempt = 1
        while True:
            try:
                return self.executor(self.executable, args, cwd)
            except SlsRunError as e:
                if attempt >= self.policy.attempts or not self.policy.should_retry(e):
                    raise
                logger.warning(
                    f"sls {' '.join(subcommand)} failed (attempt {attempt}/{self.policy.attempts}), "
                    f"retrying in {self.policy.delay}s: {e}"
                )
                self.sleep(self.policy.delay)
                attempt += 1
