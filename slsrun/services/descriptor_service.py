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
Descriptor service for loading the serverless service descriptor.

This service reads serverless.yml from a service directory, validates its
shape and checks that it targets the expected provider.
"""

import logging
from pathlib import Path
from typing import Dict, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from slsrun.constants import DESCRIPTOR_NAME, SUFFIX_PLACEHOLDER
from slsrun.exceptions import DescriptorFormatError, DescriptorReadError, ProviderMismatchError

logger = logging.getLogger(__name__)


def _blank_to_empty(v):
    # a key with no value, e.g. "stage:", loads as None
    return "" if v is None else v


class FunctionSpec(BaseModel):
    """One deployable function."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    name: str = Field("", description="Deployed function name, may hold the suffix placeholder")
    handler: str = Field("", description="Entry point inside the function package")
    description: str = Field("", description="Human-readable summary")
    runtime: str = Field("", description="Provider runtime identifier")
    memory_size: str = Field("", alias="memorySize", description="Memory allocation")

    @field_validator('name', 'handler', 'description', 'runtime', 'memory_size', mode='before')
    @classmethod
    def blank_value(cls, v):
        return _blank_to_empty(v)


class ProviderSpec(BaseModel):
    """Target platform identity."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str = ""
    project: str = ""
    stage: str = ""

    @field_validator('name', 'project', 'stage', mode='before')
    @classmethod
    def blank_value(cls, v):
        return _blank_to_empty(v)


class ServiceDescriptor(BaseModel):
    """Pydantic model for serverless.yml."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    stack_id: str = Field("", alias="service", description="Logical name of the deployment unit")
    provider: ProviderSpec = Field(default_factory=ProviderSpec)
    functions: Dict[str, FunctionSpec] = Field(default_factory=dict)

    @property
    def stack_name(self) -> str:
        """Stack identifier without the suffix placeholder."""
        return self.stack_id.replace("-" + SUFFIX_PLACEHOLDER, "").replace(SUFFIX_PLACEHOLDER, "")

    @field_validator('stack_id', mode='before')
    @classmethod
    def blank_value(cls, v):
        return _blank_to_empty(v)

    @field_validator('provider', 'functions', mode='before')
    @classmethod
    def empty_section(cls, v):
        # "functions:" with no entries loads as None
        if v is None:
            return {}
        return v

    @field_validator('functions', mode='before')
    @classmethod
    def empty_functions(cls, v):
        if isinstance(v, dict):
            return {key: spec if spec is not None else {} for key, spec in v.items()}
        return v


class DescriptorService:
    """Service for loading service descriptors."""

    def __init__(self, verbose: bool = False) -> None:
        self.verbose = verbose

    def load_descriptor(self, directory: Union[str, Path], provider: str) -> ServiceDescriptor:
        """
        Load and validate the service descriptor from a directory.

        Args:
            directory: Directory containing serverless.yml
            provider: Provider name the descriptor must declare

        Returns:
            ServiceDescriptor: Parsed descriptor

        Raises:
            DescriptorReadError: If the file is missing or unreadable
            DescriptorFormatError: If the content is not a valid descriptor
            ProviderMismatchError: If the declared provider differs
        """
        descriptor_file = Path(directory) / DESCRIPTOR_NAME

        if self.verbose:
            logger.debug(f"Loading service descriptor from: {descriptor_file}")

        try:
            with open(descriptor_file, 'r', encoding='utf-8') as f:
                content = f.read()
        except OSError as e:
            raise DescriptorReadError(f"Cannot read {descriptor_file}: {e}") from e

        descriptor = self.parse_descriptor(content)

        if descriptor.provider.name != provider:
            raise ProviderMismatchError(provider, descriptor.provider.name)

        if self.verbose:
            logger.info(
                f"Loaded service '{descriptor.stack_id}' with {len(descriptor.functions)} function(s)"
            )
        return descriptor

    def parse_descriptor(self, content: str) -> ServiceDescriptor:
        """Deserialize descriptor YAML text without provider validation."""
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise DescriptorFormatError(f"Invalid YAML in service descriptor: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise DescriptorFormatError(
                f"Service descriptor must be a mapping, got {type(data).__name__}"
            )

        try:
            return ServiceDescriptor.model_validate(data)
        except ValidationError as e:
            raise DescriptorFormatError(f"Invalid service descriptor: {e}") from e
