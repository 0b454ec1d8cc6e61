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

import tempfile
import unittest
from pathlib import Path

from slsrun.exceptions import (
    DescriptorError,
    DescriptorFormatError,
    DescriptorReadError,
    ProviderMismatchError,
)
from slsrun.services.descriptor_service import DescriptorService

SERVICE_YAML = """
service: hello-world-${opt:suffix}
provider:
  name: aws
  project: demo-project
  stage: dev
functions:
  hello:
    name: hello-${opt:suffix}
    handler: handler.hello
    description: Says hello
    runtime: python3.12
    memorySize: 128
  world:
    name: world
    handler: main
    runtime: go1.x
"""


class TestDescriptorService(unittest.TestCase):
    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.dir = Path(tmp.name)
        self.service = DescriptorService()

    def write(self, content):
        (self.dir / "serverless.yml").write_text(content, encoding="utf-8")

    def test_loads_matching_provider(self):
        self.write(SERVICE_YAML)

        descriptor = self.service.load_descriptor(self.dir, "aws")

        self.assertEqual(descriptor.stack_id, "hello-world-${opt:suffix}")
        self.assertEqual(descriptor.provider.name, "aws")
        self.assertEqual(descriptor.provider.project, "demo-project")
        self.assertEqual(descriptor.provider.stage, "dev")
        self.assertEqual(set(descriptor.functions), {"hello", "world"})

        hello = descriptor.functions["hello"]
        self.assertEqual(hello.name, "hello-${opt:suffix}")
        self.assertEqual(hello.handler, "handler.hello")
        self.assertEqual(hello.description, "Says hello")
        self.assertEqual(hello.runtime, "python3.12")
        self.assertEqual(hello.memory_size, "128")

    def test_missing_fields_default_to_empty(self):
        self.write(SERVICE_YAML)

        world = self.service.load_descriptor(self.dir, "aws").functions["world"]

        self.assertEqual(world.description, "")
        self.assertEqual(world.memory_size, "")

    def test_provider_mismatch_names_both_providers(self):
        self.write(SERVICE_YAML.replace("name: aws", "name: gcp"))

        with self.assertRaises(ProviderMismatchError) as ctx:
            self.service.load_descriptor(self.dir, "aws")

        self.assertEqual(ctx.exception.expected, "aws")
        self.assertEqual(ctx.exception.found, "gcp")
        self.assertEqual(str(ctx.exception), "expected provider aws, found provider: gcp")

    def test_missing_file_is_read_error(self):
        with self.assertRaises(DescriptorReadError):
            self.service.load_descriptor(self.dir, "aws")

    def test_invalid_yaml_is_format_error(self):
        self.write("service: [unterminated\nprovider: {name: aws")

        with self.assertRaises(DescriptorFormatError):
            self.service.load_descriptor(self.dir, "aws")

    def test_wrong_shape_is_format_error(self):
        self.write("service: demo\nprovider:\n  name: aws\nfunctions:\n  - hello\n  - world\n")

        with self.assertRaises(DescriptorFormatError):
            self.service.load_descriptor(self.dir, "aws")

    def test_non_mapping_document_is_format_error(self):
        self.write("- just\n- a list\n")

        with self.assertRaises(DescriptorFormatError):
            self.service.load_descriptor(self.dir, "aws")

    def test_empty_functions_section(self):
        self.write("service: demo\nprovider:\n  name: aws\nfunctions:\n")

        descriptor = self.service.load_descriptor(self.dir, "aws")

        self.assertEqual(descriptor.functions, {})

    def test_keys_without_values_load_as_empty_strings(self):
        self.write(
            "service:\n"
            "provider:\n"
            "  name: aws\n"
            "  stage:\n"
            "functions:\n"
            "  hello:\n"
            "    name: hello\n"
            "    description:\n"
            "    memorySize:\n"
        )

        descriptor = self.service.load_descriptor(self.dir, "aws")

        self.assertEqual(descriptor.stack_id, "")
        self.assertEqual(descriptor.provider.stage, "")
        self.assertEqual(descriptor.functions["hello"].name, "hello")
        self.assertEqual(descriptor.functions["hello"].description, "")
        self.assertEqual(descriptor.functions["hello"].memory_size, "")

    def test_errors_share_descriptor_base(self):
        self.write("service: demo\nprovider:\n  name: azure\n")

        with self.assertRaises(DescriptorError):
            self.service.load_descriptor(self.dir, "aws")


if __name__ == "__main__":
    unittest.main()
