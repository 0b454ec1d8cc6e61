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

import os
import unittest
from unittest.mock import patch

from slsrun import config


class TestConfig(unittest.TestCase):
    @patch.dict(os.environ, {}, clear=True)
    def test_defaults(self):
        self.assertEqual(config.get_provider(), "aws")
        self.assertEqual(config.get_directory(), ".")
        self.assertEqual(config.get_log_level(), "INFO")
        self.assertEqual(config.get_extra_options(), {})

    @patch.dict(os.environ, {
        "SLSRUN_PROVIDER": "google",
        "SLSRUN_DIRECTORY": "/srv/app",
        "SLSRUN_LOG_LEVEL": "debug",
        "SLSRUN_OPTIONS": "region=eu-west-1, --aws-profile=ci,",
    }, clear=True)
    def test_environment_overrides(self):
        self.assertEqual(config.get_provider(), "google")
        self.assertEqual(config.get_directory(), "/srv/app")
        self.assertEqual(config.get_log_level(), "DEBUG")
        self.assertEqual(config.get_extra_options(), {"region": "eu-west-1", "aws-profile": "ci"})

    def test_parse_options_keeps_equals_in_value(self):
        self.assertEqual(config.parse_options(["tag=a=b"]), {"tag": "a=b"})

    def test_parse_options_rejects_bare_names(self):
        with self.assertRaises(ValueError):
            config.parse_options(["region"])


if __name__ == "__main__":
    unittest.main()
