# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
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
Parsers for app configuration files (YAML, or JSON as a YAML subset).
"""
import yaml
from pydantic import ValidationError

from ..MODELS.builder_config import BuilderConfig
from ..errors import ConfigError


class BuilderConfigParser:
    """
    Parser for files describing a "new app from source" request.

    Example::

        name: myapp
        repository: https://github.com/sclorg/nodejs-ex.git
        imageStreamTag:
          metadata: {name: "nodejs:latest", namespace: openshift}
    """
    def parse(self, config_path: str) -> BuilderConfig:
        """
        Parses an app configuration from a path.

        :param config_path: Path to the configuration file.
        :return: The validated configuration.
        :raises ConfigError: If the file cannot be read or is invalid.
        """
        try:
            with open(config_path, 'r') as f:
                content = f.read()
        except OSError as e:
            raise ConfigError(f"Cannot read {config_path}: {e}") from e
        return self.parse_from_string(content)

    def parse_from_string(self, content: str) -> BuilderConfig:
        """
        Parses an app configuration from a string.

        :param content: YAML or JSON content.
        :return: The validated configuration.
        :raises ConfigError: If the content is empty, malformed or invalid.
        """
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}") from e

        if not data:
            raise ConfigError("Empty app configuration")
        if not isinstance(data, dict):
            raise ConfigError("App configuration must be a mapping")

        try:
            return BuilderConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid app configuration: {e}") from e
