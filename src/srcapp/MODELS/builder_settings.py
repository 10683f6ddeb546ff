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
Runtime settings for the object builder, read from the environment.
"""
import os
from enum import Enum
from typing import Dict, Optional
from dotenv import dotenv_values
from pydantic import BaseModel

from ..UTILS.secret_generator import SecretGenerator

ENV_PREFIX = "SRCAPP_"


class SecretSource(str, Enum):
    """
    Random sources available for webhook trigger secrets.
    """
    WEAK = "weak"
    STRONG = "strong"


class LogLevel(str, Enum):
    """
    Log levels accepted for SRCAPP_LOG_LEVEL and --log-level.
    """
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class BuilderSettings(BaseModel):
    """
    Settings that control how objects are built and how much is logged.
    """
    secret_source: SecretSource = SecretSource.WEAK
    log_level: LogLevel = LogLevel.WARNING

    @classmethod
    def from_env(cls, env_file: Optional[str] = None,
                 environ: Optional[Dict[str, str]] = None) -> "BuilderSettings":
        """
        Loads settings from ``SRCAPP_*`` variables.

        :param env_file: Optional .env file read before the process environment.
        :param environ: Environment to read instead of ``os.environ``.
        :return: The resolved settings.
        """
        values: Dict[str, Optional[str]] = {}
        if env_file:
            values.update(dotenv_values(env_file))
        values.update(dict(os.environ) if environ is None else environ)

        fields = {}
        for field_name in cls.model_fields:
            value = values.get(ENV_PREFIX + field_name.upper())
            if value:
                fields[field_name] = value.lower() if field_name == "secret_source" else value.upper()
        return cls(**fields)

    def make_secret_generator(self) -> SecretGenerator:
        if self.secret_source == SecretSource.STRONG:
            return SecretGenerator.strong()
        return SecretGenerator()
