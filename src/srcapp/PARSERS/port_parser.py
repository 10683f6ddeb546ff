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
Parser for the exposed port specs found in Docker image metadata.
"""
import logging
import re
from typing import Any, List, Mapping, Optional

from ..MODELS.builder_config import Port
from ..logging_config import get_logger

DEFAULT_PROTOCOL = "tcp"

# Leading integer, as parseInt(value, 10) reads it.
_LEADING_INT = re.compile(r'^\s*([+-]?[0-9]+)')


def parse_port_number(value: str) -> Optional[int]:
    """
    Reads the leading base 10 integer of a port value.

    :return: The port number, or None when the value does not start with one.
    """
    match = _LEADING_INT.match(value)
    if not match:
        return None
    try:
        return int(match.group(1))
    except ValueError:
        # Longer than sys.get_int_max_str_digits().
        return None


class PortSpecParser:
    """
    Parser for image port specs: mappings keyed by ``"<port>/<protocol>"``
    or ``"<port>"``. Only the keys matter.
    """
    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or get_logger(__name__)

    def parse(self, port_spec: Mapping[str, Any]) -> List[Port]:
        """
        Maps image ports to container ports, keeping the spec's order.
        Keys without a numeric port are skipped with a warning.

        :param port_spec: The ExposedPorts mapping of an image.
        :return: Parsed ports.
        """
        ports = []
        for key in port_spec:
            parts = key.split("/")
            if len(parts) == 1:
                parts.append(DEFAULT_PROTOCOL)

            container_port = parse_port_number(parts[0])
            if container_port is None:
                self.logger.warning("Container port %s is not a number", parts[0])
                continue

            ports.append(Port(container_port=container_port, protocol=parts[1].upper()))
        return ports
