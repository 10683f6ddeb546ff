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
Converters for rendering built objects as a single List manifest.
"""
import json
import os
from typing import Any, Dict, List

import yaml

FORMATS = ("yaml", "json")


class ManifestConverter:
    """
    Wraps generated objects in a ``v1`` List, ready for ``oc create -f``.
    """

    def __init__(self, objects: List[Dict[str, Any]]):
        """
        :param objects: Objects from :meth:`AppObjectBuilder.make_api_objects`.
        """
        self.objects = objects

    def to_list(self) -> Dict[str, Any]:
        return {
            "apiVersion": "v1",
            "kind": "List",
            "items": list(self.objects),
        }

    def render(self, fmt: str = "yaml") -> str:
        """
        Renders the List manifest.

        :param fmt: ``yaml`` or ``json``.
        :return: The manifest text.
        """
        if fmt == "yaml":
            return yaml.safe_dump(self.to_list(), sort_keys=False, default_flow_style=False)
        if fmt == "json":
            return json.dumps(self.to_list(), indent=2) + "\n"
        raise ValueError(f"Unknown manifest format: {fmt}")

    def convert(self, output_path: str, fmt: str = "yaml") -> str:
        """
        Writes the manifest to a file.

        :param output_path: Destination file; parent directories are created.
        :param fmt: ``yaml`` or ``json``.
        :return: The path written.
        """
        content = self.render(fmt)
        parent = os.path.dirname(output_path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(output_path, "w") as f:
            f.write(content)
        return output_path
