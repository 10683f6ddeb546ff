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
Utilities for the labels, annotations and port names shared by every
generated object.
"""
from typing import Dict

from ..MODELS.builder_config import Port

GENERATED_BY_ANNOTATION = "openshift.io/generated-by"
GENERATED_BY = "OpenShiftWebConsole"


def get_labels(name: str) -> Dict[str, str]:
    """
    Labels shared by every object of the app.
    """
    return {"app": name}


def get_annotations() -> Dict[str, str]:
    """
    Annotations marking objects as created by the web console.
    """
    return {GENERATED_BY_ANNOTATION: GENERATED_BY}


def get_port_name(port: Port) -> str:
    """
    Names a port the same way ``oc new-app`` does, e.g. ``8080-tcp``.
    Services and routes must agree on this name.
    """
    return f"{port.container_port}-{port.protocol}".lower()


def merge_labels(base: Dict[str, str], extra: Dict[str, str]) -> Dict[str, str]:
    """
    Merges two label mappings into a new dict.

    Keys already present in ``base`` are kept; ``extra`` only fills gaps.

    :param base: Labels that win on collision.
    :param extra: Labels added where ``base`` has no value.
    :return: The merged labels.
    """
    merged = dict(base)
    for key, value in extra.items():
        if key not in merged:
            merged[key] = value
    return merged
