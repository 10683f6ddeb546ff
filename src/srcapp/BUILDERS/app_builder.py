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
Builders for the API objects of an application built from source: image
stream, build config, deployment config, and, when the builder image exposes
ports, a service and route.
"""
import logging
from typing import Any, Dict, List, Optional, Union

from ..MODELS.builder_config import BuilderConfig, Image, ImageStreamTag, Port
from ..PARSERS.port_parser import PortSpecParser
from ..UTILS.labels import get_annotations, get_labels, get_port_name, merge_labels
from ..UTILS.secret_generator import SecretGenerator
from ..logging_config import get_logger

DEFAULT_GIT_REF = "master"
API_VERSION = "v1"


class AppObjectBuilder:
    """
    Turns a :class:`BuilderConfig` into the objects that create the app.

    The builder holds only its collaborators; every call builds new objects.
    """

    def __init__(self, logger: Optional[logging.Logger] = None,
                 secret_generator: Optional[SecretGenerator] = None):
        """
        :param logger: Receives warnings about unusable image ports.
        :param secret_generator: Source of webhook trigger secrets.
        """
        self.logger = logger or get_logger(__name__)
        self.secret_generator = secret_generator or SecretGenerator()
        self.port_parser = PortSpecParser(self.logger)

    def make_api_objects(self, config: Union[BuilderConfig, Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Builds all objects for the app, in creation order.

        :param config: The app configuration, as a model or its wire dict.
        :return: ImageStream, BuildConfig and DeploymentConfig, followed by a
            Service and Route for the first image port if there is one.
        """
        if not isinstance(config, BuilderConfig):
            config = BuilderConfig.model_validate(config)

        ports = self.get_ports(config.image_stream_tag)

        objects = [
            self._make_image_stream(config),
            self._make_build_config(config),
            self._make_deployment_config(config, ports),
        ]

        # Only create a service and route if there are ports in the builder image.
        if ports:
            first_port = ports[0]
            objects.append(self._make_service(config, first_port))
            objects.append(self._make_route(config, first_port))

        self.logger.debug("Built %d objects for %s", len(objects), config.name)
        return objects

    def get_ports(self, image_stream_tag: Union[ImageStreamTag, Dict[str, Any]]) -> List[Port]:
        """
        Parses the ports exposed by the builder image.

        Only the tag's ``image`` is read, so a tag without metadata is fine.
        """
        if isinstance(image_stream_tag, ImageStreamTag):
            image = image_stream_tag.image
        else:
            raw_image = image_stream_tag.get("image")
            image = Image.model_validate(raw_image) if raw_image is not None else None
        port_spec = image.exposed_ports() if image is not None else {}
        return self.port_parser.parse(port_spec)

    def _metadata(self, config: BuilderConfig) -> Dict[str, Any]:
        return {
            "name": config.name,
            "labels": get_labels(config.name),
            "annotations": get_annotations(),
        }

    def _make_image_stream(self, config: BuilderConfig) -> Dict[str, Any]:
        return {
            "apiVersion": API_VERSION,
            "kind": "ImageStream",
            "metadata": self._metadata(config),
        }

    def _make_build_config(self, config: BuilderConfig) -> Dict[str, Any]:
        """
        Builds a source-to-image BuildConfig that pushes to ``<name>:latest``.
        The generic and GitHub webhooks each get their own secret.
        """
        source: Dict[str, Any] = {
            "git": {
                "ref": config.git_ref or DEFAULT_GIT_REF,
                "uri": config.repository,
            },
            "type": "Git",
        }
        if config.context_dir:
            source["contextDir"] = config.context_dir

        builder_meta = config.image_stream_tag.metadata
        return {
            "apiVersion": API_VERSION,
            "kind": "BuildConfig",
            "metadata": self._metadata(config),
            "spec": {
                "output": {
                    "to": {
                        "kind": "ImageStreamTag",
                        "name": f"{config.name}:latest",
                    }
                },
                "source": source,
                "strategy": {
                    "type": "Source",
                    "sourceStrategy": {
                        "from": {
                            "kind": "ImageStreamTag",
                            "name": builder_meta.name,
                            "namespace": builder_meta.namespace,
                        },
                        "env": [],
                    },
                },
                "triggers": [
                    {"type": "ImageChange", "imageChange": {}},
                    {"type": "ConfigChange"},
                    {"type": "Generic", "generic": {"secret": self.secret_generator.generate()}},
                    {"type": "GitHub", "github": {"secret": self.secret_generator.generate()}},
                ],
            },
        }

    def _make_deployment_config(self, config: BuilderConfig, ports: List[Port]) -> Dict[str, Any]:
        name = config.name
        return {
            "apiVersion": API_VERSION,
            "kind": "DeploymentConfig",
            "metadata": self._metadata(config),
            "spec": {
                "replicas": 1,
                "selector": {"deploymentconfig": name},
                "triggers": [
                    {
                        "type": "ImageChange",
                        "imageChangeParams": {
                            "automatic": True,
                            "containerNames": [name],
                            "from": {
                                "kind": "ImageStreamTag",
                                "name": f"{name}:latest",
                            },
                        },
                    },
                    {"type": "ConfigChange"},
                ],
                "template": {
                    "metadata": {
                        "labels": merge_labels({"deploymentconfig": name}, get_labels(name)),
                    },
                    "spec": {
                        "containers": [{
                            "name": name,
                            "image": f"{name}:latest",
                            "ports": [port.to_dict() for port in ports],
                            "env": [],
                        }],
                    },
                },
            },
        }

    def _make_service(self, config: BuilderConfig, port: Port) -> Dict[str, Any]:
        return {
            "apiVersion": API_VERSION,
            "kind": "Service",
            "metadata": self._metadata(config),
            "spec": {
                "selector": {"deploymentconfig": config.name},
                "ports": [{
                    "port": port.container_port,
                    "targetPort": port.container_port,
                    "protocol": port.protocol,
                    "name": get_port_name(port),
                }],
            },
        }

    def _make_route(self, config: BuilderConfig, port: Port) -> Dict[str, Any]:
        """
        Builds a route to the service created by :meth:`_make_service`.
        """
        return {
            "apiVersion": API_VERSION,
            "kind": "Route",
            "metadata": self._metadata(config),
            "spec": {
                "to": {"kind": "Service", "name": config.name},
                # The router resolves ports through endpoints, not the service,
                # so the target must be the port name rather than its number.
                "port": {"targetPort": get_port_name(port)},
                "wildcardPolicy": "None",
            },
        }
