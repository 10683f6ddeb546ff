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
Models for the "new app from source" input configuration and the ports
derived from a builder image.
"""
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field


class _PartialModel(BaseModel):
    """
    Base for models describing objects owned by the image metadata provider.
    Only the documented fields are typed; anything else is kept but ignored.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)


class ContainerConfig(_PartialModel):
    """
    The subset of a Docker image config that carries exposed ports.
    """
    exposed_ports: Optional[Dict[str, Any]] = Field(default=None, alias="ExposedPorts")


class DockerImageMetadata(_PartialModel):
    """
    Docker metadata recorded for an image. Ports may live under either key.
    """
    config: Optional[ContainerConfig] = Field(default=None, alias="Config")
    container_config: Optional[ContainerConfig] = Field(default=None, alias="ContainerConfig")


class Image(_PartialModel):
    docker_image_metadata: Optional[DockerImageMetadata] = Field(
        default=None, alias="dockerImageMetadata"
    )

    def exposed_ports(self) -> Dict[str, Any]:
        """
        Returns the exposed port spec of the image.

        ``Config.ExposedPorts`` is used whenever it is set, even when empty;
        ``ContainerConfig.ExposedPorts`` is the fallback. A missing link
        anywhere yields an empty mapping.
        """
        metadata = self.docker_image_metadata
        if metadata is None:
            return {}
        if metadata.config is not None and metadata.config.exposed_ports is not None:
            return metadata.config.exposed_ports
        if (metadata.container_config is not None
                and metadata.container_config.exposed_ports is not None):
            return metadata.container_config.exposed_ports
        return {}


class ObjectMeta(_PartialModel):
    name: str
    namespace: Optional[str] = None


class ImageStreamTag(_PartialModel):
    """
    The builder image stream tag selected by the user.
    """
    metadata: ObjectMeta
    image: Optional[Image] = None

    def exposed_ports(self) -> Dict[str, Any]:
        return self.image.exposed_ports() if self.image else {}


class BuilderConfig(_PartialModel):
    """
    Everything needed to build an application from a git repository with a
    source-to-image builder.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    name: str
    repository: str
    git_ref: Optional[str] = Field(default=None, alias="gitRef")
    context_dir: Optional[str] = Field(default=None, alias="contextDir")
    image_stream_tag: ImageStreamTag = Field(alias="imageStreamTag")


class Port(BaseModel):
    """
    A container port in the shape the deployment's container spec expects.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    container_port: int = Field(alias="containerPort")
    protocol: str = "TCP"

    def to_dict(self) -> Dict[str, Any]:
        return {"containerPort": self.container_port, "protocol": self.protocol}
