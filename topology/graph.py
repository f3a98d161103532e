"""Resource graph for the testapp deployment.

The graph is a strict tree of immutable records: Network -> Cluster -> Service.
It is built once per run by ``build_graph`` and handed whole to the stack
renderer in ``topology.ecs_stack``.
"""
import logging
import os
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from box import Box

from config import config

logger = logging.getLogger(__name__)

DOCKERFILE = "Dockerfile"
SUPPORTED_PLATFORMS = ("linux/amd64", "linux/arm64")


class TopologyError(Exception):
    pass


class ConfigurationError(TopologyError):
    """A required parameter is missing or malformed."""


class BuildContextError(TopologyError):
    """The container build context is missing or cannot be built."""


@dataclass(frozen=True)
class DeploymentTarget:
    region: str
    # None leaves account resolution to the CDK CLI environment
    account: Optional[str] = None


@dataclass(frozen=True)
class Network:
    construct_id: str
    max_azs: int


@dataclass(frozen=True)
class Cluster:
    construct_id: str
    name: str
    network: Network


@dataclass(frozen=True)
class ImageReference:
    build_context: str
    platform: str


@dataclass(frozen=True)
class ServiceDescriptor:
    construct_id: str
    cluster: Cluster
    image: ImageReference
    cpu: int
    memory_mib: int
    desired_count: int
    container_port: int
    public_load_balancer: bool


@dataclass(frozen=True)
class ResourceGraph:
    target: DeploymentTarget
    network: Network
    cluster: Cluster
    service: ServiceDescriptor

    def nodes(self) -> Tuple[Union[Network, Cluster, ServiceDescriptor], ...]:
        return (self.network, self.cluster, self.service)


def _positive_int(section: str, key: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigurationError(f"{section}.{key} must be a positive integer, got {value!r}")
    return value


def _validate_target(target: DeploymentTarget):
    if not isinstance(target.region, str) or not target.region.strip():
        raise ConfigurationError("deployment target requires a non-empty region")
    if target.account is not None and not str(target.account).strip():
        raise ConfigurationError("account must be omitted or non-empty")


def _validate_settings(settings: Box):
    _positive_int("network", "max_azs", settings.network.max_azs)
    if not settings.cluster.name:
        raise ConfigurationError("cluster.name must not be empty")

    service = settings.service
    for key in ("cpu", "memory_mib", "desired_count"):
        _positive_int("service", key, service[key])
    port = _positive_int("service", "container_port", service.container_port)
    if port > 65535:
        raise ConfigurationError(f"service.container_port out of range: {port}")
    if not isinstance(service.public_load_balancer, bool):
        raise ConfigurationError("service.public_load_balancer must be a boolean")


def resolve_image(build_context: str, platform: str) -> ImageReference:
    """Check that ``build_context`` can be built for ``platform``.

    The image itself is built and pushed later by the CDK CLI; only the
    local directory is inspected here.
    """
    if platform not in SUPPORTED_PLATFORMS:
        raise BuildContextError(
            f"platform {platform!r} is not supported, expected one of {', '.join(SUPPORTED_PLATFORMS)}"
        )

    path = os.path.abspath(build_context)
    if not os.path.isdir(path):
        raise BuildContextError(f"build context not found: {path}")
    if not os.path.isfile(os.path.join(path, DOCKERFILE)):
        raise BuildContextError(f"no {DOCKERFILE} in build context: {path}")

    return ImageReference(build_context=path, platform=platform)


def build_graph(target: DeploymentTarget, settings: Optional[Box] = None) -> ResourceGraph:
    settings = config if settings is None else settings

    _validate_target(target)
    _validate_settings(settings)
    logger.info("Building resource graph for region=%s account=%s", target.region, target.account or "<ambient>")

    image = resolve_image(settings.image.build_context, settings.image.platform)
    logger.debug("Using build context %s (%s)", image.build_context, image.platform)

    network = Network(
        construct_id=settings.network.construct_id,
        max_azs=settings.network.max_azs,
    )
    cluster = Cluster(
        construct_id=settings.cluster.construct_id,
        name=settings.cluster.name,
        network=network,
    )
    service = ServiceDescriptor(
        construct_id=settings.service.construct_id,
        cluster=cluster,
        image=image,
        cpu=settings.service.cpu,
        memory_mib=settings.service.memory_mib,
        desired_count=settings.service.desired_count,
        container_port=settings.service.container_port,
        public_load_balancer=settings.service.public_load_balancer,
    )

    return ResourceGraph(target=target, network=network, cluster=cluster, service=service)
