import logging

import aws_cdk as cdk
from aws_cdk import (
    aws_ec2 as ec2,
    aws_ecr_assets as ecr_assets,
    aws_ecs as ecs,
    aws_ecs_patterns as ecs_patterns,
)
from constructs import Construct

from topology.graph import Cluster, Network, ResourceGraph, ServiceDescriptor

logger = logging.getLogger(__name__)

PLATFORMS = {
    "linux/amd64": ecr_assets.Platform.LINUX_AMD64,
    "linux/arm64": ecr_assets.Platform.LINUX_ARM64,
}


def add_network(stack: cdk.Stack, network: Network) -> ec2.Vpc:
    return ec2.Vpc(stack, network.construct_id, max_azs=network.max_azs)


def add_cluster(stack: cdk.Stack, cluster: Cluster, vpc: ec2.IVpc) -> ecs.Cluster:
    return ecs.Cluster(
        stack,
        cluster.construct_id,
        vpc=vpc,
        cluster_name=cluster.name,
    )


def add_service(
    stack: cdk.Stack, service: ServiceDescriptor, cluster: ecs.ICluster
) -> ecs_patterns.ApplicationLoadBalancedFargateService:
    image = ecs.ContainerImage.from_asset(
        service.image.build_context,
        platform=PLATFORMS[service.image.platform],
    )

    return ecs_patterns.ApplicationLoadBalancedFargateService(
        stack,
        service.construct_id,
        cluster=cluster,
        cpu=service.cpu,
        desired_count=service.desired_count,
        memory_limit_mib=service.memory_mib,
        public_load_balancer=service.public_load_balancer,
        task_image_options=ecs_patterns.ApplicationLoadBalancedTaskImageOptions(
            image=image,
            container_port=service.container_port,
        ),
    )


def add_stack(scope: Construct, construct_id: str, graph: ResourceGraph, **kwargs) -> cdk.Stack:
    """Render ``graph`` into a new stack under ``scope``.

    The stack environment comes from the graph's deployment target. Extra
    keyword arguments (``tags``, ``stack_name``, ...) go to ``cdk.Stack``.
    """
    stack = cdk.Stack(
        scope,
        construct_id,
        env=cdk.Environment(
            account=graph.target.account,
            region=graph.target.region,
        ),
        **kwargs,
    )

    vpc = add_network(stack, graph.network)
    cluster = add_cluster(stack, graph.cluster, vpc)
    add_service(stack, graph.service, cluster)

    logger.info("Rendered %s with %d resource nodes", construct_id, len(graph.nodes()))
    return stack
