import aws_cdk as cdk
import pytest
from aws_cdk.assertions import Match, Template

from topology.ecs_stack import add_stack
from topology.graph import DeploymentTarget, build_graph


@pytest.fixture
def template(settings):
    graph = build_graph(DeploymentTarget(region="us-east-1"), settings)
    stack = add_stack(cdk.App(), "CdkAppStack", graph, tags={"app": "testapp"})
    return Template.from_stack(stack)


def test_stack_environment(settings):
    graph = build_graph(DeploymentTarget(region="us-east-1", account="123456789012"), settings)
    stack = add_stack(cdk.App(), "CdkAppStack", graph)

    assert stack.region == "us-east-1"
    assert stack.account == "123456789012"


def test_network(template):
    template.resource_count_is("AWS::EC2::VPC", 1)
    # one public and one private subnet per zone
    template.resource_count_is("AWS::EC2::Subnet", 4)


def test_cluster(template):
    template.resource_count_is("AWS::ECS::Cluster", 1)
    template.has_resource_properties("AWS::ECS::Cluster", {"ClusterName": "testapp-cluster"})


def test_service(template):
    template.resource_count_is("AWS::ECS::Service", 1)
    template.has_resource_properties(
        "AWS::ECS::Service",
        {"DesiredCount": 1, "LaunchType": "FARGATE"},
    )
    template.has_resource_properties(
        "AWS::ECS::TaskDefinition",
        {
            "Cpu": "256",
            "Memory": "512",
            "ContainerDefinitions": [
                Match.object_like({"PortMappings": [Match.object_like({"ContainerPort": 8000})]}),
            ],
        },
    )


def test_public_load_balancer(template):
    template.has_resource_properties(
        "AWS::ElasticLoadBalancingV2::LoadBalancer",
        {"Scheme": "internet-facing"},
    )


def test_internal_load_balancer(settings):
    settings.service.public_load_balancer = False
    graph = build_graph(DeploymentTarget(region="us-east-1"), settings)
    stack = add_stack(cdk.App(), "CdkAppStack", graph)

    Template.from_stack(stack).has_resource_properties(
        "AWS::ElasticLoadBalancingV2::LoadBalancer",
        {"Scheme": "internal"},
    )


def test_tags(settings):
    graph = build_graph(DeploymentTarget(region="us-east-1"), settings)
    stack = add_stack(cdk.App(), "CdkAppStack", graph, tags={"app": "testapp"})

    assert stack.tags.tag_values() == {"app": "testapp"}
