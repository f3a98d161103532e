import os

from box import Box

NAMESPACE = os.getenv("NAMESPACE", "")
APP_NAME = "testapp"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
BUILD_CONTEXT = os.getenv(
    "BUILD_CONTEXT",
    os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "TestApp", "TestApp"),
)


def contextualize(string: str, ctx=NAMESPACE, sep="-", append=True):
    groups = [string, ctx] if append else [ctx, string]
    return sep.join(groups).strip(sep)


config = Box(
    {
        "namespace": NAMESPACE,
        "aws": {
            "region": "us-east-1",
            "account": os.getenv("CDK_DEFAULT_ACCOUNT"),
            "tags": {
                "purpose": "testapp deployment",
                "app": APP_NAME,
            },
        },
        "network": {
            "construct_id": "TestAppVPC",
            "max_azs": 2,
        },
        "cluster": {
            "construct_id": "TestAppCluster",
            "name": contextualize(f"{APP_NAME}-cluster"),
        },
        "service": {
            "construct_id": "TestAppService",
            "cpu": 256,
            "memory_mib": 512,
            "desired_count": 1,
            "container_port": 8000,
            "public_load_balancer": True,
        },
        "image": {
            "build_context": BUILD_CONTEXT,
            "platform": "linux/amd64",
        },
    }
)
