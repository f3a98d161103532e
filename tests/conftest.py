import pytest
from box import Box

from config import APP_NAME, config, contextualize


@pytest.fixture
def build_context(tmp_path):
    (tmp_path / "Dockerfile").write_text("FROM python:3.12-slim\nEXPOSE 8000\n")
    return tmp_path


@pytest.fixture
def settings(build_context):
    s = Box(config.to_dict())
    # independent of an ambient NAMESPACE
    s.cluster.name = contextualize(f"{APP_NAME}-cluster", ctx="")
    s.image.build_context = str(build_context)
    return s
