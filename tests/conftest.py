import os

import pytest
from loguru import logger

from refdocs.core.config.docs_config import DocsConfig
from refdocs.docgen.models import (
    ApiSpec,
    Definition,
    OperationCategory,
    Resource,
    ResourceCategory,
)
from refdocs.docgen.rendering import RenderContext
from tests.helpers.spec_factory import make_definition, make_operation


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Ensure tests run without REFDOCS_* variables leaking in from the shell."""
    for key in [k for k in os.environ if k.startswith("REFDOCS_")]:
        monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture(scope="session")
def render_context() -> RenderContext:
    return RenderContext.create()


@pytest.fixture
def docs_config(tmp_path) -> DocsConfig:
    return DocsConfig(
        title="Test API Reference",
        spec_version="v1.29.0",
        includes_dir=tmp_path / "includes",
        build_dir=tmp_path / "build",
    )


@pytest.fixture
def log_messages():
    """Capture loguru records at WARNING and above as plain strings."""
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(str(m)), level="WARNING")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def sample_spec() -> ApiSpec:
    pod = make_definition(
        "Pod",
        categories=[
            OperationCategory(
                name="Write Operations",
                operations=[make_operation("createCoreV1NamespacedPod", "Create")],
            ),
            OperationCategory(
                name="Read Operations",
                operations=[
                    make_operation("readCoreV1NamespacedPod", "Read"),
                    make_operation("listCoreV1NamespacedPod", "List"),
                ],
            ),
            OperationCategory(name="Status Operations", operations=[]),
        ],
    )
    deployment = make_definition("Deployment", group="apps")
    role = Definition(
        name="Role",
        version="v1",
        group="rbac",
        group_full_name="rbac.authorization.k8s.io",
    )
    return ApiSpec(
        group_versions={
            "rbac.authorization.k8s.io": ["v1"],
            "core": ["v1"],
            "apps": ["v1beta2", "v1"],
        },
        resource_categories=[
            ResourceCategory(
                name="Workloads APIs",
                include="workloads",
                resources=[
                    Resource(name="Pod", definition=pod),
                    Resource(name="Deployment", definition=deployment),
                ],
            ),
            ResourceCategory(
                name="Cluster APIs",
                include="cluster",
                resources=[Resource(name="Role", definition=role)],
            ),
        ],
        definitions=[
            make_definition("PodSpec"),
            make_definition("Container"),
        ],
        operations=[
            make_operation(
                "logFileHandler",
                "Log File Handler",
                responses=["401", "200"],
            ),
        ],
        old_version_definitions=[
            make_definition("Deployment", version="v1beta2", group="apps")
        ],
    )
