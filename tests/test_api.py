"""Tests for the endpoint catalog: registry contents and the requests each declaration produces."""

from __future__ import annotations

import json
from typing import Any

import pytest
from conftest import RecordingBackend

from porter_client import api
from porter_client.base_api import EndpointFunction
from porter_client.errors import ClientConstructionError
from porter_client.transport import ApiClient

EXPECTED_ENDPOINTS = {
    "check_auth",
    "register_user",
    "log_in_user",
    "log_out_user",
    "get_user",
    "update_user",
    "get_projects",
    "create_project",
    "delete_project",
    "get_invites",
    "create_invite",
    "delete_invite",
    "get_clusters",
    "get_project_clusters",
    "delete_cluster",
    "get_charts",
    "get_chart",
    "get_chart_components",
    "get_chart_controllers",
    "get_release_all_pods",
    "get_revisions",
    "rollback_chart",
    "upgrade_chart_values",
    "get_release_token",
    "create_webhook_token",
    "get_job_status",
    "get_release_steps",
    "update_release_steps",
    "update_job_images",
    "get_namespaces",
    "create_namespace",
    "delete_namespace",
    "get_matching_pods",
    "get_ingress",
    "get_prometheus_is_installed",
    "get_jobs",
    "get_job_pods",
    "delete_job",
    "stop_job",
    "get_config_map",
    "create_config_map",
    "update_config_map",
    "delete_config_map",
    "get_templates",
    "get_template_info",
    "deploy_template",
    "uninstall_template",
    "create_git_action",
    "get_repos",
    "get_branches",
    "get_branch_contents",
    "get_git_repos",
    "link_github_project",
    "get_project_registries",
    "get_project_repos",
    "get_image_repos",
    "get_image_tags",
    "create_ecr",
    "get_cluster_integrations",
    "get_registry_integrations",
    "get_repo_integrations",
    "get_oauth_ids",
    "create_aws_integration",
    "create_gcp_integration",
    "provision_ecr",
    "provision_eks",
    "create_gcr",
    "create_gke",
    "create_docr",
    "create_doks",
    "get_infra",
    "destroy_eks",
    "destroy_gke",
    "destroy_doks",
}


class TestRegistry:
    """Tests for the ENDPOINTS registry and get_endpoint."""

    def test_registry_matches_catalog(self) -> None:
        assert set(api.ENDPOINTS) == EXPECTED_ENDPOINTS

    @pytest.mark.parametrize("name", sorted(EXPECTED_ENDPOINTS))
    def test_registry_entry_is_module_attribute(self, name: str) -> None:
        endpoint = api.ENDPOINTS[name]
        assert isinstance(endpoint, EndpointFunction)
        assert getattr(api, name) is endpoint
        assert endpoint.spec.method in {"GET", "POST", "PUT", "DELETE"}

    def test_registry_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            api.ENDPOINTS["get_clusters"] = api.get_chart  # type: ignore[index]

    def test_get_endpoint(self) -> None:
        assert api.get_endpoint("rollback_chart") is api.rollback_chart

    def test_get_endpoint_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unknown endpoint 'get_pods'"):
            api.get_endpoint("get_pods")


RELEASE_QUERY = {"namespace": "default", "cluster_id": 2, "storage": "secret"}

# (endpoint, body, path, method, raw path, query)
REQUEST_CASES: list[tuple[str, dict[str, Any], dict[str, Any], str, str, dict[str, Any]]] = [
    ("check_auth", {}, {}, "GET", "/api/auth/check", {}),
    ("get_clusters", {}, {"id": 7}, "GET", "/api/projects/7/clusters", {}),
    ("get_projects", {}, {"id": 3}, "GET", "/api/users/3/projects", {}),
    ("delete_invite", {}, {"id": 1, "inv_id": 5}, "DELETE", "/api/projects/1/invites/5", {}),
    (
        "get_chart",
        RELEASE_QUERY,
        {"id": 1, "name": "web", "revision": 4},
        "GET",
        "/api/projects/1/releases/web/4",
        {"namespace": "default", "cluster_id": "2", "storage": "secret"},
    ),
    (
        "get_revisions",
        RELEASE_QUERY,
        {"id": 1, "name": "web"},
        "GET",
        "/api/projects/1/releases/web/history",
        {"namespace": "default"},
    ),
    (
        "rollback_chart",
        {"namespace": "default", "storage": "secret", "revision": 2},
        {"id": 1, "name": "web", "cluster_id": 2},
        "POST",
        "/api/projects/1/releases/web/rollback",
        {"cluster_id": "2"},
    ),
    (
        "uninstall_template",
        {},
        {"id": 1, "name": "web", "cluster_id": 2, "namespace": "apps", "storage": "configmap"},
        "POST",
        "/api/projects/1/deploy/web",
        {"cluster_id": "2", "namespace": "apps", "storage": "configmap"},
    ),
    (
        "deploy_template",
        {"template_name": "web", "storage": "secret", "namespace": "default", "name": "my-web"},
        {"id": 1, "cluster_id": 2, "name": "web", "version": "v0.9.0"},
        "POST",
        "/api/projects/1/deploy/web/v0.9.0",
        {"cluster_id": "2"},
    ),
    (
        "get_branch_contents",
        {"dir": "./"},
        {"kind": "github", "repo": "porter", "branch": "feature/login"},
        "GET",
        "/api/repos/github/porter/feature%2Flogin/contents",
        {"dir": "./"},
    ),
    (
        "get_ingress",
        {"cluster_id": 2},
        {"id": 1, "namespace": "default", "name": "web-ingress"},
        "GET",
        "/api/projects/1/k8s/default/ingress/web-ingress",
        {"cluster_id": "2"},
    ),
    (
        "delete_config_map",
        {},
        {"id": 1, "cluster_id": 2, "namespace": "default", "name": "env"},
        "DELETE",
        "/api/projects/1/k8s/configmap/delete",
        {"cluster_id": "2", "namespace": "default", "name": "env"},
    ),
    (
        "create_git_action",
        {"git_repo": "porter-dev/porter", "image_repo_uri": "gcr.io/p/web", "git_repo_id": 4},
        {"project_id": 1, "cluster_id": 2, "name": "web", "namespace": "default"},
        "POST",
        "/api/projects/1/ci/actions",
        {"cluster_id": "2", "name": "web", "namespace": "default"},
    ),
    (
        "destroy_eks",
        {"eks_name": "prod"},
        {"project_id": 1, "infra_id": 8},
        "POST",
        "/api/projects/1/infra/8/eks/destroy",
        {},
    ),
    (
        "get_image_tags",
        {},
        {"project_id": 1, "registry_id": 3, "repo_name": "org/web"},
        "GET",
        "/api/projects/1/registries/3/repositories/org%2Fweb",
        {},
    ),
]


class TestCatalogRequests:
    """Tests for the requests produced by catalog declarations."""

    @pytest.mark.parametrize(
        "name,body,path,method,raw_path,query", REQUEST_CASES, ids=[case[0] for case in REQUEST_CASES]
    )
    async def test_request_shape(
        self,
        backend: RecordingBackend,
        api_client: ApiClient,
        name: str,
        body: dict[str, Any],
        path: dict[str, Any],
        method: str,
        raw_path: str,
        query: dict[str, Any],
    ) -> None:
        await api.get_endpoint(name)("", body, path, client=api_client)

        request = backend.last
        assert request.method == method
        assert request.url.raw_path.decode().split("?")[0] == raw_path
        for key, value in query.items():
            assert request.url.params[key] == value

    async def test_get_charts_list_and_flag_params(self, backend: RecordingBackend, api_client: ApiClient) -> None:
        body = {
            "namespace": "default",
            "cluster_id": 2,
            "storage": "secret",
            "limit": 20,
            "skip": 40,
            "byDate": False,
            "statusFilter": ["deployed", "failed"],
        }

        await api.get_charts("tok", body, {"id": 1}, client=api_client)

        params = backend.last.url.params
        assert params.get_list("statusFilter") == ["deployed", "failed"]
        assert params["byDate"] == "false"
        assert params["skip"] == "40"
        assert backend.last.content == b""

    async def test_update_user_sends_camel_case_body(self, backend: RecordingBackend, api_client: ApiClient) -> None:
        await api.update_user("tok", {"raw_kube_config": "apiVersion: v1"}, {"id": 2}, client=api_client)

        assert backend.last.method == "PUT"
        assert json.loads(backend.last.content) == {"rawKubeConfig": "apiVersion: v1"}

    async def test_deploy_template_omits_unset_optional_fields(
        self, backend: RecordingBackend, api_client: ApiClient
    ) -> None:
        body = {
            "templateName": "web",
            "formValues": {"replicaCount": 2},
            "storage": "secret",
            "namespace": "default",
            "name": "my-web",
        }

        path = {"id": 1, "cluster_id": 2, "name": "web", "version": "v1"}
        await api.deploy_template("", body, path, client=api_client)

        assert json.loads(backend.last.content) == body

    async def test_create_config_map_body(self, backend: RecordingBackend, api_client: ApiClient) -> None:
        body = {"name": "env", "namespace": "default", "variables": {"PORT": "8080"}}

        await api.create_config_map("", body, {"id": 1, "cluster_id": 2}, client=api_client)

        assert json.loads(backend.last.content) == body
        assert backend.last.url.params["cluster_id"] == "2"

    async def test_missing_cluster_id_fails_before_request(
        self, backend: RecordingBackend, api_client: ApiClient
    ) -> None:
        with pytest.raises(ClientConstructionError, match="cluster_id"):
            await api.rollback_chart(
                "",
                {"namespace": "default", "storage": "secret", "revision": 2},
                {"id": 1, "name": "web"},
                client=api_client,
            )
        assert backend.requests == []
