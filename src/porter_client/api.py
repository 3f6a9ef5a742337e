"""Endpoint catalog: every backend operation, declared once at import time.

Usage::

    from porter_client import api

    response = await api.get_clusters(token, {}, {"id": project_id})
    api.create_project(token, {"name": "demo"}, {}, on_created)
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from porter_client.base_api import EndpointFunction, base_api
from porter_client.models import (
    AwsIntegrationBody,
    BranchContentsQuery,
    BranchPath,
    ChartListQuery,
    ClusterQuery,
    ClusterScopedPath,
    ConfigMapBody,
    ConfigMapQuery,
    CreateDocrBody,
    CreateDoksBody,
    CreateEcrBody,
    CreateGcrBody,
    CreateGkeBody,
    CredentialsBody,
    DeployPath,
    DeployTemplateBody,
    DestroyDoksBody,
    DestroyEksBody,
    DestroyGkeBody,
    GcpIntegrationBody,
    GitActionBody,
    GitActionPath,
    ImageRepoPath,
    InfraPath,
    IngressPath,
    InviteBody,
    InvitePath,
    JobImagesBody,
    NamespaceBody,
    NamespacedObjectPath,
    NamespaceDeletePath,
    PodSelectorQuery,
    ProjectBody,
    ProjectClusterPath,
    ProjectIdPath,
    ProjectPath,
    ProvisionEcrBody,
    ProvisionEksBody,
    RegistryPath,
    ReleaseActionPath,
    ReleaseJobsPath,
    ReleaseNamePath,
    ReleasePath,
    ReleaseQuery,
    ReleaseScopedPath,
    ReleaseStepsBody,
    RepoPath,
    RollbackBody,
    TemplatePath,
    UpdateUserBody,
    UpgradeBody,
    UserPath,
)
from porter_client.urls import segment, with_query

# --- Auth and users ---

check_auth = base_api("GET", "/api/auth/check", name="check_auth")

register_user = base_api("POST", "/api/users", body=CredentialsBody, name="register_user")

log_in_user = base_api("POST", "/api/login", body=CredentialsBody, name="log_in_user")

log_out_user = base_api("POST", "/api/logout", name="log_out_user")

get_user = base_api("GET", lambda p: f"/api/users/{p.id}", path=UserPath, name="get_user")

update_user = base_api(
    "PUT", lambda p: f"/api/users/{p.id}", body=UpdateUserBody, path=UserPath, name="update_user"
)

get_projects = base_api("GET", lambda p: f"/api/users/{p.id}/projects", path=UserPath, name="get_projects")

# --- Projects and invites ---

create_project = base_api("POST", "/api/projects", body=ProjectBody, name="create_project")

delete_project = base_api("DELETE", lambda p: f"/api/projects/{p.id}", path=ProjectPath, name="delete_project")

get_invites = base_api("GET", lambda p: f"/api/projects/{p.id}/invites", path=ProjectPath, name="get_invites")

create_invite = base_api(
    "POST", lambda p: f"/api/projects/{p.id}/invites", body=InviteBody, path=ProjectPath, name="create_invite"
)

delete_invite = base_api(
    "DELETE", lambda p: f"/api/projects/{p.id}/invites/{p.inv_id}", path=InvitePath, name="delete_invite"
)

# --- Clusters ---

get_clusters = base_api("GET", lambda p: f"/api/projects/{p.id}/clusters", path=ProjectPath, name="get_clusters")

get_project_clusters = base_api(
    "GET", lambda p: f"/api/projects/{p.id}/clusters", path=ProjectPath, name="get_project_clusters"
)

delete_cluster = base_api(
    "DELETE",
    lambda p: f"/api/projects/{p.project_id}/clusters/{p.cluster_id}",
    path=ProjectClusterPath,
    name="delete_cluster",
)

# --- Releases ---

get_charts = base_api(
    "GET", lambda p: f"/api/projects/{p.id}/releases", body=ChartListQuery, path=ProjectPath, name="get_charts"
)

get_chart = base_api(
    "GET",
    lambda p: f"/api/projects/{p.id}/releases/{segment(p.name)}/{p.revision}",
    body=ReleaseQuery,
    path=ReleasePath,
    name="get_chart",
)

get_chart_components = base_api(
    "GET",
    lambda p: f"/api/projects/{p.id}/releases/{segment(p.name)}/{p.revision}/components",
    body=ReleaseQuery,
    path=ReleasePath,
    name="get_chart_components",
)

get_chart_controllers = base_api(
    "GET",
    lambda p: f"/api/projects/{p.id}/releases/{segment(p.name)}/{p.revision}/controllers",
    body=ReleaseQuery,
    path=ReleasePath,
    name="get_chart_controllers",
)

get_release_all_pods = base_api(
    "GET",
    lambda p: f"/api/projects/{p.id}/releases/{segment(p.name)}/{p.revision}/pods/all",
    body=ReleaseQuery,
    path=ReleasePath,
    name="get_release_all_pods",
)

get_revisions = base_api(
    "GET",
    lambda p: f"/api/projects/{p.id}/releases/{segment(p.name)}/history",
    body=ReleaseQuery,
    path=ReleaseNamePath,
    name="get_revisions",
)

rollback_chart = base_api(
    "POST",
    lambda p: with_query(f"/api/projects/{p.id}/releases/{segment(p.name)}/rollback", cluster_id=p.cluster_id),
    body=RollbackBody,
    path=ReleaseActionPath,
    name="rollback_chart",
)

upgrade_chart_values = base_api(
    "POST",
    lambda p: with_query(f"/api/projects/{p.id}/releases/{segment(p.name)}/upgrade", cluster_id=p.cluster_id),
    body=UpgradeBody,
    path=ReleaseActionPath,
    name="upgrade_chart_values",
)

get_release_token = base_api(
    "GET",
    lambda p: f"/api/projects/{p.id}/releases/{segment(p.name)}/webhook_token",
    body=ReleaseQuery,
    path=ReleaseNamePath,
    name="get_release_token",
)

create_webhook_token = base_api(
    "POST",
    lambda p: with_query(
        f"/api/projects/{p.id}/releases/{segment(p.name)}/webhook_token",
        cluster_id=p.cluster_id,
        namespace=p.namespace,
        storage=p.storage,
    ),
    path=ReleaseScopedPath,
    name="create_webhook_token",
)

get_job_status = base_api(
    "GET",
    lambda p: f"/api/projects/{p.id}/releases/{segment(p.name)}/jobs/status",
    body=ReleaseQuery,
    path=ReleaseNamePath,
    name="get_job_status",
)

get_release_steps = base_api(
    "GET",
    lambda p: f"/api/projects/{p.id}/releases/{segment(p.name)}/steps",
    body=ReleaseQuery,
    path=ReleaseNamePath,
    name="get_release_steps",
)

update_release_steps = base_api(
    "POST",
    lambda p: with_query(
        f"/api/projects/{p.id}/releases/{segment(p.name)}/steps",
        cluster_id=p.cluster_id,
        namespace=p.namespace,
        storage=p.storage,
    ),
    body=ReleaseStepsBody,
    path=ReleaseScopedPath,
    name="update_release_steps",
)

update_job_images = base_api(
    "POST",
    lambda p: with_query(f"/api/projects/{p.id}/releases/{segment(p.name)}/jobs/image", cluster_id=p.cluster_id),
    body=JobImagesBody,
    path=ReleaseActionPath,
    name="update_job_images",
)

# --- Kubernetes objects ---

get_namespaces = base_api(
    "GET", lambda p: f"/api/projects/{p.id}/k8s/namespaces", body=ClusterQuery, path=ProjectPath, name="get_namespaces"
)

create_namespace = base_api(
    "POST",
    lambda p: with_query(f"/api/projects/{p.id}/k8s/namespaces/create", cluster_id=p.cluster_id),
    body=NamespaceBody,
    path=ClusterScopedPath,
    name="create_namespace",
)

delete_namespace = base_api(
    "DELETE",
    lambda p: with_query(f"/api/projects/{p.id}/k8s/namespaces/delete", cluster_id=p.cluster_id, name=p.name),
    path=NamespaceDeletePath,
    name="delete_namespace",
)

get_matching_pods = base_api(
    "GET", lambda p: f"/api/projects/{p.id}/k8s/pods", body=PodSelectorQuery, path=ProjectPath, name="get_matching_pods"
)

get_ingress = base_api(
    "GET",
    lambda p: f"/api/projects/{p.id}/k8s/{segment(p.namespace)}/ingress/{segment(p.name)}",
    body=ClusterQuery,
    path=IngressPath,
    name="get_ingress",
)

get_prometheus_is_installed = base_api(
    "GET",
    lambda p: f"/api/projects/{p.id}/k8s/prometheus/detect",
    body=ClusterQuery,
    path=ProjectPath,
    name="get_prometheus_is_installed",
)

get_jobs = base_api(
    "GET",
    lambda p: f"/api/projects/{p.id}/k8s/{segment(p.namespace)}/{segment(p.release_name)}/jobs",
    body=ClusterQuery,
    path=ReleaseJobsPath,
    name="get_jobs",
)

get_job_pods = base_api(
    "GET",
    lambda p: with_query(
        f"/api/projects/{p.id}/k8s/jobs/{segment(p.namespace)}/{segment(p.name)}/pods", cluster_id=p.cluster_id
    ),
    path=NamespacedObjectPath,
    name="get_job_pods",
)

delete_job = base_api(
    "DELETE",
    lambda p: with_query(
        f"/api/projects/{p.id}/k8s/jobs/{segment(p.namespace)}/{segment(p.name)}", cluster_id=p.cluster_id
    ),
    path=NamespacedObjectPath,
    name="delete_job",
)

stop_job = base_api(
    "POST",
    lambda p: with_query(
        f"/api/projects/{p.id}/k8s/jobs/{segment(p.namespace)}/{segment(p.name)}/stop", cluster_id=p.cluster_id
    ),
    path=NamespacedObjectPath,
    name="stop_job",
)

get_config_map = base_api(
    "GET", lambda p: f"/api/projects/{p.id}/k8s/configmap", body=ConfigMapQuery, path=ProjectPath, name="get_config_map"
)

create_config_map = base_api(
    "POST",
    lambda p: with_query(f"/api/projects/{p.id}/k8s/configmap/create", cluster_id=p.cluster_id),
    body=ConfigMapBody,
    path=ClusterScopedPath,
    name="create_config_map",
)

update_config_map = base_api(
    "POST",
    lambda p: with_query(f"/api/projects/{p.id}/k8s/configmap/update", cluster_id=p.cluster_id),
    body=ConfigMapBody,
    path=ClusterScopedPath,
    name="update_config_map",
)

delete_config_map = base_api(
    "DELETE",
    lambda p: with_query(
        f"/api/projects/{p.id}/k8s/configmap/delete", cluster_id=p.cluster_id, namespace=p.namespace, name=p.name
    ),
    path=NamespacedObjectPath,
    name="delete_config_map",
)

# --- Templates and deploy ---

get_templates = base_api("GET", "/api/templates", name="get_templates")

get_template_info = base_api(
    "GET",
    lambda p: f"/api/templates/{segment(p.name)}/{segment(p.version)}",
    path=TemplatePath,
    name="get_template_info",
)

deploy_template = base_api(
    "POST",
    lambda p: with_query(
        f"/api/projects/{p.id}/deploy/{segment(p.name)}/{segment(p.version)}", cluster_id=p.cluster_id
    ),
    body=DeployTemplateBody,
    path=DeployPath,
    name="deploy_template",
)

uninstall_template = base_api(
    "POST",
    lambda p: with_query(
        f"/api/projects/{p.id}/deploy/{segment(p.name)}",
        cluster_id=p.cluster_id,
        namespace=p.namespace,
        storage=p.storage,
    ),
    path=ReleaseScopedPath,
    name="uninstall_template",
)

create_git_action = base_api(
    "POST",
    lambda p: with_query(
        f"/api/projects/{p.project_id}/ci/actions", cluster_id=p.cluster_id, name=p.name, namespace=p.namespace
    ),
    body=GitActionBody,
    path=GitActionPath,
    name="create_git_action",
)

# --- Repos and registries ---

get_repos = base_api("GET", lambda p: f"/api/projects/{p.id}/repos", path=ProjectPath, name="get_repos")

get_branches = base_api(
    "GET", lambda p: f"/api/repos/{segment(p.kind)}/{segment(p.repo)}/branches", path=RepoPath, name="get_branches"
)

get_branch_contents = base_api(
    "GET",
    lambda p: f"/api/repos/{segment(p.kind)}/{segment(p.repo)}/{segment(p.branch)}/contents",
    body=BranchContentsQuery,
    path=BranchPath,
    name="get_branch_contents",
)

get_git_repos = base_api(
    "GET", lambda p: f"/api/projects/{p.project_id}/gitrepos", path=ProjectIdPath, name="get_git_repos"
)

link_github_project = base_api(
    "GET", lambda p: f"/api/oauth/projects/{p.project_id}/github", path=ProjectIdPath, name="link_github_project"
)

get_project_registries = base_api(
    "GET", lambda p: f"/api/projects/{p.id}/registries", path=ProjectPath, name="get_project_registries"
)

get_project_repos = base_api("GET", lambda p: f"/api/projects/{p.id}/repos", path=ProjectPath, name="get_project_repos")

get_image_repos = base_api(
    "GET",
    lambda p: f"/api/projects/{p.project_id}/registries/{p.registry_id}/repositories",
    path=RegistryPath,
    name="get_image_repos",
)

get_image_tags = base_api(
    "GET",
    lambda p: f"/api/projects/{p.project_id}/registries/{p.registry_id}/repositories/{segment(p.repo_name)}",
    path=ImageRepoPath,
    name="get_image_tags",
)

create_ecr = base_api(
    "POST", lambda p: f"/api/projects/{p.id}/registries", body=CreateEcrBody, path=ProjectPath, name="create_ecr"
)

# --- Integrations and infrastructure ---

get_cluster_integrations = base_api("GET", "/api/integrations/cluster", name="get_cluster_integrations")

get_registry_integrations = base_api("GET", "/api/integrations/registry", name="get_registry_integrations")

get_repo_integrations = base_api("GET", "/api/integrations/repo", name="get_repo_integrations")

get_oauth_ids = base_api(
    "GET", lambda p: f"/api/projects/{p.project_id}/integrations/oauth", path=ProjectIdPath, name="get_oauth_ids"
)

create_aws_integration = base_api(
    "POST",
    lambda p: f"/api/projects/{p.id}/integrations/aws",
    body=AwsIntegrationBody,
    path=ProjectPath,
    name="create_aws_integration",
)

create_gcp_integration = base_api(
    "POST",
    lambda p: f"/api/projects/{p.project_id}/integrations/gcp",
    body=GcpIntegrationBody,
    path=ProjectIdPath,
    name="create_gcp_integration",
)

provision_ecr = base_api(
    "POST",
    lambda p: f"/api/projects/{p.id}/provision/ecr",
    body=ProvisionEcrBody,
    path=ProjectPath,
    name="provision_ecr",
)

provision_eks = base_api(
    "POST",
    lambda p: f"/api/projects/{p.id}/provision/eks",
    body=ProvisionEksBody,
    path=ProjectPath,
    name="provision_eks",
)

create_gcr = base_api(
    "POST",
    lambda p: f"/api/projects/{p.project_id}/provision/gcr",
    body=CreateGcrBody,
    path=ProjectIdPath,
    name="create_gcr",
)

create_gke = base_api(
    "POST",
    lambda p: f"/api/projects/{p.project_id}/provision/gke",
    body=CreateGkeBody,
    path=ProjectIdPath,
    name="create_gke",
)

create_docr = base_api(
    "POST",
    lambda p: f"/api/projects/{p.project_id}/provision/docr",
    body=CreateDocrBody,
    path=ProjectIdPath,
    name="create_docr",
)

create_doks = base_api(
    "POST",
    lambda p: f"/api/projects/{p.project_id}/provision/doks",
    body=CreateDoksBody,
    path=ProjectIdPath,
    name="create_doks",
)

get_infra = base_api("GET", lambda p: f"/api/projects/{p.project_id}/infra", path=ProjectIdPath, name="get_infra")

destroy_eks = base_api(
    "POST",
    lambda p: f"/api/projects/{p.project_id}/infra/{p.infra_id}/eks/destroy",
    body=DestroyEksBody,
    path=InfraPath,
    name="destroy_eks",
)

destroy_gke = base_api(
    "POST",
    lambda p: f"/api/projects/{p.project_id}/infra/{p.infra_id}/gke/destroy",
    body=DestroyGkeBody,
    path=InfraPath,
    name="destroy_gke",
)

destroy_doks = base_api(
    "POST",
    lambda p: f"/api/projects/{p.project_id}/infra/{p.infra_id}/doks/destroy",
    body=DestroyDoksBody,
    path=InfraPath,
    name="destroy_doks",
)


def _build_registry() -> Mapping[str, EndpointFunction]:
    found = {value.name: value for value in globals().values() if isinstance(value, EndpointFunction)}
    return MappingProxyType(dict(sorted(found.items())))


ENDPOINTS: Mapping[str, EndpointFunction] = _build_registry()


def get_endpoint(name: str) -> EndpointFunction:
    """Look up a declared endpoint by name.

    Raises:
        ValueError: If no endpoint has that name.
    """
    if name not in ENDPOINTS:
        valid = ", ".join(ENDPOINTS)
        msg = f"Unknown endpoint '{name}'. Valid endpoints: {valid}"
        raise ValueError(msg)
    return ENDPOINTS[name]
