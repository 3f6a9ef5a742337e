"""Pydantic v2 models for responses and for every endpoint's body and path parameters."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

# Helm release storage driver.
StorageType = Literal["secret", "configmap", "memory"]


class ApiResponse(BaseModel):
    """Normalized success: the HTTP status plus the decoded JSON payload (None when empty)."""

    model_config = ConfigDict(frozen=True)

    status: int
    data: Any = None


class ParamsModel(BaseModel):
    """Base for body and path parameter shapes.

    Unknown fields are rejected so a misspelt parameter fails before any request
    is sent. Fields may declare the backend's camelCase name as an alias and are
    still populated by their Python name.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    def to_wire(self) -> dict[str, Any]:
        """Serialize using wire names, dropping optional fields that were left unset."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class EmptyParams(ParamsModel):
    """Shape of an endpoint that takes no body or no path parameters."""


# --- Path parameters ---


class UserPath(ParamsModel):
    id: int


class ProjectPath(ParamsModel):
    id: int


class ProjectIdPath(ParamsModel):
    project_id: int


class ClusterScopedPath(ParamsModel):
    id: int
    cluster_id: int


class ProjectClusterPath(ParamsModel):
    project_id: int
    cluster_id: int


class InvitePath(ParamsModel):
    id: int
    inv_id: int


class ReleaseNamePath(ParamsModel):
    id: int
    name: str


class ReleasePath(ParamsModel):
    id: int
    name: str
    revision: int


class ReleaseActionPath(ParamsModel):
    """Release addressed within a cluster, used by rollback and upgrade."""

    id: int
    name: str
    cluster_id: int


class ReleaseScopedPath(ParamsModel):
    id: int
    name: str
    cluster_id: int
    namespace: str
    storage: StorageType


class IngressPath(ParamsModel):
    id: int
    namespace: str
    name: str


class NamespaceDeletePath(ParamsModel):
    id: int
    cluster_id: int
    name: str


class NamespacedObjectPath(ParamsModel):
    """A named object inside one namespace of one cluster (jobs, config maps)."""

    id: int
    cluster_id: int
    namespace: str
    name: str


class ReleaseJobsPath(ParamsModel):
    id: int
    namespace: str
    release_name: str


class TemplatePath(ParamsModel):
    name: str
    version: str


class DeployPath(ParamsModel):
    id: int
    cluster_id: int
    name: str
    version: str


class RepoPath(ParamsModel):
    kind: str
    repo: str


class BranchPath(ParamsModel):
    kind: str
    repo: str
    branch: str


class RegistryPath(ParamsModel):
    project_id: int
    registry_id: int


class ImageRepoPath(ParamsModel):
    project_id: int
    registry_id: int
    repo_name: str


class InfraPath(ParamsModel):
    project_id: int
    infra_id: int


class GitActionPath(ParamsModel):
    project_id: int
    cluster_id: int
    name: str
    namespace: str


# --- Body parameters ---


class CredentialsBody(ParamsModel):
    email: str
    password: str


class UpdateUserBody(ParamsModel):
    raw_kube_config: str | None = Field(default=None, alias="rawKubeConfig")
    allowed_contexts: list[str] | None = Field(default=None, alias="allowedContexts")


class ProjectBody(ParamsModel):
    name: str


class InviteBody(ParamsModel):
    email: str


class ClusterQuery(ParamsModel):
    cluster_id: int


class ReleaseQuery(ParamsModel):
    namespace: str
    cluster_id: int
    storage: StorageType


class ChartListQuery(ParamsModel):
    namespace: str
    cluster_id: int
    storage: StorageType
    limit: int
    skip: int
    by_date: bool = Field(alias="byDate")
    status_filter: list[str] = Field(alias="statusFilter")


class PodSelectorQuery(ParamsModel):
    cluster_id: int
    selectors: list[str]


class ConfigMapQuery(ParamsModel):
    cluster_id: int
    namespace: str
    name: str


class RollbackBody(ParamsModel):
    namespace: str
    storage: StorageType
    revision: int


class UpgradeBody(ParamsModel):
    namespace: str
    storage: StorageType
    values: str


class ReleaseStepsBody(ParamsModel):
    steps: list[dict[str, Any]]


class JobImagesBody(ParamsModel):
    image_repo_uri: str
    tag: str
    namespace: str
    storage: StorageType


class NamespaceBody(ParamsModel):
    name: str


class ConfigMapBody(ParamsModel):
    name: str
    namespace: str
    variables: dict[str, str]


class BranchContentsQuery(ParamsModel):
    dir: str


class DeployTemplateBody(ParamsModel):
    template_name: str = Field(alias="templateName")
    image_url: str | None = Field(default=None, alias="imageURL")
    form_values: dict[str, Any] | None = Field(default=None, alias="formValues")
    storage: StorageType
    namespace: str
    name: str


class GitActionBody(ParamsModel):
    git_repo: str
    branch: str = ""
    image_repo_uri: str
    dockerfile_path: str = ""
    folder_path: str = ""
    git_repo_id: int
    registry_id: int | None = None
    should_create_workflow: bool = True


class AwsIntegrationBody(ParamsModel):
    aws_region: str
    aws_cluster_id: str | None = None
    aws_access_key_id: str
    aws_secret_access_key: str


class GcpIntegrationBody(ParamsModel):
    gcp_region: str
    gcp_key_data: str
    gcp_project_id: str


class ProvisionEcrBody(ParamsModel):
    ecr_name: str
    aws_integration_id: str


class ProvisionEksBody(ParamsModel):
    eks_name: str
    aws_integration_id: str


class CreateEcrBody(ParamsModel):
    name: str
    aws_integration_id: str


class CreateGcrBody(ParamsModel):
    gcp_integration_id: int


class CreateGkeBody(ParamsModel):
    gcp_integration_id: int
    gke_name: str


class CreateDocrBody(ParamsModel):
    do_integration_id: int
    docr_name: str
    docr_subscription_tier: str


class CreateDoksBody(ParamsModel):
    do_integration_id: int
    doks_name: str
    do_region: str


class DestroyEksBody(ParamsModel):
    eks_name: str


class DestroyGkeBody(ParamsModel):
    gke_name: str


class DestroyDoksBody(ParamsModel):
    doks_name: str
