"""
OrganizeIT Dashboard API -- Pydantic Data Models

Request bodies and the handful of fixed-shape responses. Most dashboard
records (alerts, projects, users...) are loosely typed JSON that the
front end owns, so they travel as plain dicts; the models here cover the
bodies the handlers actually read fields from.

The front end mixes camelCase and snake_case field names. Models keep the
wire name as an alias and accept either spelling (populate_by_name).
Unknown fields are ignored rather than rejected.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RequestBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# ---------------------------------------------------------------------------
# System
# ---------------------------------------------------------------------------

class HealthResponse(BaseModel):
    status: str = Field(examples=["healthy"])
    timestamp: str = Field(description="Server time (UTC, ISO-8601).")
    service: str = Field(examples=["OrganizeIT Backend"])
    version: str = Field(examples=["1.0.0"])


class InitStatus(BaseModel):
    """Whether /init/data has run against the current store."""

    initialized: bool
    timestamp: str
    version: str
    status: str = Field(examples=["Backend operational"])
    kv_store_available: bool


# ---------------------------------------------------------------------------
# Auth / chat
# ---------------------------------------------------------------------------

class SignInRequest(RequestBody):
    email: str = Field(examples=["demo@organizeit.com"])
    password: str = Field(examples=["demo123"])


class ChatRequest(RequestBody):
    """A message typed into the dashboard's assistant panel."""

    message: str = Field(
        description="Free-text question from the user.",
        examples=["How can we reduce our cloud cost?"],
    )
    context: Any = Field(
        default=None,
        description="Page or widget the chat was opened from. Stored, not interpreted.",
        examples=["finops"],
    )
    user_id: str = Field(
        default="anonymous",
        alias="userId",
        description="Caller's user id, used to key the stored transcript.",
        examples=["demo-user-id"],
    )


class ChatResponse(BaseModel):
    response: str = Field(description="Assistant reply (markdown).")
    suggestions: list[str] = Field(description="Four follow-up prompts shown as chips.")
    timestamp: str


# ---------------------------------------------------------------------------
# Alerts / services
# ---------------------------------------------------------------------------

class AlertStatusUpdate(RequestBody):
    status: str = Field(examples=["Resolved"])
    resolution: str | None = Field(default=None, examples=["Connection pool size raised to 200."])


class ServiceRestart(RequestBody):
    service_id: str = Field(alias="serviceId", examples=["SVC-003"])


class ServiceScale(RequestBody):
    service_id: str = Field(alias="serviceId", examples=["SVC-003"])
    instances: int = Field(ge=0, examples=[6])


# ---------------------------------------------------------------------------
# FinOps / ESG
# ---------------------------------------------------------------------------

class ApplyOptimization(RequestBody):
    optimization_id: str = Field(alias="optimizationId", examples=["OPT-001"])


class BudgetAlert(RequestBody):
    threshold: float | None = Field(default=None, examples=[250000])
    email: str | None = Field(default=None, examples=["finops@company.com"])


class FinOpsReport(RequestBody):
    report_type: str | None = Field(default=None, alias="reportType", examples=["monthly"])
    date_range: Any = Field(default=None, alias="dateRange")
    format: str | None = Field(default=None, examples=["pdf"])


class EsgTarget(RequestBody):
    target: str = Field(examples=["renewable_percentage"])
    value: Any = Field(default=None, examples=[85])


class EsgReport(RequestBody):
    period: str | None = Field(default=None, examples=["Q3 2024"])
    scope: Any = Field(default=None, examples=["scope1,scope2"])


# ---------------------------------------------------------------------------
# Projects / tasks / team
# ---------------------------------------------------------------------------

class ProjectStatusUpdate(RequestBody):
    project_id: str = Field(alias="projectId", examples=["PROJ-001"])
    status: str = Field(examples=["Completed"])
    notes: str | None = None


class TeamMessage(RequestBody):
    user_id: str | None = Field(default=None, alias="userId")
    message: str
    channel: str | None = None


# ---------------------------------------------------------------------------
# Notifications / search / export / bulk
# ---------------------------------------------------------------------------

class NotificationPreferences(RequestBody):
    channels: list[str] = Field(default=[], examples=[["email", "slack"]])
    frequency: str | None = Field(default=None, examples=["immediate"])
    types: list[str] = Field(default=[], examples=[["alert", "cost"]])


class SearchRequest(RequestBody):
    query: str = Field(default="", examples=["cpu"])
    filters: Any = None


class ExportRequest(RequestBody):
    module: str | None = Field(default=None, examples=["finops"])
    format: str | None = Field(default=None, examples=["csv"])
    date_range: Any = Field(default=None, alias="dateRange")
    include_charts: bool | None = Field(default=None, alias="includeCharts")


class BulkAction(RequestBody):
    action: str = Field(examples=["acknowledge"])
    items: list[Any] = Field(default=[], examples=[["ALT-001", "ALT-002"]])
    parameters: dict[str, Any] = {}


# ---------------------------------------------------------------------------
# AI operations
# ---------------------------------------------------------------------------

class AnalyzeRequest(RequestBody):
    data_type: str | None = Field(default=None, alias="dataType", examples=["performance"])
    parameters: dict[str, Any] = {}


class OptimizeRequest(RequestBody):
    optimization_type: str | None = Field(default=None, examples=["cost"])
    target_metric: str | None = Field(default=None, examples=["monthly_spend"])


class AiReportRequest(RequestBody):
    report_type: str | None = None
    time_period: str | None = None
    include_predictions: bool | None = None


class InsightDismiss(RequestBody):
    insight_id: str = Field(alias="insightId", examples=["REC-001"])
    reason: str | None = None


class InsightImplement(RequestBody):
    insight_id: str = Field(alias="insightId", examples=["REC-001"])
    implementation_plan: Any = None


class TrainModel(RequestBody):
    model_config = ConfigDict(protected_namespaces=())

    model_name: str | None = Field(default=None, examples=["anomaly-detector"])
    training_data: Any = None
    parameters: dict[str, Any] = {}


class RetrainModel(RequestBody):
    use_latest_data: bool | None = None
    training_parameters: dict[str, Any] = {}


class DeployModel(RequestBody):
    environment: str | None = Field(default=None, examples=["production"])
    rollout_strategy: str | None = Field(default=None, examples=["canary"])


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------

class CredentialVerify(RequestBody):
    verification_method: str | None = None


class CredentialRenew(RequestBody):
    renewal_period: Any = None
    auto_renew: bool | None = None


class PasswordReset(RequestBody):
    user_id: str | None = Field(default=None, alias="userId")
    email: str | None = None


class PermissionUpdate(RequestBody):
    user_id: str = Field(alias="userId", examples=["USR-002"])
    permissions: list[str] = Field(default=[], examples=[["read", "write"]])


class ManageUser(RequestBody):
    action: str | None = Field(default=None, examples=["suspend"])
    permissions: list[str] | None = None
    role: str | None = None
    status: str | None = None


class ExportUsers(RequestBody):
    format: str | None = None
    filters: Any = None
    include_sensitive: bool | None = None


# ---------------------------------------------------------------------------
# Audit
# ---------------------------------------------------------------------------

class AuditSearch(RequestBody):
    query: str = ""
    filters: Any = None
    search_type: str | None = None


class AuditExport(RequestBody):
    format: str | None = None
    date_range: Any = None
    include_blockchain: bool | None = None
    filters: Any = None


class AuditFilter(RequestBody):
    """Narrow the audit log. Empty lists mean "no constraint"."""

    filters: Any = None
    date_range: Any = None
    risk_levels: list[str] = Field(default=[], examples=[["High", "Critical"]])
    users: list[str] = Field(default=[], examples=[["john.doe@company.com"]])
    services: list[str] = []


# ---------------------------------------------------------------------------
# Resource optimization
# ---------------------------------------------------------------------------

class AutoScale(RequestBody):
    resource_type: str = Field(examples=["ec2"])
    scaling_policy: Any = None


class Cleanup(RequestBody):
    resource_types: list[str] = Field(default=[], examples=[["ebs_volume", "snapshot"]])


class WorkloadConfig(RequestBody):
    workload_name: str = Field(examples=["nightly-etl"])
    schedule_config: Any = None
    carbon_aware: bool | None = None
    cost_optimization: bool | None = None


class ApplyAllRecommendations(RequestBody):
    confirm_apply: bool | None = None
    exclude_high_risk: bool | None = None


class ScheduleOptimization(RequestBody):
    optimization_type: str | None = None
    schedule_time: str | None = None
    resources: list[Any] = []
    parameters: dict[str, Any] = {}


class ImplementRecommendation(RequestBody):
    confirm_implementation: bool | None = None
    rollback_plan: Any = None


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------

class AdminManageUsers(RequestBody):
    action: str | None = None
    filters: Any = None


class AdminRunAudit(RequestBody):
    audit_type: str | None = Field(default=None, examples=["security"])
    scope: Any = None


class AdminBackup(RequestBody):
    backup_type: str | None = Field(default=None, examples=["full"])
    include_databases: bool | None = None
    include_files: bool | None = None


class AdminConfigure(RequestBody):
    settings: dict[str, Any] = {}


class AdminReports(RequestBody):
    report_types: list[str] = []


class AdminResolveIssues(RequestBody):
    issue_ids: list[str] = []
    auto_resolve: bool = False
