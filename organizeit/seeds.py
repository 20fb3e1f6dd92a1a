"""
Seed templates for every dashboard collection.

These are the records a cold store is filled with on first read (and by
POST /init/data). Anything time-relative is computed from `now` (epoch
seconds) so "30 minutes ago" stays 30 minutes ago whenever the seed is
materialized. Each function returns fresh objects; callers may mutate.

The *_FALLBACK payloads are what a route answers when the store is down.
They are intentionally smaller than the seeds.
"""

from organizeit.config import DEMO_EMAIL, DEMO_USER_ID
from organizeit.telemetry import DASHBOARD_SEED, iso

MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR


def base_metrics() -> dict:
    return dict(DASHBOARD_SEED)


# ---------------------------------------------------------------------------
# IT operations
# ---------------------------------------------------------------------------

def alerts(now: float) -> list[dict]:
    return [
        {
            "id": "ALT-001",
            "severity": "High",
            "title": "Database Connection Pool Exhaustion",
            "description": "Payment processing database showing connection pool exhaustion. "
                           "Response times increased by 300%.",
            "service": "Payment API",
            "timestamp": iso(now - 2.5 * HOUR),
            "status": "Active",
            "impact": "Payment processing delays",
            "assignee": "john.doe@company.com",
            "environment": "Production",
            "priority": "P1",
        },
        {
            "id": "ALT-002",
            "severity": "Medium",
            "title": "Memory Usage Threshold Exceeded",
            "description": "Web frontend instances consistently above 85% memory utilization.",
            "service": "Web Frontend",
            "timestamp": iso(now - 45 * MINUTE),
            "status": "Investigating",
            "impact": "Potential performance degradation",
            "assignee": "sarah.johnson@company.com",
            "environment": "Production",
            "priority": "P2",
        },
        {
            "id": "ALT-003",
            "severity": "Low",
            "title": "SSL Certificate Expiring Soon",
            "description": "API gateway SSL certificate expires in 14 days.",
            "service": "API Gateway",
            "timestamp": iso(now - 6 * HOUR),
            "status": "Acknowledged",
            "impact": "Future service disruption if not renewed",
            "assignee": "mike.chen@company.com",
            "environment": "Production",
            "priority": "P3",
        },
    ]


def services(now: float) -> list[dict]:
    def svc(n, name, status, uptime, response_time, last_incident, instances):
        return {
            "id": f"SVC-{n:03d}",
            "name": name,
            "status": status,
            "uptime": uptime,
            "response_time": response_time,
            "last_incident": last_incident,
            "environment": "Production",
            "instances": instances,
        }

    return [
        svc(1, "Web Frontend", "healthy", 99.98, 245, "2024-01-15T10:30:00Z", 5),
        svc(2, "User API", "healthy", 99.95, 189, "2024-01-12T14:20:00Z", 8),
        svc(3, "Payment API", "degraded", 98.2, 1200, iso(now - 2 * HOUR), 4),
        svc(4, "Database Cluster", "healthy", 99.99, 12, "2023-12-28T09:15:00Z", 3),
        svc(5, "Cache Layer", "warning", 99.1, 8, iso(now - 6 * HOUR), 6),
        svc(6, "Analytics Engine", "healthy", 99.85, 320, "2024-01-08T16:45:00Z", 4),
        svc(7, "Message Queue", "healthy", 99.92, 15, "2024-01-03T11:05:00Z", 3),
    ]


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------

def projects() -> list[dict]:
    return [
        {
            "id": "PROJ-001",
            "name": "Cloud Migration Phase 2",
            "description": "Migrate remaining on-premise workloads to hybrid cloud",
            "status": "In Progress",
            "priority": "High",
            "progress": 67,
            "budget": 250000,
            "spent": 165000,
            "team_size": 8,
            "start_date": "2024-01-15",
            "end_date": "2024-06-30",
            "lead": "Sarah Johnson",
            "category": "Infrastructure",
        },
        {
            "id": "PROJ-002",
            "name": "Security Compliance Upgrade",
            "description": "Implement SOC2 Type II compliance across all systems",
            "status": "Planning",
            "priority": "High",
            "progress": 23,
            "budget": 180000,
            "spent": 42000,
            "team_size": 5,
            "start_date": "2024-02-01",
            "end_date": "2024-08-15",
            "lead": "Mike Chen",
            "category": "Security",
        },
        {
            "id": "PROJ-003",
            "name": "AI-Powered Monitoring",
            "description": "Deploy machine learning models for predictive monitoring",
            "status": "In Progress",
            "priority": "Medium",
            "progress": 45,
            "budget": 120000,
            "spent": 54000,
            "team_size": 4,
            "start_date": "2024-03-01",
            "end_date": "2024-07-31",
            "lead": "David Kim",
            "category": "Innovation",
        },
    ]


# Milestone detail shown on the project page when the store has no projects.
PROJECT_MILESTONES = {
    "PROJ-001": [
        {"name": "Phase 1: Assessment", "status": "Completed", "date": "2024-06-15"},
        {"name": "Phase 2: Infrastructure", "status": "In Progress", "date": "2024-07-30"},
        {"name": "Phase 3: Migration", "status": "Pending", "date": "2024-08-15"},
    ],
    "PROJ-002": [
        {"name": "Control Mapping", "status": "Completed", "date": "2024-04-01"},
        {"name": "Evidence Collection", "status": "In Progress", "date": "2024-07-15"},
    ],
    "PROJ-003": [
        {"name": "ML Model Development", "status": "In Progress", "date": "2024-06-01"},
        {"name": "Integration Testing", "status": "Pending", "date": "2024-07-15"},
    ],
}


def project_placeholder(project_id: str, now: float) -> dict:
    """Stand-in detail record for a project id the store doesn't know."""
    return {
        "id": project_id,
        "name": f"Project {project_id}",
        "status": "Active",
        "priority": "Medium",
        "progress": 50,
        "team": ["Team Member 1", "Team Member 2"],
        "deadline": iso(now + 30 * DAY)[:10],
        "description": "Project details loaded from system",
        "budget": 100000,
        "budget_spent": 50000,
        "tasks_total": 20,
        "tasks_completed": 10,
        "milestones": [
            {"name": "Phase 1", "status": "Completed", "date": iso(now)[:10]},
            {"name": "Phase 2", "status": "In Progress", "date": iso(now + 15 * DAY)[:10]},
        ],
    }


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------

def notifications(now: float) -> list[dict]:
    def note(n, kind, title, message, ago, read, severity, action_url, source):
        return {
            "id": f"NOT-{n:03d}",
            "type": kind,
            "title": title,
            "message": message,
            "timestamp": iso(now - ago),
            "read": read,
            "severity": severity,
            "action_url": action_url,
            "source": source,
        }

    return [
        note(1, "alert", "High CPU Usage Detected",
             "Web frontend instances showing sustained high CPU usage above 85% threshold",
             30 * MINUTE, False, "warning", "/it-operations?tab=performance", "Monitoring System"),
        note(2, "cost", "Monthly Budget Alert",
             "Cloud spending is 15% above projected budget for this month ($285K vs $248K planned)",
             2 * HOUR, False, "warning", "/finops?tab=budget", "FinOps Analytics"),
        note(3, "security", "Security Patch Available",
             "Critical security patches available for 12 production instances - CVE-2024-1234",
             4 * HOUR, True, "high", "/audit?tab=compliance", "Security Scanner"),
        note(4, "esg", "Carbon Footprint Reduction",
             "Monthly carbon emissions reduced by 12% through optimization initiatives",
             6 * HOUR, False, "info", "/esg?tab=carbon", "ESG Monitoring"),
        note(5, "ai", "Cost Optimization Opportunity",
             "AI analysis identified $79,500/month potential savings from right-sizing instances",
             8 * HOUR, False, "info", "/ai-insights?tab=cost", "AI Analytics Engine"),
        note(6, "system", "Database Performance Alert",
             "Payment processing database showing connection pool exhaustion",
             12 * HOUR, True, "critical", "/it-operations?tab=incidents", "Database Monitor"),
    ]


# ---------------------------------------------------------------------------
# Identity, profiles, audit
# ---------------------------------------------------------------------------

def identity_users(now: float) -> list[dict]:
    return [
        {
            "id": "USR-001",
            "name": "Sarah Johnson",
            "email": "sarah.johnson@organizeit.com",
            "role": "System Administrator",
            "department": "IT Operations",
            "status": "Active",
            "last_login": iso(now - 2 * HOUR),
            "created_at": "2024-01-15T10:00:00Z",
            "permissions": ["admin", "read", "write", "delete"],
            "mfa_enabled": True,
        },
        {
            "id": "USR-002",
            "name": "Mike Chen",
            "email": "mike.chen@organizeit.com",
            "role": "DevOps Engineer",
            "department": "Engineering",
            "status": "Active",
            "last_login": iso(now - 4 * HOUR),
            "created_at": "2024-01-20T14:30:00Z",
            "permissions": ["read", "write", "deploy"],
            "mfa_enabled": True,
        },
        {
            "id": "USR-003",
            "name": "David Kim",
            "email": "david.kim@organizeit.com",
            "role": "Data Engineer",
            "department": "Analytics",
            "status": "Active",
            "last_login": iso(now - DAY),
            "created_at": "2024-02-01T09:15:00Z",
            "permissions": ["read", "write", "analytics"],
            "mfa_enabled": False,
        },
    ]


def demo_profile(now: float) -> dict:
    return {
        "id": DEMO_USER_ID,
        "email": DEMO_EMAIL,
        "name": "Demo User",
        "role": "System Administrator",
        "department": "IT Operations",
        "created_at": "2024-01-01T00:00:00Z",
        "last_login": iso(now),
        "preferences": {
            "theme": "light",
            "notifications": True,
            "dashboard_layout": "default",
        },
    }


def audit_events(now: float) -> list[dict]:
    return [
        {
            "id": "AUD-001",
            "timestamp": iso(now - 30 * MINUTE),
            "event_type": "user_login",
            "user": "sarah.johnson@organizeit.com",
            "action": "SUCCESSFUL_LOGIN",
            "service": "Authentication",
            "resource": "authentication_system",
            "details": "Interactive login with MFA",
            "risk_level": "Low",
            "result": "Success",
            "ip_address": "192.168.1.100",
        },
        {
            "id": "AUD-002",
            "timestamp": iso(now - 1 * HOUR),
            "event_type": "service_operation",
            "user": "john.doe@company.com",
            "action": "SERVICE_RESTART",
            "service": "Payment API",
            "resource": "payment-api",
            "details": "Manual service restart initiated",
            "risk_level": "Medium",
            "result": "Success",
            "ip_address": "10.0.1.45",
        },
        {
            "id": "AUD-003",
            "timestamp": iso(now - 3 * HOUR),
            "event_type": "configuration_change",
            "user": "sarah.johnson@company.com",
            "action": "PERMISSION_UPDATE",
            "service": "Identity Management",
            "resource": "user_permissions",
            "details": "Updated permissions for user USR-005",
            "risk_level": "High",
            "result": "Success",
            "ip_address": "10.0.1.52",
        },
        {
            "id": "AUD-004",
            "timestamp": iso(now - 6 * HOUR),
            "event_type": "failed_access",
            "user": "unknown@external.com",
            "action": "FAILED_LOGIN_ATTEMPT",
            "service": "Authentication",
            "resource": "authentication_system",
            "details": "Multiple failed password attempts",
            "risk_level": "Critical",
            "result": "Blocked",
            "ip_address": "203.0.113.45",
        },
    ]


def user_metrics(now: float) -> dict:
    return {
        "tasks_completed": 47,
        "tasks_pending": 12,
        "projects_active": 3,
        "efficiency_score": 92,
        "last_activity": iso(now - 15 * MINUTE),
        "weekly_hours": 38.5,
        "alerts_assigned": 2,
        "cost_savings_contributed": 15400,
    }


def recent_activities(now: float) -> list[dict]:
    return [
        {
            "id": "ACT-001",
            "type": "task_completed",
            "title": "Resolved database performance issue",
            "timestamp": iso(now - 2 * HOUR),
            "impact": "High",
            "project": "Cloud Migration Phase 2",
        },
        {
            "id": "ACT-002",
            "type": "cost_optimization",
            "title": "Implemented auto-scaling for dev environment",
            "timestamp": iso(now - 6 * HOUR),
            "impact": "Medium",
            "savings": 2400,
        },
        {
            "id": "ACT-003",
            "type": "security_patch",
            "title": "Applied security patches to 8 servers",
            "timestamp": iso(now - DAY),
            "impact": "High",
            "compliance": "SOC2",
        },
    ]


# ---------------------------------------------------------------------------
# Static reference payloads
# ---------------------------------------------------------------------------

OPTIMIZATION_OPPORTUNITIES = [
    {
        "id": "OPT-001",
        "title": "Right-size EC2 Instances",
        "description": "23 EC2 instances are oversized based on actual usage patterns",
        "potential_savings": 24000,
        "effort": "Low",
        "impact": "High",
        "provider": "AWS",
        "category": "Compute",
        "timeline": "1 week",
        "status": "Identified",
    },
    {
        "id": "OPT-002",
        "title": "Reserved Instance Optimization",
        "description": "Purchase reserved instances for consistent workloads",
        "potential_savings": 35000,
        "effort": "Medium",
        "impact": "High",
        "provider": "AWS",
        "category": "Pricing",
        "timeline": "2 weeks",
        "status": "In Progress",
    },
    {
        "id": "OPT-003",
        "title": "Storage Lifecycle Management",
        "description": "Move infrequently accessed data to cheaper storage tiers",
        "potential_savings": 12000,
        "effort": "Medium",
        "impact": "Medium",
        "provider": "Multi-cloud",
        "category": "Storage",
        "timeline": "3 weeks",
        "status": "Identified",
    },
]

CARBON = {
    "current_footprint": 42.3,
    "monthly_trend": -12,
    "breakdown": [
        {"name": "Computing", "value": 45, "emissions": 19.0, "color": "#8884d8"},
        {"name": "Storage", "value": 25, "emissions": 10.6, "color": "#82ca9d"},
        {"name": "Network", "value": 20, "emissions": 8.5, "color": "#ffc658"},
        {"name": "Other", "value": 10, "emissions": 4.2, "color": "#ff7300"},
    ],
    "renewable_percentage": 68,
    "efficiency_score": 83,
    "targets": {
        "carbon_neutral_by": "2030",
        "renewable_target": 85,
        "efficiency_target": 90,
    },
}

SUSTAINABILITY = {
    "metrics": {
        "energy_efficiency": 88,
        "water_usage_efficiency": 76,
        "waste_reduction": 92,
        "sustainable_procurement": 67,
    },
    "initiatives": [
        {
            "name": "Green Computing Program",
            "status": "Active",
            "impact": "High",
            "co2_reduction": 8.5,
            "timeline": "Q4 2024",
        },
        {
            "name": "Renewable Energy Transition",
            "status": "In Progress",
            "impact": "Very High",
            "co2_reduction": 15.2,
            "timeline": "Q2 2025",
        },
    ],
    "compliance_status": {
        "iso14001": "Certified",
        "ghg_protocol": "Compliant",
        "science_based_targets": "In Progress",
    },
}

AI_INSIGHTS = {
    "cost_optimization": {
        "total_savings_identified": 79500,
        "high_impact_opportunities": 3,
        "medium_impact_opportunities": 7,
        "recommendations": [
            {"id": "REC-001", "title": "Right-size EC2 Instances", "impact": "High",
             "savings": 24000, "confidence": 95, "effort": "Low", "timeline": "1 week"},
            {"id": "REC-002", "title": "Reserved Instance Optimization", "impact": "High",
             "savings": 35000, "confidence": 89, "effort": "Medium", "timeline": "2 weeks"},
        ],
    },
    "performance_insights": {
        "anomalies_detected": 4,
        "predictive_alerts": 2,
        "optimization_score": 87,
        "trends": [
            {"metric": "response_time", "trend": "improving", "change": -12, "forecast": "stable"},
            {"metric": "error_rate", "trend": "stable", "change": 0.2, "forecast": "stable"},
        ],
    },
    "security_analysis": {
        "risk_score": 23,
        "vulnerabilities_found": 8,
        "patches_available": 12,
        "compliance_score": 94,
    },
    "sustainability_insights": {
        "carbon_reduction_opportunities": 6,
        "efficiency_improvements": 4,
        "renewable_energy_recommendations": 2,
        "projected_savings": 8500,
    },
}

RESOURCE_OPTIMIZATION = {
    "summary": {
        "total_resources": 156,
        "underutilized": 23,
        "overutilized": 8,
        "optimized": 125,
        "potential_savings": 47800,
        "efficiency_score": 78,
    },
    "recommendations": [
        {"id": "OPT-001", "type": "downsize", "resource": "EC2 Instance i-0abc123def456",
         "current_spec": "t3.large", "recommended_spec": "t3.medium",
         "utilization": 35, "savings": 840, "confidence": 94},
        {"id": "OPT-002", "type": "terminate", "resource": "EBS Volume vol-0123456789",
         "current_spec": "100GB gp3", "recommended_spec": "Delete",
         "utilization": 0, "savings": 320, "confidence": 99},
        {"id": "OPT-003", "type": "upsize", "resource": "RDS Instance db-prod-main",
         "current_spec": "db.t3.medium", "recommended_spec": "db.t3.large",
         "utilization": 92, "cost_increase": 420, "performance_gain": 45},
    ],
    "categories": [
        {"name": "Compute", "total": 89, "optimized": 71, "savings": 28900},
        {"name": "Storage", "total": 45, "optimized": 38, "savings": 12600},
        {"name": "Network", "total": 22, "optimized": 16, "savings": 6300},
    ],
}

RECOMMENDATION_STEPS = [
    "Analyze current usage patterns",
    "Identify appropriate instance types",
    "Schedule downtime window",
    "Execute resize operations",
    "Monitor performance post-change",
]

SEARCH_RESULTS = [
    {
        "type": "alert",
        "title": "High CPU Usage",
        "description": "Web frontend instances showing sustained high CPU usage",
        "url": "/it-operations",
        "relevance": 95,
    },
    {
        "type": "cost",
        "title": "Cost Optimization Opportunity",
        "description": "Right-size 23 EC2 instances for $24K savings",
        "url": "/finops",
        "relevance": 89,
    },
]


# ---------------------------------------------------------------------------
# Fallbacks (store unavailable)
# ---------------------------------------------------------------------------

def metrics_fallback(now: float) -> dict:
    payload = base_metrics()
    payload["timestamp"] = iso(now)
    payload["last_updated"] = int(now * 1000)
    return payload


def alerts_fallback(now: float) -> dict:
    first = alerts(now)[0]
    return {"alerts": [first], "count": 1}


def projects_fallback() -> dict:
    return {"projects": projects()[:1], "count": 1}


def services_fallback(now: float) -> dict:
    return {"services": services(now)[:3], "count": 3}


def costs_fallback() -> dict:
    months = ["Jan", "Feb", "Mar", "Apr", "May", "Jun"]
    return {
        "data": [
            {"month": m, "aws": 120000, "azure": 95000, "gcp": 70000, "total": 285000}
            for m in months
        ],
        "period": "6m",
    }


def notifications_fallback(now: float) -> dict:
    first = notifications(now)[0]
    return {"notifications": [first], "unread_count": 1, "total_count": 1}
