"""
Canned chat assistant.

The dashboard's "AI Assistant" is a keyword classifier with a fixed set of
answers. The message is lower-cased and checked against each topic's
keywords in priority order (cost, alert, esg, ai); the first topic with a
substring hit wins, otherwise the default help text is returned with the
user's message echoed back.

No model, no ranking, no conversation state.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CannedResponse:
    topic: str
    content: str
    suggestions: tuple[str, ...]


COST_RESPONSE = CannedResponse(
    topic="cost",
    content="""**Cost Optimization Analysis:**

Based on real-time data analysis, I've identified these opportunities:

**High Impact:**
- Right-size 23 oversized EC2 instances: $24,000/month savings
- Purchase Reserved Instances for consistent workloads: $35,000/month savings

**Medium Impact:**
- Migrate cold storage to IA/Glacier: $12,000/month savings
- Optimize network traffic routing: $8,500/month savings

**Total Potential Savings: $79,500/month (31% reduction)**

Would you like me to create an implementation roadmap?""",
    suggestions=(
        "Create implementation roadmap",
        "Prioritize by ROI",
        "Schedule optimization tasks",
        "Generate executive report",
    ),
)

ALERT_RESPONSE = CannedResponse(
    topic="alert",
    content="""**Current System Status:**

**Critical Alerts (2):**
- Database timeout in Payment API - 2 hours active
- High CPU usage on web frontend - 30 minutes active

**Recommendations:**
1. Scale Payment API database connections immediately
2. Enable auto-scaling for web frontend
3. Review recent deployments for potential causes

**Impact Assessment:**
- Payment processing: 15% slower response times
- User experience: Minimal impact detected

Should I initiate automated remediation procedures?""",
    suggestions=(
        "Start automated remediation",
        "Escalate to on-call engineer",
        "View detailed diagnostics",
        "Create incident report",
    ),
)

ESG_RESPONSE = CannedResponse(
    topic="esg",
    content="""**ESG Impact Dashboard:**

**Current Performance:**
- Carbon Footprint: 40.7 tCO2e/month (-27% YTD)
- Renewable Energy: 68% of total consumption
- Water Efficiency: 83% (industry leading)

**Smart Recommendations:**
1. **Workload Scheduling:** Shift batch jobs to low-carbon hours
   Reduce 2.4 tCO2e/month (6% improvement)

2. **Green Computing:** Optimize for renewable energy availability
   Target 85% renewable by Q4

3. **Efficiency Gains:** Advanced cooling optimization
   15% reduction in energy consumption

**Compliance Status:** On track for carbon neutrality by 2030""",
    suggestions=(
        "Implement smart scheduling",
        "View renewable energy plan",
        "Generate ESG report",
        "Set sustainability goals",
    ),
)

AI_RESPONSE = CannedResponse(
    topic="ai",
    content="""**AI Operations Intelligence:**

**Predictive Insights:**
- 94.2% accuracy in resource demand forecasting
- Next Tuesday: 23% CPU spike predicted (high confidence)
- Cost anomaly detected in Azure storage (+340% unusual)

**Active Automations:**
- Incident response: 78% automated resolution
- Resource scaling: 92% predictive scaling success
- Security threats: Real-time ML-based detection

**Model Performance:**
- Anomaly Detection: 96.1% accuracy
- Cost Prediction: 89.5% accuracy
- Performance Forecasting: 94.2% accuracy

**ROI Impact:** $127K saved YTD through AI optimizations""",
    suggestions=(
        "Review prediction models",
        "Configure auto-scaling",
        "Investigate cost anomaly",
        "Enhance automation rules",
    ),
)

DEFAULT_TEMPLATE = """I understand you're asking about "{message}".

As your OrganizeIT AI Assistant, I have access to real-time data across:
- IT Operations & Monitoring
- Financial Operations (FinOps)
- ESG & Sustainability Metrics
- Security & Compliance
- Resource Optimization

I can help you with analysis, recommendations, troubleshooting, and automation. What specific area would you like to explore?"""

DEFAULT_SUGGESTIONS = (
    "Analyze current performance",
    "Show optimization opportunities",
    "Check system health",
    "Review recent changes",
)

# Checked in this order; the first topic with any keyword hit wins.
# Keywords are substrings, so "automat" covers automation/automated and
# "ai" fires on any word containing those two letters.
TOPICS: list[tuple[tuple[str, ...], CannedResponse]] = [
    (("cost", "save", "optimize"), COST_RESPONSE),
    (("alert", "incident", "problem"), ALERT_RESPONSE),
    (("esg", "carbon", "sustainability"), ESG_RESPONSE),
    (("ai", "predict", "automat"), AI_RESPONSE),
]


def classify(message: str) -> str:
    """Name of the topic `message` falls under, or 'default'."""
    return select_response(message).topic


def select_response(message: str) -> CannedResponse:
    text = message.lower()
    for keywords, response in TOPICS:
        if any(k in text for k in keywords):
            return response

    return CannedResponse(
        topic="default",
        content=DEFAULT_TEMPLATE.format(message=message),
        suggestions=DEFAULT_SUGGESTIONS,
    )
