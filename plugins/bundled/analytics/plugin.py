"""Analytics plugin - KPI analysis and reporting workflows."""

from api.models.responses import L0Response, ResponseType
from api.plugins.manifest import PluginContext


async def handle(ctx: PluginContext) -> L0Response:
    lowered = ctx.query.lower()

    if "kpi" in lowered or "metrics" in lowered:
        return L0Response(
            message="📊 KPI & Metrics Analysis Workflow",
            type=ResponseType.ORCHESTRATION,
            workflow=[
                "📈 Define key performance indicators",
                "📊 Collect data from relevant sources",
                "🧮 Calculate metrics and benchmarks",
                "📉 Identify trends and anomalies",
                "📝 Generate actionable insights",
            ],
            agents=[
                "Data Agent: Aggregating metrics data",
                "Analysis Agent: Processing and calculating KPIs",
                "Insights Agent: Generating recommendations",
            ],
            data={
                "sampleKPIs": ["Conversion Rate", "Engagement Rate", "Customer Acquisition Cost", "Lifetime Value"],
                "reportTypes": ["Daily", "Weekly", "Monthly", "Quarterly"],
            },
        )

    return L0Response(
        message="📈 Analytics & Reporting Workflow",
        type=ResponseType.ORCHESTRATION,
        workflow=[
            "🔍 Define report objectives and scope",
            "📊 Gather and validate data sources",
            "📈 Analyze trends and patterns",
            "📝 Create visualizations and summaries",
            "🎯 Derive actionable recommendations",
        ],
        agents=[
            "Data Agent: Collecting and cleaning data",
            "Analytics Agent: Running statistical analysis",
            "Report Agent: Creating visualizations and reports",
        ],
    )


def register(config: dict):
    """Plugin entry point."""
    return handle
