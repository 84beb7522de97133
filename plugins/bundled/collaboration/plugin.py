"""Team collaboration plugin."""

from api.models.responses import L0Response, ResponseType
from api.plugins.manifest import PluginContext


async def handle(ctx: PluginContext) -> L0Response:
    lowered = ctx.query.lower()

    if "standup" in lowered or "daily" in lowered:
        return L0Response(
            message="🤝 Daily Standup Facilitation",
            type=ResponseType.ORCHESTRATION,
            workflow=[
                "📋 Gather team availability and blockers",
                "✅ Review yesterday's completed tasks",
                "🎯 Outline today's priorities",
                "🚧 Identify and escalate blockers",
                "📝 Document action items",
            ],
            agents=[
                "Coordination Agent: Facilitating standup flow",
                "Tracking Agent: Recording updates and blockers",
            ],
            data={
                "format": "15-minute timeboxed meeting",
                "structure": ["What did you accomplish?", "What will you work on?", "Any blockers?"],
            },
        )

    if "retrospective" in lowered or "retro" in lowered:
        return L0Response(
            message="🔄 Sprint Retrospective Workflow",
            type=ResponseType.ORCHESTRATION,
            workflow=[
                "✅ What went well this sprint?",
                "❌ What didn't go well?",
                "💡 What can we improve?",
                "🎯 Define action items",
                "📝 Document and track improvements",
            ],
            agents=[
                "Facilitation Agent: Guiding retrospective discussion",
                "Analysis Agent: Identifying patterns and themes",
                "Action Agent: Creating improvement tasks",
            ],
        )

    return L0Response(
        message="🤝 Team Collaboration Workflow",
        type=ResponseType.ORCHESTRATION,
        workflow=[
            "📋 Define collaboration objectives",
            "👥 Coordinate team members",
            "📝 Document decisions and action items",
            "✅ Follow up on commitments",
        ],
        agents=["Collaboration Agent: Coordinating team activities"],
    )


def register(config: dict):
    return handle
