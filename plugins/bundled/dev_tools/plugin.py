"""Development tools plugin - debugging, testing, and deployment workflows."""

import logging

from api.models.responses import L0Response, ResponseType
from api.plugins.manifest import PluginContext

logger = logging.getLogger(__name__)


async def handle(ctx: PluginContext) -> L0Response:
    lowered = ctx.query.lower()

    if "debug" in lowered:
        return L0Response(
            message="🔧 Development Debugging Workflow",
            type=ResponseType.ORCHESTRATION,
            workflow=[
                "📋 Reproduce the issue with minimal test case",
                "🔍 Analyze stack traces and error logs",
                "🎯 Identify root cause vs symptoms",
                "🛠️ Implement targeted fix",
                "✅ Verify fix with regression tests",
            ],
            agents=[
                "Debug Agent: Analyzing error patterns and stack traces",
                "Test Agent: Creating reproduction cases",
                "Code Agent: Implementing fixes",
            ],
            data={
                "recommendedTools": ["logging", "debugger", "breakpoints", "profiler"],
                "bestPractices": ["Isolate the problem", "Check recent changes", "Review dependencies"],
            },
        )

    if "test" in lowered:
        return L0Response(
            message="🧪 Testing Strategy Workflow",
            type=ResponseType.ORCHESTRATION,
            workflow=[
                "📊 Analyze code coverage gaps",
                "🎯 Identify critical paths for testing",
                "✍️ Write unit tests for core logic",
                "🔗 Add integration tests for workflows",
                "🚀 Set up CI/CD test automation",
            ],
            agents=[
                "Test Agent: Generating test cases",
                "Coverage Agent: Analyzing test coverage",
                "CI Agent: Configuring automated testing",
            ],
        )

    if "deploy" in lowered or "ci" in lowered or "cd" in lowered:
        return L0Response(
            message="🚀 Deployment Pipeline Workflow",
            type=ResponseType.ORCHESTRATION,
            workflow=[
                "📋 Review deployment checklist",
                "🧪 Run pre-deployment tests",
                "🔒 Security scan and vulnerability check",
                "📦 Build and package artifacts",
                "🚀 Deploy to target environment",
                "✅ Post-deployment verification",
            ],
            agents=[
                "Build Agent: Compiling and packaging",
                "Security Agent: Running vulnerability scans",
                "Deploy Agent: Orchestrating deployment",
                "Monitor Agent: Verifying health checks",
            ],
        )

    return L0Response(
        message="🛠️ Development Workflow Orchestration",
        type=ResponseType.ORCHESTRATION,
        workflow=[
            "🔍 Analyze development request",
            "📋 Create task breakdown",
            "⚡ Execute development tasks",
            "✅ Validate and test changes",
        ],
        agents=["Dev Agent: Coordinating development tasks"],
    )


def register(config: dict):
    """Plugin entry point - returns the query handler."""
    logger.debug(f"dev-tools plugin registered with config: {config}")
    return handle
