"""Memory plugin handler - routes memory queries to the memory service."""

import logging
from typing import Awaitable, Callable, Dict, List

from api.models.responses import L0Response, ResponseType
from api.plugins.manifest import PluginContext
from plugins.bundled.memory_services.client import MemoryClient
from plugins.bundled.memory_services.intents import (
    MemoryIntent,
    detect_intent,
    extract_content,
    extract_memory_id,
    extract_task,
    parse_recorded_workflow,
)
from plugins.bundled.memory_services.models import Memory

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 100
TITLE_LENGTH = 50
DUPLICATE_THRESHOLD = 0.85


def _percent(value: float) -> int:
    return round(value * 100)


def _memory_response(message: str, **kwargs) -> L0Response:
    return L0Response(message=message, type=ResponseType.MEMORY, **kwargs)


def format_memories(memories: List[Memory]) -> L0Response:
    """Summarize up to five memories as a numbered list."""
    if not memories:
        return _memory_response(
            "No memories found. Your knowledge base is ready to grow!",
            related=['Try: "remember that..." to save something'],
        )

    formatted = "\n\n".join(
        f"{i}. **{m.title}**\n   {m.content[:PREVIEW_LENGTH]}{'...' if len(m.content) > PREVIEW_LENGTH else ''}"
        for i, m in enumerate(memories[:5], 1)
    )
    noun = "memory" if len(memories) == 1 else "memories"
    return _memory_response(
        f"Found {len(memories)} relevant {noun}:",
        data=formatted,
        related=[m.title for m in memories[:3]],
    )


class MemoryPluginHandler:
    """Plugin handler for memory queries.

    Detects the memory intent of the query and issues a single call to the
    memory service. Service failures are turned into memory responses; the
    handler never raises.
    """

    def __init__(self, client: MemoryClient):
        self.client = client
        self.handlers: Dict[MemoryIntent, Callable[[str, str], Awaitable[L0Response]]] = {
            MemoryIntent.SEARCH: self._search,
            MemoryIntent.CREATE: self._create,
            MemoryIntent.LIST: self._list,
            MemoryIntent.DELETE: self._delete,
            MemoryIntent.RECALL: self._recall,
            MemoryIntent.SUGGEST_TAGS: self._suggest_tags,
            MemoryIntent.FIND_RELATED: self._find_related,
            MemoryIntent.DETECT_DUPLICATES: self._detect_duplicates,
            MemoryIntent.SUGGEST_NEXT: self._suggest_next,
            MemoryIntent.RECORD_PATTERN: self._record_pattern,
            MemoryIntent.UNKNOWN: self._fallback,
        }

    async def __call__(self, ctx: PluginContext) -> L0Response:
        intent = detect_intent(ctx.query)
        content = extract_content(ctx.query, intent)
        logger.info(f"[Memory] intent={intent.value} content={content[:30]}")

        try:
            return await self.handlers[intent](ctx.query, content)
        except Exception as e:
            logger.error(f"[Memory] Handler error for intent {intent.value}: {e}", exc_info=True)
            return _memory_response(
                f"Memory service error: {e}",
                related=["Check connection", "Try again"],
            )

    # ------------------------------------------------------------------
    # Core
    # ------------------------------------------------------------------

    async def _search(self, query: str, content: str) -> L0Response:
        result = await self.client.search(content)
        if not result.success:
            return _memory_response(
                f"Search failed: {result.error}",
                related=["Check your connection", "Try again"],
            )
        return format_memories(result.data.results)

    async def _create(self, query: str, content: str) -> L0Response:
        if not content or len(content) < 3:
            return _memory_response("What would you like me to remember? Tell me more!")

        title = content[:TITLE_LENGTH] + ("..." if len(content) > TITLE_LENGTH else "")
        result = await self.client.create(title, content)
        if not result.success:
            return _memory_response(f"Could not save: {result.error}")
        return _memory_response(
            f'Saved! "{title}"',
            data={"id": result.data.id or None, "title": title},
            related=["Search your memories", "List recent"],
        )

    async def _list(self, query: str, content: str) -> L0Response:
        result = await self.client.list(10)
        if not result.success:
            return _memory_response(f"Could not list memories: {result.error}")
        return format_memories(result.data.data)

    async def _delete(self, query: str, content: str) -> L0Response:
        memory_id = extract_memory_id(content)
        if not memory_id:
            return _memory_response(
                'To delete, I need the memory ID. Try "list" first to see IDs.',
                related=["list memories", "show my memories"],
            )
        result = await self.client.delete(memory_id)
        if not result.success:
            return _memory_response(f"Could not delete: {result.error}")
        return _memory_response(f"Deleted memory {memory_id[:8]}...")

    # ------------------------------------------------------------------
    # Behavioral
    # ------------------------------------------------------------------

    async def _recall(self, query: str, content: str) -> L0Response:
        result = await self.client.recall_behavior(content)
        if not result.success or not result.data.patterns:
            return _memory_response(
                "No matching patterns found. Keep using the system to build your workflow memory!"
            )
        patterns = result.data.patterns
        lines = "\n".join(
            f"{i}. {p.trigger} ({_percent(p.confidence)}% match)" for i, p in enumerate(patterns, 1)
        )
        return _memory_response(
            f"Found relevant workflow patterns:\n{lines}",
            workflow=[str(action) for action in patterns[0].actions],
        )

    async def _suggest_next(self, query: str, content: str) -> L0Response:
        result = await self.client.suggest_next_action(extract_task(content), [])
        if not result.success or not result.data.suggestions:
            return _memory_response(
                "🤔 I don't have enough context yet to suggest next steps. "
                "Keep working and I'll learn your patterns!"
            )
        suggestions = result.data.suggestions
        lines = "\n".join(f"{i}. {s}" for i, s in enumerate(suggestions, 1))
        return _memory_response(
            f"💡 Based on your patterns, here's what to do next:\n\n{lines}",
            workflow=suggestions,
            related=["Show my patterns", "Record this workflow"],
        )

    async def _record_pattern(self, query: str, content: str) -> L0Response:
        parsed = parse_recorded_workflow(content)
        if parsed is None:
            return _memory_response(
                "📝 To record a workflow pattern, tell me:\n"
                '• What triggered it: "for: [task description]"\n'
                '• What steps worked: "steps: [action1, action2, ...]"\n\n'
                'Example: "record this for: debugging auth, steps: check logs, verify tokens, test endpoint"'
            )

        trigger, actions = parsed
        result = await self.client.record_pattern(trigger, actions, outcome="success", confidence=0.8)
        if not result.success:
            return _memory_response(f"Could not record pattern: {result.error}")
        return _memory_response(
            f'✅ Workflow pattern recorded!\n\n📌 Trigger: "{trigger}"\n📋 Steps: {" → ".join(actions)}\n\n'
            "I'll suggest this pattern when you work on similar tasks.",
            data={"pattern_id": result.data.pattern_id},
            related=["Show my patterns", "What's my workflow for..."],
        )

    # ------------------------------------------------------------------
    # Intelligence
    # ------------------------------------------------------------------

    async def _suggest_tags(self, query: str, content: str) -> L0Response:
        memory_id = extract_memory_id(content)
        if not memory_id:
            return _memory_response(
                '🏷️ To suggest tags, I need a memory ID. Try "list" first to see your memories.',
                related=["list memories", "show recent"],
            )
        result = await self.client.suggest_tags(memory_id)
        if not result.success or not result.data.suggestions:
            return _memory_response(
                "Could not generate tag suggestions. The memory may not have enough content."
            )
        suggestions = result.data.suggestions
        lines = "\n".join(f"• {s.tag} ({_percent(s.confidence)}% confidence)" for s in suggestions)
        return _memory_response(
            f"🏷️ Suggested tags for this memory:\n{lines}",
            data={"suggestions": [s.model_dump() for s in suggestions]},
            related=["Apply these tags", "Search by tag"],
        )

    async def _find_related(self, query: str, content: str) -> L0Response:
        memory_id = extract_memory_id(content)
        if not memory_id:
            # No id: look for related memories by content instead
            search = await self.client.search(content, 5)
            if search.success and search.data.results:
                return format_memories(search.data.results)
            return _memory_response(
                "🔗 To find related memories, describe what you're looking for or provide a memory ID."
            )

        result = await self.client.find_related(memory_id, 5)
        if not result.success or not result.data.related:
            return _memory_response(
                "No related memories found. Your knowledge graph will grow as you add more!"
            )
        related = result.data.related
        lines = "\n\n".join(
            f"{i}. **{r.memory.title}** ({_percent(r.similarity)}% similar)\n   {r.memory.content[:80]}..."
            for i, r in enumerate(related, 1)
        )
        return _memory_response(
            f"🔗 Found {len(related)} related memories:\n\n{lines}",
            related=[r.memory.title for r in related[:3]],
        )

    async def _detect_duplicates(self, query: str, content: str) -> L0Response:
        result = await self.client.detect_duplicates(DUPLICATE_THRESHOLD)
        if not result.success:
            return _memory_response(f"Could not scan for duplicates: {result.error}")
        duplicates = result.data.duplicates
        if not duplicates:
            return _memory_response(
                "✨ No duplicates found! Your memory collection is clean.",
                related=["List memories", "Search for something"],
            )
        lines = "\n".join(
            f'{i}. "{d.memory1.title}" ↔ "{d.memory2.title}" ({_percent(d.similarity)}% similar)'
            for i, d in enumerate(duplicates, 1)
        )
        return _memory_response(
            f"🔍 Found {len(duplicates)} potential duplicates:\n\n{lines}\n\n"
            '💡 Say "delete [id]" to remove unwanted copies.',
            data={"duplicates": [d.model_dump() for d in duplicates]},
        )

    # ------------------------------------------------------------------
    # Fallback
    # ------------------------------------------------------------------

    async def _fallback(self, query: str, content: str) -> L0Response:
        result = await self.client.search(query, 3)
        if result.success and result.data.results:
            return format_memories(result.data.results)
        return L0Response(
            message=(
                "I can help you with your memories! Try:\n"
                '• "remember that..." to save\n'
                '• "search for..." to find\n'
                '• "show my memories" to list'
            ),
            type=ResponseType.HELP,
        )
