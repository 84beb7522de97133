"""Trigger matching - scores a query against a plugin's trigger words.

Matching is plain substring containment on the lowercased query, so a
trigger also fires inside a longer word ("test" matches "testimony").
That is a known limitation of the scoring model and is kept as-is:
switching to tokenized or fuzzy matching would change plugin ranking.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from api.plugins.manifest import L0Plugin


@dataclass(frozen=True)
class MatchResult:
    """A plugin paired with its score for one query."""

    plugin: L0Plugin
    score: int


def score_triggers(query: str, triggers: Iterable[str]) -> int:
    """Sum the lengths of all triggers contained in the query.

    Longer, more specific phrases outweigh short generic ones without a
    weighting table: "debug my application" (20) beats "debug" (5).
    """
    lowered = query.lower()
    return sum(len(trigger) for trigger in triggers if trigger.lower() in lowered)


def match_plugin(lowered_query: str, plugin: L0Plugin) -> Optional[MatchResult]:
    """Score a plugin against an already-lowercased query.

    Returns None when no trigger matches, whatever the plugin's priority.
    """
    score = score_triggers(lowered_query, plugin.triggers)
    if score == 0:
        return None
    return MatchResult(plugin=plugin, score=score + (plugin.priority or 0))
