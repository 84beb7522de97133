"""Intent detection for memory queries.

Unlike the registry's scored trigger matching, intents here are resolved by
a fixed precedence: intelligence intents, then behavioral, then core CRUD.
The first phrase group that appears in the query wins.
"""

import re
from enum import Enum
from typing import List, Optional, Tuple


class MemoryIntent(str, Enum):
    SEARCH = "search"
    CREATE = "create"
    LIST = "list"
    DELETE = "delete"
    RECALL = "recall"
    SUGGEST_TAGS = "suggest_tags"
    FIND_RELATED = "find_related"
    DETECT_DUPLICATES = "detect_duplicates"
    SUGGEST_NEXT = "suggest_next"
    RECORD_PATTERN = "record_pattern"
    UNKNOWN = "unknown"


# Ordered by precedence
INTENT_PHRASES: List[Tuple[MemoryIntent, Tuple[str, ...]]] = [
    # Intelligence
    (MemoryIntent.SUGGEST_TAGS, ("suggest tags", "tag this", "what tags", "auto tag")),
    (MemoryIntent.FIND_RELATED, ("related", "similar", "like this", "connections")),
    (MemoryIntent.DETECT_DUPLICATES, ("duplicate", "duplicates", "redundant", "cleanup")),
    # Behavioral
    (MemoryIntent.RECALL, ("pattern", "workflow", "how did i", "last time")),
    (MemoryIntent.SUGGEST_NEXT, ("what next", "next step", "suggest action", "what should i")),
    (MemoryIntent.RECORD_PATTERN, ("record this", "save workflow", "learn this", "that worked")),
    # Core
    (MemoryIntent.CREATE, ("remember", "save", "store", "note")),
    (MemoryIntent.SEARCH, ("search", "find", "what do i know", "look for")),
    (MemoryIntent.LIST, ("list", "show", "my memories")),
    (MemoryIntent.DELETE, ("delete", "remove", "forget")),
]

CONTENT_PATTERNS = {
    MemoryIntent.CREATE: re.compile(r"^(?:remember|save|store|note)\s+(?:that\s+)?(.+)$", re.IGNORECASE | re.DOTALL),
    MemoryIntent.SEARCH: re.compile(r"^(?:search|find|what do i know about|look for)\s+(.+)$", re.IGNORECASE | re.DOTALL),
    MemoryIntent.DELETE: re.compile(r"^(?:delete|remove|forget)\s+(.+)$", re.IGNORECASE | re.DOTALL),
}

MEMORY_ID_PATTERN = re.compile(r"[a-f0-9-]{36}", re.IGNORECASE)
TASK_PATTERN = re.compile(r"(?:for|on|with)\s+(.+?)(?:\?|$)", re.IGNORECASE)
ACTIONS_PATTERN = re.compile(r"(?:steps?|actions?|workflow):\s*(.+)", re.IGNORECASE)
TRIGGER_PATTERN = re.compile(r"(?:for|when|trigger):\s*(.+?)(?:steps|actions|$)", re.IGNORECASE)


def detect_intent(query: str) -> MemoryIntent:
    lowered = query.lower()
    for intent, phrases in INTENT_PHRASES:
        if any(phrase in lowered for phrase in phrases):
            return intent
    return MemoryIntent.UNKNOWN


def extract_content(query: str, intent: MemoryIntent) -> str:
    """Strip the command verb from a query, e.g. "remember that X" -> "X".

    Intents without an extraction rule, and queries that do not start with
    the verb, return the query unchanged.
    """
    pattern = CONTENT_PATTERNS.get(intent)
    if pattern is None:
        return query
    match = pattern.match(query.strip())
    return match.group(1).strip() if match else query


def extract_memory_id(text: str) -> Optional[str]:
    match = MEMORY_ID_PATTERN.search(text)
    return match.group(0) if match else None


def extract_task(text: str) -> str:
    """Task description for next-step suggestions ("... for X?" -> "X")."""
    match = TASK_PATTERN.search(text)
    return match.group(1) if match else text


def parse_recorded_workflow(text: str) -> Optional[Tuple[str, List[str]]]:
    """Parse "record this for: <trigger>, steps: a, b, c".

    Returns:
        (trigger, actions), or None when neither a trigger nor steps are given
    """
    actions_match = ACTIONS_PATTERN.search(text)
    trigger_match = TRIGGER_PATTERN.search(text)
    if not actions_match and not trigger_match:
        return None

    trigger = trigger_match.group(1).strip() if trigger_match else ""
    trigger = trigger.rstrip(",;").strip() or text[:50]

    if actions_match:
        actions = [a.strip() for a in re.split(r"[,;]", actions_match.group(1)) if a.strip()]
    else:
        actions = []
    return trigger, actions or [text]
