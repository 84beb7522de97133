"""Plugin descriptor models - metadata, manifest, and the plugin contract."""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

from api.models.responses import L0Response


class PluginMetadata(BaseModel):
    """Descriptive plugin metadata.

    Empty strings are accepted here; the registry rejects plugins whose
    name, version or description is empty.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Unique plugin name (kebab-case)")
    version: str = Field(default="", description="Plugin version")
    description: str = Field(default="", description="Plugin description")
    author: Optional[str] = Field(default=None, description="Plugin author")
    keywords: List[str] = Field(default_factory=list, description="Search keywords")


class PluginManifest(PluginMetadata):
    """Plugin manifest loaded from plugin.json."""

    type: str = Field(default="workflow", description="Plugin type: workflow | service")
    triggers: List[str] = Field(default_factory=list, description="Lowercase trigger words/phrases")
    priority: int = Field(default=0, description="Additive tie-break added to the match score")
    entry_point: str = Field(
        ...,
        description="Python module:function path relative to plugin directory, e.g. 'plugin:register'",
    )
    config_schema: Optional[Dict[str, Any]] = Field(
        default=None,
        description="JSON Schema for plugin configuration",
    )

    def to_metadata(self) -> PluginMetadata:
        return PluginMetadata(
            name=self.name,
            version=self.version,
            description=self.description,
            author=self.author,
            keywords=list(self.keywords),
        )


@dataclass
class PluginContext:
    """Input handed to a plugin handler."""

    query: str
    options: Dict[str, Any] = field(default_factory=dict)


PluginHandler = Callable[[PluginContext], Union[Awaitable[L0Response], L0Response]]


@dataclass(frozen=True)
class L0Plugin:
    """A registrable plugin: metadata, trigger words, and a handler."""

    metadata: PluginMetadata
    triggers: Sequence[str]
    handler: PluginHandler
    priority: int = 0

    @property
    def name(self) -> str:
        return self.metadata.name
