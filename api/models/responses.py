"""Response model shared by built-in intents and plugins."""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ResponseType(str, Enum):
    """Kinds of orchestrator responses."""

    SNIPPET = "snippet"
    MEMORY = "memory"
    CONTEXT = "context"
    HELP = "help"
    ORCHESTRATION = "orchestration"
    CAMPAIGN = "campaign"


class L0Response(BaseModel):
    """Uniform output of every classifier and plugin handler.

    Instances are frozen: a response is built once and handed up the call
    chain unchanged.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, use_enum_values=True)

    message: str = Field(..., description="Headline shown to the user")
    type: ResponseType = Field(..., description="Response category")
    code: Optional[str] = Field(None, description="Code payload (snippets)")
    data: Optional[Union[Dict[str, Any], str]] = Field(None, description="Structured or preformatted details")
    related: Optional[List[str]] = Field(None, description="Related topics or follow-up hints")
    clipboard: Optional[bool] = Field(None, description="Whether `code` should be copied")
    dashboard_url: Optional[str] = Field(None, alias="dashboardUrl", description="Dashboard path")
    workflow: Optional[List[str]] = Field(None, description="Ordered workflow steps")
    agents: Optional[List[str]] = Field(None, description="Agents taking part in the workflow")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for JSON output, omitting unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)
