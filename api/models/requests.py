"""Request models for API endpoints."""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator


class OutputFormat(str, Enum):
    """Output formats understood by the presentation layer."""

    TEXT = "text"
    JSON = "json"
    WORKFLOW = "workflow"


class QueryRequest(BaseModel):
    """Request model for orchestrator queries."""

    # Required fields
    query: str = Field(..., min_length=1, description="Free-text request")

    # Optional fields
    project: Optional[str] = Field(None, description="Scope the request to a project")
    format: OutputFormat = Field(OutputFormat.TEXT, description="Preferred output format")
    options: Dict[str, Any] = Field(default_factory=dict, description="Opaque options passed to plugins")

    @field_validator('query')
    @classmethod
    def query_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError('query cannot be empty')
        return v.strip()

    @field_validator('project')
    @classmethod
    def project_not_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError('project cannot be empty string')
        return v.strip() if v else None

    def plugin_options(self) -> Dict[str, Any]:
        """Options bag handed to the orchestrator (project and format folded in)."""
        options = dict(self.options)
        if self.project:
            options["project"] = self.project
        options["format"] = self.format.value
        return options

    class Config:
        json_schema_extra = {
            "examples": [
                {
                    "summary": "Plain query",
                    "value": {"query": "debug my application"},
                },
                {
                    "summary": "Scoped query",
                    "value": {
                        "query": "remember that the deploy key rotates monthly",
                        "project": "infra",
                        "format": "json",
                    },
                },
            ]
        }
