"""REPL state management."""

from typing import Optional

from api.models.requests import OutputFormat, QueryRequest


class REPLState:
    """REPL state management."""

    def __init__(self, project: Optional[str] = None, output_format: OutputFormat = OutputFormat.TEXT):
        self.project = project
        self.output_format = output_format
        self.history: list = []

    @property
    def json_output(self) -> bool:
        return self.output_format == OutputFormat.JSON

    def build_request(self, query: str) -> QueryRequest:
        """Build QueryRequest with proper validation.

        Args:
            query: User query

        Returns:
            QueryRequest instance
        """
        self.history.append(query)
        return QueryRequest(
            query=query,
            project=self.project,
            format=self.output_format,
            options={"source": "cli"}
        )

    def toggle_json(self) -> bool:
        """Switch between text and JSON output. Returns True if JSON is now on."""
        self.output_format = OutputFormat.TEXT if self.json_output else OutputFormat.JSON
        return self.json_output
