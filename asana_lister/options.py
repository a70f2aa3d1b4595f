#!/usr/bin/env python3
"""
Asana Request Options

Options control how a request is interpreted and how the response is
generated. For GET requests they travel as URL parameters prefixed with
``opt_``; for POST/PUT requests they go in the body's top-level ``options``
object, a sibling of ``data``.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RequestOptions(BaseModel):
    """Request modifiers accepted by the Asana API."""

    model_config = ConfigDict(frozen=True)

    pretty: bool = Field(
        default=False,
        description="Indented, human-readable response (debugging only, slower)",
    )
    method: Optional[str] = Field(
        default=None,
        description="HTTP verb override for POST requests (never sent from GET)",
    )
    fields: List[str] = Field(
        default_factory=list,
        description="Exact set of dotted field paths to return",
    )
    expand: List[str] = Field(
        default_factory=list,
        description="Sub-objects to return expanded instead of compact",
    )
    jsonp: Optional[str] = Field(
        default=None,
        description="JSON-P callback name wrapping the response",
    )

    def to_query_params(self) -> Dict[str, Any]:
        """
        Options as GET URL parameters.

        The method override is not a URL parameter and is left out.

        Example:
            RequestOptions(fields=["name", "owner.name"]).to_query_params()
            # {'opt_fields': 'name,owner.name'}
        """
        params: Dict[str, Any] = {}
        if self.pretty:
            params["opt_pretty"] = True
        if self.fields:
            params["opt_fields"] = ",".join(self.fields)
        if self.expand:
            params["opt_expand"] = ",".join(self.expand)
        if self.jsonp:
            params["opt_jsonp"] = self.jsonp
        return params

    def to_body_options(self) -> Dict[str, Any]:
        """Options as the ``options`` object of a POST/PUT body."""
        body: Dict[str, Any] = {}
        if self.pretty:
            body["pretty"] = True
        if self.method:
            body["method"] = self.method
        if self.fields:
            body["fields"] = list(self.fields)
        if self.expand:
            body["expand"] = list(self.expand)
        if self.jsonp:
            body["jsonp"] = self.jsonp
        return body
