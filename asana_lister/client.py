#!/usr/bin/env python3
"""
Asana List Client

Typed facade over the Asana SDK's paged "list children" endpoints. Each call
fetches exactly one page and returns the decoded resources together with the
continuation offset for the next page (None on the last page).

Usage:
    client = AsanaClient()
    page = client.workspaces()
    while True:
        for ws in page.items:
            print(ws.name)
        if not page.next_offset:
            break
        page = client.workspaces(offset=page.next_offset)
"""

import logging
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Type

import asana

from .errors import AsanaDecodeError
from .infrastructure import get_client, get_config, with_api_error_handling
from .models import AsanaModel, Project, Section, Task, Workspace
from .options import RequestOptions

# Configure logging
logger = logging.getLogger(__name__)


class Page(NamedTuple):
    """One page of results from a list endpoint."""

    items: List[Any]
    next_offset: Optional[str] = None


class AsanaClient:
    """
    Asana list client.

    Wraps an ``asana.ApiClient``; SDK failures surface as AsanaTransportError
    subclasses and malformed payloads as AsanaDecodeError.
    """

    def __init__(self, api_client: "asana.ApiClient" = None, page_size: Optional[int] = None):
        """
        Initialize client.

        Args:
            api_client: Configured SDK client. If not provided, one is built
                        from the configured access token.
            page_size: Results per page; defaults to ASANA_PAGE_SIZE.
        """
        self._api_client = api_client if api_client is not None else get_client()
        self._page_size = page_size or get_config().page_size

    def _opts(self, offset: Optional[str], options: Optional[RequestOptions]) -> Dict[str, Any]:
        opts: Dict[str, Any] = {"limit": self._page_size}
        if offset:
            opts["offset"] = offset
        if options is not None:
            opts.update(options.to_query_params())
        return opts

    def _fetch(
        self,
        call: Callable[..., Any],
        model: Type[AsanaModel],
        *args: Any,
        offset: Optional[str] = None,
        options: Optional[RequestOptions] = None,
    ) -> Page:
        opts = self._opts(offset, options)
        logger.debug(f"Fetching {model.__name__} page (offset={offset})")
        response = call(*args, opts, full_payload=True)
        return _to_page(response, model)

    @with_api_error_handling("listing workspaces")
    def workspaces(
        self, offset: Optional[str] = None, options: Optional[RequestOptions] = None
    ) -> Page:
        """List workspaces and organizations visible to the authenticated user."""
        api = asana.WorkspacesApi(self._api_client)
        return self._fetch(api.get_workspaces, Workspace, offset=offset, options=options)

    @with_api_error_handling("listing projects of workspace {workspace_gid}")
    def projects(
        self,
        workspace_gid: str,
        offset: Optional[str] = None,
        options: Optional[RequestOptions] = None,
    ) -> Page:
        """List projects in a workspace."""
        _require_gid("workspace_gid", workspace_gid)
        api = asana.ProjectsApi(self._api_client)
        return self._fetch(
            api.get_projects_for_workspace, Project, workspace_gid,
            offset=offset, options=options,
        )

    @with_api_error_handling("listing tasks of project {project_gid}")
    def tasks(
        self,
        project_gid: str,
        offset: Optional[str] = None,
        options: Optional[RequestOptions] = None,
    ) -> Page:
        """List tasks in a project."""
        _require_gid("project_gid", project_gid)
        api = asana.TasksApi(self._api_client)
        return self._fetch(
            api.get_tasks_for_project, Task, project_gid,
            offset=offset, options=options,
        )

    @with_api_error_handling("listing sections of project {project_gid}")
    def sections(
        self,
        project_gid: str,
        offset: Optional[str] = None,
        options: Optional[RequestOptions] = None,
    ) -> Page:
        """List sections in a project."""
        _require_gid("project_gid", project_gid)
        api = asana.SectionsApi(self._api_client)
        return self._fetch(
            api.get_sections_for_project, Section, project_gid,
            offset=offset, options=options,
        )


def _require_gid(name: str, value: Any) -> None:
    if not value or not isinstance(value, str):
        raise ValueError(f"Invalid {name}: {value!r}")


def _to_page(response: Any, model: Type[AsanaModel]) -> Page:
    """Decode a full list payload: {"data": [...], "next_page": {...} | null}."""
    if not isinstance(response, dict) or not isinstance(response.get("data"), list):
        raise AsanaDecodeError(
            f"Expected a list payload for {model.__name__}, got {type(response).__name__}"
        )

    items = [model.from_response(item) for item in response["data"]]

    next_page = response.get("next_page") or {}
    next_offset = next_page.get("offset") if isinstance(next_page, dict) else None
    return Page(items=items, next_offset=next_offset or None)
