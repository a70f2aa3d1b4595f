#!/usr/bin/env python3
"""
Asana Listing Operations

Each operation lists the children of one parent and prints one line per
result:

    <TypeLabel> <ID> <Quoted Name>

All pages are fetched before anything is printed, so a failed call prints
nothing and the error reaches the caller unchanged. Pass all_pages=False to
list only the first page.
"""

import json
import logging
import sys
from typing import Callable, List, Optional, TextIO

from .client import AsanaClient, Page
from .errors import AsanaNotFoundError
from .models import HasID, HasName, Project, Section, Task, Workspace
from .options import RequestOptions

# Configure logging
logger = logging.getLogger(__name__)


def format_line(label: str, entity: HasID) -> str:
    """Format an entity as '<label> <id> "<name>"'."""
    name = entity.name if isinstance(entity, HasName) and entity.name is not None else ""
    return f"{label} {entity.identifier} {json.dumps(name, ensure_ascii=False)}"


def collect_pages(
    fetch: Callable[..., Page],
    *args,
    options: Optional[RequestOptions] = None,
    all_pages: bool = True,
) -> List:
    """
    Call fetch repeatedly, following next_offset until the last page.

    Args:
        fetch: Client list method returning a Page
        *args: Positional arguments for fetch (the parent gid)
        options: Request options passed to every call
        all_pages: If False, stop after the first page

    Returns:
        All items, in the order the API returned them
    """
    items = []
    offset = None
    pages = 0
    while True:
        page = fetch(*args, offset=offset, options=options)
        pages += 1
        items.extend(page.items)
        if not all_pages:
            if page.next_offset:
                logger.info("More results available; only the first page was listed")
            break
        if not page.next_offset:
            break
        offset = page.next_offset

    logger.debug(f"Collected {len(items)} items over {pages} page(s)")
    return items


def _print_all(lines: List[str], out: Optional[TextIO]) -> None:
    out = out if out is not None else sys.stdout
    for line in lines:
        print(line, file=out)


def list_workspaces(
    client: AsanaClient,
    out: Optional[TextIO] = None,
    options: Optional[RequestOptions] = None,
    all_pages: bool = True,
) -> List[Workspace]:
    """
    List workspaces, labelling organizations as 'Organization'.

    Example:
        list_workspaces(client)
        # Organization 1234 "Acme Corp"
        # Workspace 5678 "Personal Projects"
    """
    workspaces = collect_pages(client.workspaces, options=options, all_pages=all_pages)
    _print_all([format_line(ws.label, ws) for ws in workspaces], out)
    logger.info(f"Listed {len(workspaces)} workspaces")
    return workspaces


def list_projects(
    client: AsanaClient,
    workspace: Workspace,
    out: Optional[TextIO] = None,
    options: Optional[RequestOptions] = None,
    all_pages: bool = True,
) -> List[Project]:
    """List projects of a workspace."""
    projects = collect_pages(
        client.projects, workspace.identifier, options=options, all_pages=all_pages
    )
    _print_all([format_line("Project", p) for p in projects], out)
    logger.info(f"Listed {len(projects)} projects in workspace {workspace.identifier}")
    return projects


def list_tasks(
    client: AsanaClient,
    project: Project,
    out: Optional[TextIO] = None,
    options: Optional[RequestOptions] = None,
    all_pages: bool = True,
) -> List[Task]:
    """List tasks of a project."""
    tasks = collect_pages(
        client.tasks, project.identifier, options=options, all_pages=all_pages
    )
    _print_all([format_line("Task", t) for t in tasks], out)
    logger.info(f"Listed {len(tasks)} tasks in project {project.identifier}")
    return tasks


def list_sections(
    client: AsanaClient,
    project: Project,
    out: Optional[TextIO] = None,
    options: Optional[RequestOptions] = None,
    all_pages: bool = True,
) -> List[Section]:
    """List sections of a project."""
    sections = collect_pages(
        client.sections, project.identifier, options=options, all_pages=all_pages
    )
    _print_all([format_line("Section", s) for s in sections], out)
    logger.info(f"Listed {len(sections)} sections in project {project.identifier}")
    return sections


def resolve_workspace(client: AsanaClient, ref: Optional[str] = None) -> Workspace:
    """
    Find a workspace by gid or name, or return the first workspace if no ref.

    Most users have a single workspace, so defaulting to the first one is safe.

    Args:
        client: List client
        ref: Workspace gid, or name (matched case-insensitively)

    Raises:
        AsanaNotFoundError: If there are no workspaces or none matches ref

    Example:
        workspace = resolve_workspace(client, "Acme Corp")
    """
    workspaces = collect_pages(client.workspaces)

    if not workspaces:
        raise AsanaNotFoundError(
            "No workspaces found. Verify your Asana account has access to at least one workspace."
        )

    if ref is None:
        ws = workspaces[0]
        logger.info(f"Using first workspace: {ws.name} (GID: {ws.gid})")
        return ws

    ref_lower = ref.lower()
    for ws in workspaces:
        if ws.gid == ref or (ws.name or "").lower() == ref_lower:
            logger.info(f"Found workspace: {ws.name} (GID: {ws.gid})")
            return ws

    # Not found - provide helpful error with available workspaces
    available = ", ".join(f"'{ws.name}'" for ws in workspaces)
    raise AsanaNotFoundError(
        f"Workspace '{ref}' not found. Available workspaces: {available}"
    )
