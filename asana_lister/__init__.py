#!/usr/bin/env python3
"""
Asana Lister - list Asana workspaces, projects, tasks and sections

Thin layer over the official Asana SDK: typed resource models built from
field-group mixins, a 'YYYY-MM-DD' date codec, and listing operations that
print one line per resource.

Usage:
    from asana_lister import (
        AsanaClient,
        list_workspaces,
        list_projects,
        list_tasks,
        list_sections,
        resolve_workspace,
    )

    client = AsanaClient()
    list_workspaces(client)
    workspace = resolve_workspace(client, "Acme Corp")
    list_projects(client, workspace)

Configuration:
    from asana_lister import get_config

    config = get_config()
    config.set_alert_callback(my_alert_handler)
"""

# Error classes
from .errors import (
    AsanaClientError,
    AsanaTransportError,
    AsanaAuthenticationError,
    AsanaRateLimitError,
    AsanaNotFoundError,
    AsanaValidationError,
    AsanaServerError,
    AsanaDecodeError,
)

# Infrastructure
from .infrastructure import (
    get_config,
    AsanaListerConfig,
    get_client,
    raise_alert,
    with_api_error_handling,
)

# Dates and options
from .dates import Date, encode_date, decode_date
from .options import RequestOptions

# Models
from .models import (
    AsanaModel,
    HasID,
    HasName,
    HasParent,
    HasCreated,
    HasDates,
    HasNotes,
    HasWorkspace,
    HasHearts,
    HasFollowers,
    HasColor,
    Workspace,
    User,
    Team,
    Attachment,
    Project,
    Section,
    Tag,
    Task,
)

# Client and listing
from .client import AsanaClient, Page
from .listing import (
    list_workspaces,
    list_projects,
    list_tasks,
    list_sections,
    resolve_workspace,
)

__all__ = [
    # Errors
    "AsanaClientError",
    "AsanaTransportError",
    "AsanaAuthenticationError",
    "AsanaRateLimitError",
    "AsanaNotFoundError",
    "AsanaValidationError",
    "AsanaServerError",
    "AsanaDecodeError",
    # Infrastructure
    "get_config",
    "AsanaListerConfig",
    "get_client",
    "raise_alert",
    "with_api_error_handling",
    # Dates and options
    "Date",
    "encode_date",
    "decode_date",
    "RequestOptions",
    # Models
    "AsanaModel",
    "HasID",
    "HasName",
    "HasParent",
    "HasCreated",
    "HasDates",
    "HasNotes",
    "HasWorkspace",
    "HasHearts",
    "HasFollowers",
    "HasColor",
    "Workspace",
    "User",
    "Team",
    "Attachment",
    "Project",
    "Section",
    "Tag",
    "Task",
    # Client and listing
    "AsanaClient",
    "Page",
    "list_workspaces",
    "list_projects",
    "list_tasks",
    "list_sections",
    "resolve_workspace",
]

__version__ = "1.0.0"
