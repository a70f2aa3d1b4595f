#!/usr/bin/env python3
"""
Asana Resource Models

Resources are flat records assembled from small field-group mixins (HasID,
HasName, HasDates, ...). A concrete resource lists the groups it carries as
base classes and adds its own fields; pydantic merges the fields so every
resource stays a single flat record.

Field access rules follow the Asana API:
- read-only fields are populated from responses and never sent back
- create-only fields are sent on creation and never on update
- everything else is writable

Example:
    project = Project.from_response({"gid": "123", "name": "Launch", "color": "dark-blue"})
    payload = project.to_request()  # {'name': 'Launch', 'color': 'dark-blue'}
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Mapping, Optional, Set

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .dates import Date
from .errors import AsanaDecodeError

READ_ONLY = "readOnly"
CREATE_ONLY = "createOnly"

Color = Literal[
    "dark-pink",
    "dark-green",
    "dark-blue",
    "dark-red",
    "dark-teal",
    "dark-brown",
    "dark-orange",
    "dark-purple",
    "dark-warm-gray",
    "light-pink",
    "light-green",
    "light-blue",
    "light-red",
    "light-teal",
    "light-yellow",
    "light-orange",
    "light-purple",
    "light-warm-gray",
]


def read_only(**kwargs: Any) -> Any:
    """Field populated only from responses."""
    return Field(default=None, json_schema_extra={READ_ONLY: True}, **kwargs)


def create_only(**kwargs: Any) -> Any:
    """Field that may only be set when the object is created."""
    return Field(default=None, json_schema_extra={CREATE_ONLY: True}, **kwargs)


def _reference(value: Any) -> Any:
    """Nested resources are sent as their gid."""
    if isinstance(value, AsanaModel):
        return value.gid if isinstance(value, HasID) else value.to_request()
    if isinstance(value, list):
        return [_reference(item) for item in value]
    return value


class AsanaModel(BaseModel):
    """Base for all resource models and mixins."""

    # Unknown keys from the API are kept rather than rejected
    model_config = ConfigDict(extra="allow")

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "AsanaModel":
        """
        Decode a response object into this model.

        Raises:
            AsanaDecodeError: If the payload is not an object or a field
                does not fit its type (bad date, unknown color, ...)
        """
        if not isinstance(payload, Mapping):
            raise AsanaDecodeError(
                f"Expected an object for {cls.__name__}, got {type(payload).__name__}"
            )
        try:
            return cls.model_validate(dict(payload))
        except ValidationError as e:
            raise AsanaDecodeError(f"Could not decode {cls.__name__}: {e}") from e

    @classmethod
    def fields_flagged(cls, flag: str) -> Set[str]:
        """Names of declared fields carrying the given access flag."""
        names = set()
        for name, field in cls.model_fields.items():
            extra = field.json_schema_extra
            if isinstance(extra, dict) and extra.get(flag):
                names.add(name)
        return names

    def to_request(self, create: bool = False) -> Dict[str, Any]:
        """
        Serialize the writable fields as a request ``data`` object.

        Read-only fields are always left out, create-only fields unless
        create is True. Unset fields and unknown response keys are left out.
        """
        cls = type(self)
        skip = cls.fields_flagged(READ_ONLY)
        if not create:
            skip |= cls.fields_flagged(CREATE_ONLY)

        names = {
            name for name in cls.model_fields
            if name not in skip and getattr(self, name) is not None
        }
        payload = self.model_dump(mode="json", include=names)

        for name in names:
            value = getattr(self, name)
            if isinstance(value, (AsanaModel, list)):
                payload[name] = _reference(value)
        return payload


# ============================================================================
# Field groups
# ============================================================================

class HasID(AsanaModel):
    """Mixin for objects with an ID"""

    # Globally unique ID of the object
    gid: Optional[str] = read_only()
    # Legacy integer form of the ID
    id: Optional[int] = read_only()

    @field_validator("gid", mode="before")
    @classmethod
    def gid_as_string(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def identifier(self) -> str:
        """The gid, falling back to the legacy integer id."""
        if self.gid is not None:
            return self.gid
        if self.id is not None:
            return str(self.id)
        return ""


class HasName(AsanaModel):
    """Mixin for objects with a human-readable name"""

    name: Optional[str] = None


class HasParent(AsanaModel):
    """Mixin for objects which are children of a Task object"""

    # The task this object is attached to
    parent: Optional["Task"] = read_only()


class HasCreated(AsanaModel):
    """Mixin for objects with a creation date"""

    created_at: Optional[datetime] = read_only()


class HasDates(HasCreated):
    """Mixin for objects with creation and modification dates"""

    # Does not reflect changes in associations such as tasks or comments
    # added to or removed from the object.
    modified_at: Optional[datetime] = read_only()


class HasNotes(AsanaModel):
    """Mixin for objects with notes attached"""

    notes: Optional[str] = None


class HasWorkspace(AsanaModel):
    """Mixin for objects which define the workspace they belong to"""

    # Objects cannot be moved to a different workspace once created
    workspace: Optional["Workspace"] = create_only()


class HasHearts(AsanaModel):
    """Mixin for objects which may be 'hearted'"""

    # Whether the authorized user hearted the object
    hearted: Optional[bool] = None
    hearts: Optional[List["User"]] = read_only()
    num_hearts: Optional[int] = read_only()


class HasFollowers(AsanaModel):
    """Mixin for objects which may have followers"""

    # Followers are the subset of members who receive all notifications
    followers: Optional[List["User"]] = read_only()


class HasColor(AsanaModel):
    """Mixin for objects with a color field"""

    color: Optional[Color] = None

    @field_validator("color", mode="before")
    @classmethod
    def none_color_is_absent(cls, value: Any) -> Any:
        return None if value == "none" else value


# ============================================================================
# Resources
# ============================================================================

class Workspace(HasID, HasName):
    """A workspace or organization; the top-level container of projects and users."""

    is_organization: Optional[bool] = read_only()
    email_domains: Optional[List[str]] = read_only()

    @property
    def label(self) -> str:
        return "Organization" if self.is_organization else "Workspace"


class User(HasID, HasName):
    """An Asana account holder."""

    email: Optional[str] = read_only()
    photo: Optional[Dict[str, str]] = read_only()
    workspaces: Optional[List[Workspace]] = read_only()


class Team(HasID, HasName):
    """
    Groups related projects and people together within an organization.
    Each project in an organization is associated with a team.
    """

    description: Optional[str] = None
    organization: Optional[Workspace] = read_only()


class Attachment(HasID, HasName, HasParent, HasCreated):
    """
    A file attached to a task, either uploaded or associated via a
    third-party service such as Dropbox or Google Drive.
    """

    # May be null for box-hosted files; otherwise only valid for about an
    # hour, so refresh it on demand instead of persisting it.
    download_url: Optional[str] = read_only()
    # One of asana, dropbox, gdrive, box
    host: Optional[str] = read_only()
    view_url: Optional[str] = read_only()


class Project(HasID, HasName, HasDates, HasNotes, HasWorkspace, HasFollowers, HasColor):
    """An ordered container of tasks within a workspace."""

    archived: Optional[bool] = None
    public: Optional[bool] = None
    owner: Optional[User] = None
    team: Optional[Team] = create_only()
    members: Optional[List[User]] = read_only()
    due_date: Optional[Date] = None
    start_on: Optional[Date] = None


class Section(HasID, HasName, HasCreated):
    """A named grouping of tasks within a project."""

    project: Optional[Project] = read_only()


class Tag(HasID, HasName, HasCreated, HasNotes, HasWorkspace, HasFollowers, HasColor):
    """A label that can be attached to any task in its workspace."""


class Task(HasID, HasName, HasParent, HasDates, HasNotes, HasWorkspace, HasHearts, HasFollowers):
    """The basic unit of work in Asana."""

    assignee: Optional[User] = None
    # One of inbox, later, today, upcoming
    assignee_status: Optional[str] = None
    completed: Optional[bool] = None
    completed_at: Optional[datetime] = read_only()
    due_on: Optional[Date] = None
    due_at: Optional[datetime] = None
    start_on: Optional[Date] = None
    projects: Optional[List[Project]] = create_only()
    tags: Optional[List[Tag]] = create_only()
    memberships: Optional[List[Dict[str, Any]]] = read_only()


for _model in (
    HasParent, HasWorkspace, HasHearts, HasFollowers,
    Workspace, User, Team, Attachment, Project, Section, Tag, Task,
):
    _model.model_rebuild()
