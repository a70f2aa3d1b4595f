#!/usr/bin/env python3
"""
Unit tests for asana_lister.client

Tests cover:
- Request construction (limit, offset, opt_* parameters, full payload)
- Page decoding and continuation offsets
- SDK error translation
- Input validation
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from asana.rest import ApiException

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent))

from asana_lister import (
    AsanaClient,
    AsanaDecodeError,
    AsanaNotFoundError,
    Page,
    Project,
    RequestOptions,
    Section,
    Task,
    Workspace,
)


def payload(items, offset=None):
    next_page = {"offset": offset, "path": "/x", "uri": "https://app.asana.com/x"} if offset else None
    return {"data": items, "next_page": next_page}


@pytest.fixture
def mock_asana():
    """Patch the SDK module used by the client."""
    with patch("asana_lister.client.asana") as mock:
        yield mock


@pytest.fixture
def client():
    """Client around a stand-in SDK ApiClient."""
    return AsanaClient(api_client=MagicMock(), page_size=50)


class TestClientInitialization:
    """Tests for AsanaClient construction."""

    def test_uses_given_api_client(self):
        """Should not build a client when one is provided."""
        api_client = MagicMock()
        with patch("asana_lister.client.get_client") as mock_get_client:
            client = AsanaClient(api_client=api_client, page_size=10)
        mock_get_client.assert_not_called()
        assert client._api_client is api_client
        assert client._page_size == 10

    def test_builds_api_client_from_config(self):
        """Should build the SDK client from configuration by default."""
        with patch("asana_lister.client.get_client") as mock_get_client:
            client = AsanaClient()
        assert client._api_client is mock_get_client.return_value


class TestWorkspaces:
    """Tests for listing workspaces."""

    def test_first_page(self, client, mock_asana):
        """Should request one page and decode workspaces."""
        api = mock_asana.WorkspacesApi.return_value
        api.get_workspaces.return_value = payload(
            [
                {"gid": "1", "name": "Acme", "is_organization": True},
                {"gid": "2", "name": "Home", "is_organization": False},
            ],
            offset="eyJ0eXAiOJiKV1iQLCJhbGciOiJIUzI1NiJ9",
        )

        page = client.workspaces()

        api.get_workspaces.assert_called_once_with({"limit": 50}, full_payload=True)
        assert isinstance(page, Page)
        assert [ws.gid for ws in page.items] == ["1", "2"]
        assert all(isinstance(ws, Workspace) for ws in page.items)
        assert page.next_offset == "eyJ0eXAiOJiKV1iQLCJhbGciOiJIUzI1NiJ9"

    def test_offset_and_options(self, client, mock_asana):
        """Should pass offset and opt_* parameters."""
        api = mock_asana.WorkspacesApi.return_value
        api.get_workspaces.return_value = payload([])

        client.workspaces(offset="abc", options=RequestOptions(fields=["name", "is_organization"]))

        api.get_workspaces.assert_called_once_with(
            {"limit": 50, "offset": "abc", "opt_fields": "name,is_organization"},
            full_payload=True,
        )

    def test_last_page_has_no_offset(self, client, mock_asana):
        """Should report no continuation on the last page."""
        mock_asana.WorkspacesApi.return_value.get_workspaces.return_value = payload([{"gid": "1"}])

        assert client.workspaces().next_offset is None


class TestChildren:
    """Tests for listing projects, tasks and sections."""

    def test_projects(self, client, mock_asana):
        """Should list projects of the given workspace."""
        api = mock_asana.ProjectsApi.return_value
        api.get_projects_for_workspace.return_value = payload([{"gid": "p1", "name": "Launch"}])

        page = client.projects("w1")

        api.get_projects_for_workspace.assert_called_once_with("w1", {"limit": 50}, full_payload=True)
        assert isinstance(page.items[0], Project)

    def test_tasks(self, client, mock_asana):
        """Should list tasks of the given project."""
        api = mock_asana.TasksApi.return_value
        api.get_tasks_for_project.return_value = payload(
            [{"gid": "t1", "name": "Ship", "due_on": "2012-03-26"}], offset="next"
        )

        page = client.tasks("p1", offset="cur")

        api.get_tasks_for_project.assert_called_once_with(
            "p1", {"limit": 50, "offset": "cur"}, full_payload=True
        )
        assert isinstance(page.items[0], Task)
        assert page.next_offset == "next"

    def test_sections(self, client, mock_asana):
        """Should list sections of the given project."""
        api = mock_asana.SectionsApi.return_value
        api.get_sections_for_project.return_value = payload([{"gid": "s1", "name": "Backlog"}])

        page = client.sections("p1")

        api.get_sections_for_project.assert_called_once_with("p1", {"limit": 50}, full_payload=True)
        assert isinstance(page.items[0], Section)

    @pytest.mark.parametrize("bad_gid", ["", None, 123])
    def test_invalid_parent_gid(self, client, mock_asana, bad_gid):
        """Should reject a missing or non-string parent gid."""
        with pytest.raises(ValueError):
            client.tasks(bad_gid)
        mock_asana.TasksApi.return_value.get_tasks_for_project.assert_not_called()


class TestErrors:
    """Tests for error surfacing."""

    def test_api_exception_translated(self, client, mock_asana):
        """Should raise AsanaNotFoundError for a 404."""
        mock_asana.SectionsApi.return_value.get_sections_for_project.side_effect = ApiException(
            status=404, reason="Not Found"
        )

        with pytest.raises(AsanaNotFoundError) as exc_info:
            client.sections("missing")
        assert "listing sections of project missing" in str(exc_info.value)

    def test_bad_item_is_decode_error(self, client, mock_asana):
        """Should raise AsanaDecodeError for an item that does not fit."""
        mock_asana.TasksApi.return_value.get_tasks_for_project.return_value = payload(
            [{"gid": "t1", "due_on": "2012-3-26"}]
        )

        with pytest.raises(AsanaDecodeError):
            client.tasks("p1")

    def test_non_list_payload_is_decode_error(self, client, mock_asana):
        """Should raise AsanaDecodeError when data is not a list."""
        mock_asana.WorkspacesApi.return_value.get_workspaces.return_value = {"data": {"gid": "1"}}

        with pytest.raises(AsanaDecodeError):
            client.workspaces()
