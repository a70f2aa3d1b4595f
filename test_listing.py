#!/usr/bin/env python3
"""
Unit tests for asana_lister.listing

Uses a mocked AsanaClient returning fixed pages; no API calls are made.
"""

import sys
from io import StringIO
from pathlib import Path
from unittest.mock import MagicMock, call

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent))

from asana_lister import (
    AsanaClient,
    AsanaNotFoundError,
    AsanaServerError,
    Page,
    Project,
    RequestOptions,
    Section,
    Task,
    Workspace,
    list_projects,
    list_sections,
    list_tasks,
    list_workspaces,
    resolve_workspace,
)
from asana_lister.listing import collect_pages, format_line


@pytest.fixture
def client():
    return MagicMock(spec=AsanaClient)


@pytest.fixture
def out():
    return StringIO()


def workspaces_page(*specs, next_offset=None):
    return Page(
        items=[Workspace(gid=gid, name=name, is_organization=org) for gid, name, org in specs],
        next_offset=next_offset,
    )


class TestFormatLine:
    """Tests for the output line format."""

    def test_quotes_name(self):
        """Should print label, id and the quoted name."""
        assert format_line("Task", Task(gid="42", name="Ship it")) == 'Task 42 "Ship it"'

    def test_escapes_quotes_and_control_characters(self):
        """Should escape embedded quotes, backslashes and newlines."""
        task = Task(gid="1", name='Say "hi"\\now\n')
        assert format_line("Task", task) == 'Task 1 "Say \\"hi\\"\\\\now\\n"'

    def test_keeps_unicode(self):
        """Should print non-ASCII names as-is."""
        assert format_line("Project", Project(gid="7", name="Café ☕")) == 'Project 7 "Café ☕"'

    def test_missing_name(self):
        """Should print an empty quoted name."""
        assert format_line("Section", Section(gid="9")) == 'Section 9 ""'


class TestListWorkspaces:
    """Tests for list_workspaces."""

    def test_labels_in_order(self, client, out):
        """Should label organizations and workspaces, preserving order."""
        client.workspaces.return_value = workspaces_page(
            ("1", "Acme", True),
            ("2", "Home", False),
            ("3", "Partners", True),
        )

        result = list_workspaces(client, out=out)

        assert out.getvalue().splitlines() == [
            'Organization 1 "Acme"',
            'Workspace 2 "Home"',
            'Organization 3 "Partners"',
        ]
        assert [ws.gid for ws in result] == ["1", "2", "3"]

    def test_defaults_to_stdout(self, client, capsys):
        """Should print to stdout when no stream is given."""
        client.workspaces.return_value = workspaces_page(("1", "Acme", False))

        list_workspaces(client)

        assert capsys.readouterr().out == 'Workspace 1 "Acme"\n'

    def test_follows_pages(self, client, out):
        """Should thread the continuation offset until exhausted."""
        client.workspaces.side_effect = [
            workspaces_page(("1", "A", False), next_offset="o1"),
            workspaces_page(("2", "B", False), next_offset="o2"),
            workspaces_page(("3", "C", True)),
        ]

        list_workspaces(client, out=out)

        assert len(out.getvalue().splitlines()) == 3
        assert client.workspaces.call_args_list == [
            call(offset=None, options=None),
            call(offset="o1", options=None),
            call(offset="o2", options=None),
        ]

    def test_first_page_only(self, client, out):
        """Should stop after one page when all_pages is False."""
        client.workspaces.return_value = workspaces_page(("1", "A", False), next_offset="o1")

        list_workspaces(client, out=out, all_pages=False)

        assert out.getvalue() == 'Workspace 1 "A"\n'
        client.workspaces.assert_called_once()

    def test_error_propagates_unchanged(self, client, out):
        """Should raise the client's error as-is and print nothing."""
        error = AsanaServerError("Server error during listing workspaces (HTTP 500)", status=500)
        client.workspaces.side_effect = error

        with pytest.raises(AsanaServerError) as exc_info:
            list_workspaces(client, out=out)

        assert exc_info.value is error
        assert out.getvalue() == ""


class TestListChildren:
    """Tests for list_projects, list_tasks and list_sections."""

    def test_list_projects(self, client, out):
        """Should list projects of the workspace."""
        client.projects.return_value = Page([Project(gid="p1", name="Launch")])
        options = RequestOptions(fields=["name"])

        result = list_projects(client, Workspace(gid="w1"), out=out, options=options)

        client.projects.assert_called_once_with("w1", offset=None, options=options)
        assert out.getvalue() == 'Project p1 "Launch"\n'
        assert result[0].name == "Launch"

    def test_list_tasks(self, client, out):
        """Should list tasks of the project."""
        client.tasks.return_value = Page([Task(gid="t1", name="Ship"), Task(gid="t2", name="Celebrate")])

        list_tasks(client, Project(gid="p1"), out=out)

        client.tasks.assert_called_once_with("p1", offset=None, options=None)
        assert out.getvalue().splitlines() == ['Task t1 "Ship"', 'Task t2 "Celebrate"']

    def test_list_tasks_empty(self, client, out):
        """Should print nothing and not fail for an empty project."""
        client.tasks.return_value = Page([])

        result = list_tasks(client, Project(gid="p1"), out=out)

        assert result == []
        assert out.getvalue() == ""

    def test_list_sections(self, client, out):
        """Should list sections of the project."""
        client.sections.return_value = Page([Section(gid="s1", name="Backlog")])

        list_sections(client, Project(gid="p1"), out=out)

        assert out.getvalue() == 'Section s1 "Backlog"\n'

    def test_legacy_id_parent(self, client, out):
        """Should address a parent that only has the integer id."""
        client.sections.return_value = Page([])

        list_sections(client, Project(id=1234), out=out)

        client.sections.assert_called_once_with("1234", offset=None, options=None)

    def test_failure_on_later_page_prints_nothing(self, client, out):
        """Should not report partial results when a later page fails."""
        error = AsanaServerError("boom", status=502)
        client.tasks.side_effect = [Page([Task(gid="t1", name="Ship")], next_offset="o1"), error]

        with pytest.raises(AsanaServerError) as exc_info:
            list_tasks(client, Project(gid="p1"), out=out)

        assert exc_info.value is error
        assert out.getvalue() == ""


class TestCollectPages:
    """Tests for collect_pages."""

    def test_passes_positional_args(self):
        """Should forward the parent gid on every call."""
        fetch = MagicMock(side_effect=[Page([1], "o1"), Page([2])])

        assert collect_pages(fetch, "p1") == [1, 2]
        assert fetch.call_args_list == [
            call("p1", offset=None, options=None),
            call("p1", offset="o1", options=None),
        ]


class TestResolveWorkspace:
    """Tests for resolve_workspace."""

    def test_first_workspace_by_default(self, client):
        """Should return the first workspace when no ref is given."""
        client.workspaces.return_value = workspaces_page(("1", "Acme", True), ("2", "Home", False))

        assert resolve_workspace(client).gid == "1"

    def test_by_gid_or_name(self, client):
        """Should match gid exactly and name case-insensitively."""
        client.workspaces.return_value = workspaces_page(("1", "Acme", True), ("2", "Home", False))

        assert resolve_workspace(client, "2").name == "Home"
        assert resolve_workspace(client, "acme").gid == "1"

    def test_not_found_lists_available(self, client):
        """Should name the available workspaces when nothing matches."""
        client.workspaces.return_value = workspaces_page(("1", "Acme", True), ("2", "Home", False))

        with pytest.raises(AsanaNotFoundError) as exc_info:
            resolve_workspace(client, "Elsewhere")
        assert "'Acme', 'Home'" in str(exc_info.value)

    def test_no_workspaces(self, client):
        """Should fail when the account has no workspaces."""
        client.workspaces.return_value = Page([])

        with pytest.raises(AsanaNotFoundError):
            resolve_workspace(client)
