"""Tests for openskills.flows.sync: writing the skills section into AGENTS.md."""

from __future__ import annotations

import pytest
from conftest import FakePrompter, write_skill

from openskills.errors import SourceFormatError
from openskills.flows.sync import ensure_manifest, sync_skills
from openskills.manifest import REMOVED_PLACEHOLDER, generate_skills_xml, parse_current_skills
from openskills.models import Skill


def _sync(project, **kwargs):
    working_dir, home = project
    return sync_skills(working_dir=working_dir, home=home, **kwargs)


class TestEnsureManifest:
    def test_creates_with_title(self, tmp_path):
        path = tmp_path / "docs" / "CLAUDE.md"
        assert ensure_manifest(path) is True
        assert path.read_text() == "# CLAUDE\n\n"

    def test_existing_file_untouched(self, tmp_path):
        path = tmp_path / "AGENTS.md"
        path.write_text("keep me")
        assert ensure_manifest(path) is False
        assert path.read_text() == "keep me"


class TestSyncSkills:
    def test_rejects_non_markdown_output(self, project):
        working_dir, _ = project
        with pytest.raises(SourceFormatError, match=r"\.md"):
            _sync(project, output="AGENTS.txt", yes=True)
        assert not (working_dir / "AGENTS.txt").exists()

    def test_fresh_repository_creates_agents_md(self, project):
        working_dir, _ = project
        write_skill(working_dir / ".claude/skills", "pdf", "PDF toolkit")

        result = _sync(project, yes=True)

        content = (working_dir / "AGENTS.md").read_text()
        assert content.startswith("# AGENTS\n\n<skills_system")
        assert parse_current_skills(content) == ["pdf"]
        assert result.action == "added"
        assert result.count == 1

    def test_no_skills_leaves_created_file(self, project):
        working_dir, _ = project
        result = _sync(project, yes=True)
        assert result.action == "none"
        assert (working_dir / "AGENTS.md").read_text() == "# AGENTS\n\n"

    def test_second_sync_reports_synced_and_is_stable(self, project):
        working_dir, _ = project
        write_skill(working_dir / ".claude/skills", "pdf")
        _sync(project, yes=True)
        first = (working_dir / "AGENTS.md").read_text()

        result = _sync(project, yes=True)

        assert result.action == "synced"
        assert (working_dir / "AGENTS.md").read_text() == first

    def test_custom_output_path(self, project):
        working_dir, _ = project
        write_skill(working_dir / ".claude/skills", "pdf")
        result = _sync(project, yes=True, output="docs/RULES.md")
        assert result.path == working_dir / "docs/RULES.md"
        assert result.path.read_text().startswith("# RULES\n\n")

    def test_preselects_project_and_already_listed_global(self, project):
        working_dir, home = project
        write_skill(working_dir / ".claude/skills", "proj")
        write_skill(home / ".claude/skills", "listed")
        write_skill(home / ".claude/skills", "unlisted")
        listed = Skill(name="listed", description="", location="global", path="")
        (working_dir / "AGENTS.md").write_text("# AGENTS\n\n" + generate_skills_xml([listed]) + "\n")
        prompter = FakePrompter()

        _sync(project, prompter=prompter)

        _, choices = prompter.selections[0]
        assert [(c.value, c.checked) for c in choices] == [
            ("proj", True),
            ("listed", True),
            ("unlisted", False),
        ]
        assert parse_current_skills((working_dir / "AGENTS.md").read_text()) == ["proj", "listed"]

    def test_empty_selection_removes_section(self, project):
        working_dir, _ = project
        write_skill(working_dir / ".claude/skills", "pdf")
        _sync(project, yes=True)

        result = _sync(project, prompter=FakePrompter(select=[]))

        content = (working_dir / "AGENTS.md").read_text()
        assert result.action == "removed"
        assert REMOVED_PLACEHOLDER in content
        assert "<skills_system" not in content

    def test_prose_tag_mention_kept_across_syncs(self, project, capsys):
        working_dir, _ = project
        write_skill(working_dir / ".claude/skills", "pdf")
        agents = working_dir / "AGENTS.md"
        agents.write_text("# AGENTS\n\nThe installer writes a `<skills_system>` tag.\n\nKeep this paragraph.\n")

        first = _sync(project, yes=True)
        second = _sync(project, yes=True)

        content = agents.read_text()
        assert "Keep this paragraph." in content
        assert content.count('<skills_system priority="1">') == 1
        assert first.action == "added"
        assert second.action == "synced"
        out = capsys.readouterr().out
        assert "Added skills section to AGENTS.md" in out
