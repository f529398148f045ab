"""Cursor client."""

import logging
from pathlib import Path

from sx.assets.types import AssetType
from sx.clients.base import BaseClient
from sx.clients.types import InstallScope
from sx.core.errors import MetadataError
from sx.metadata.parser import METADATA_FILE_NAME, parse_metadata

logger = logging.getLogger(__name__)

CURSOR_CLIENT_ID = "cursor"

SKILLS_RULE_PATH = Path("rules") / "skills" / "RULE.md"

_RULE_TEMPLATE = """---
description: "Available skills for AI assistance"
alwaysApply: true
---

<!-- Generated by sx. Run 'sx install' to regenerate. -->

## Available Skills

When a task matches one of these skills, read its SKILL.md before starting.

<available_skills>
{skills}
</available_skills>
"""


class CursorClient(BaseClient):
    """Installs MCP servers, skills and commands into .cursor directories.

    Cursor has no native skill discovery, so after each install a rule file
    listing the installed skills is regenerated.
    """

    def __init__(self, *, home: Path) -> None:
        super().__init__(
            client_id=CURSOR_CLIENT_ID,
            display_name="Cursor",
            asset_types=frozenset(
                {AssetType.MCP, AssetType.MCP_REMOTE, AssetType.SKILL, AssetType.COMMAND}
            ),
            home=home,
            dir_name=".cursor",
        )

    def is_installed(self) -> bool:
        return self.global_base.is_dir()

    def ensure_skills_support(self, scope: InstallScope) -> None:
        target_base = self.target_base(scope)
        rule_path = target_base / SKILLS_RULE_PATH
        skills = _installed_skills(target_base / "skills")

        if not skills:
            rule_path.unlink(missing_ok=True)
            return

        entries = "\n".join(
            f"<skill>\n<name>{name}</name>\n<description>{description}</description>\n"
            f"<path>{target_base / 'skills' / name / 'SKILL.md'}</path>\n</skill>"
            for name, description in skills
        )
        rule_path.parent.mkdir(parents=True, exist_ok=True)
        rule_path.write_text(_RULE_TEMPLATE.format(skills=entries), encoding="utf-8")


def _installed_skills(skills_dir: Path) -> list[tuple[str, str]]:
    """(name, description) for each skill directory with readable metadata."""
    if not skills_dir.is_dir():
        return []

    skills: list[tuple[str, str]] = []
    for skill_dir in sorted(skills_dir.iterdir()):
        metadata_path = skill_dir / METADATA_FILE_NAME
        if not metadata_path.is_file():
            continue
        try:
            metadata = parse_metadata(metadata_path.read_bytes())
        except MetadataError as e:
            logger.warning("Skipping skill %s in rules file: %s", skill_dir.name, e)
            continue
        skills.append((skill_dir.name, metadata.asset.description))
    return skills
