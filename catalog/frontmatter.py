"""Parsing and rendering helpers for SKILL.md documents."""

from __future__ import annotations

import asyncio
import re
from pathlib import Path

import aiofiles
import aiofiles.os
import yaml

from errors import MalformedDocumentError

from .types import SkillFrontmatter

DELIMITER = "---"
_DELIMITER_LINE = re.compile(r"^---[ \t]*$", re.MULTILINE)


def parse_skill_document(text: str) -> tuple[SkillFrontmatter, str]:
    """Split a skill document into its front matter and body.

    The document must start with a ``---`` line, followed by a YAML block with
    string ``name`` and ``description`` fields, a closing ``---`` line and the
    body. Only whole lines count as delimiters, so ``---`` inside a value or
    later in the body is left alone.

    Raises:
        MalformedDocumentError: If the front matter is missing or invalid
    """
    content = text.strip()
    opening = _DELIMITER_LINE.match(content)
    if opening is None:
        raise MalformedDocumentError("Skill file must start with YAML frontmatter")

    closing = _DELIMITER_LINE.search(content, opening.end())
    if closing is None:
        raise MalformedDocumentError("Invalid frontmatter format")

    try:
        data = yaml.safe_load(content[opening.end() : closing.start()].strip())
    except yaml.YAMLError as e:
        raise MalformedDocumentError(f"Invalid YAML frontmatter: {e}") from e

    if not isinstance(data, dict):
        raise MalformedDocumentError("Invalid YAML frontmatter: expected a mapping")

    fields: dict[str, str] = {}
    for key in ("name", "description"):
        value = data.get(key)
        if not isinstance(value, str):
            raise MalformedDocumentError(f"Invalid YAML frontmatter: missing string field '{key}'")
        fields[key] = value

    return SkillFrontmatter(**fields), content[closing.end() :].strip()


def generate_skill_document(name: str, description: str, body: str) -> str:
    block = yaml.safe_dump(
        {"name": name, "description": description},
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=float("inf"),
    )
    return f"{DELIMITER}\n{block}{DELIMITER}\n\n{body}"


async def read_text(path: Path) -> str:
    async with aiofiles.open(path, encoding="utf-8") as handle:
        return await handle.read()


async def write_text(path: Path, text: str) -> None:
    await aiofiles.os.makedirs(path.parent, exist_ok=True)
    async with aiofiles.open(path, "w", encoding="utf-8") as handle:
        await handle.write(text)


async def list_skill_dirs(skills_dir: Path) -> list[Path]:
    if not await aiofiles.os.path.exists(skills_dir):
        return []

    def _collect() -> list[Path]:
        return [entry for entry in skills_dir.iterdir() if entry.is_dir()]

    return await asyncio.to_thread(_collect)
