"""Loaded chain markdown plus parsed metadata."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import frontmatter
from pydantic import ValidationError

from hybrid_chain.errors import ConfigurationError
from hybrid_chain.models.chain_spec import ChainSpec
from hybrid_chain.models.patterns import SECTION_HEADER_RE, STEP_ID_RE


logger = logging.getLogger(__name__)


@dataclass
class LoadedChainFile:
    spec: ChainSpec
    notes: str
    step_notes: dict[str, str]  # "step:<id>" -> markdown chunk

    def __init__(self, chain: Path | str) -> None:
        post, source_label = load_chain_frontmatter(chain)
        try:
            spec = ChainSpec.model_validate(post.metadata)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid chain definition in {source_label}: {exc}") from exc
        sections = parse_chain_sections(post.content)
        if sections.first_section_start is not None:
            preamble = post.content[: sections.first_section_start]
            if preamble.strip() and sections.notes_start is not None:
                logger.warning("Ignored text before notes in %s", source_label)
        for key in sections.step_notes:
            step_id = key.split(":", 1)[1]
            if step_id not in {step.id for step in spec.steps}:
                logger.warning("Notes for unknown step %r in %s", step_id, source_label)
        self.spec = spec
        self.notes = sections.notes
        self.step_notes = sections.step_notes

    @classmethod
    def from_parts(
        cls,
        *,
        spec: ChainSpec,
        notes: str = "",
        step_notes: dict[str, str] | None = None,
    ) -> "LoadedChainFile":
        obj = cls.__new__(cls)
        obj.spec = spec
        obj.notes = notes
        obj.step_notes = step_notes or {}
        return obj


@dataclass(frozen=True)
class ParsedChainSections:
    notes: str
    step_notes: dict[str, str]
    notes_start: int | None
    first_section_start: int | None


def load_chain_frontmatter(chain: Path | str) -> tuple[frontmatter.Post, str]:
    if isinstance(chain, Path):
        post = frontmatter.load(str(chain))
        return post, str(chain)
    # Multi-line strings are inline markdown, never paths.
    if "\n" in chain:
        return frontmatter.loads(chain), "<inline>"
    chain_path = Path(chain)
    if chain_path.exists():
        post = frontmatter.load(str(chain_path))
        return post, str(chain_path)
    post = frontmatter.loads(chain)
    return post, "<inline>"


def classify_section_header(header_text: str) -> tuple[str, str] | None:
    header = header_text.strip()
    if ":" in header:
        prefix, step_id = header.split(":", 1)
        if prefix.strip().lower() == "step":
            step_id = step_id.strip()
            if step_id and STEP_ID_RE.match(step_id):
                return ("step", f"step:{step_id}")
    if header.lower() == "notes":
        return ("notes", "notes")
    return None


def parse_chain_sections(markdown_body: str) -> ParsedChainSections:
    recognized: list[tuple[str, str, int, int]] = []
    notes_start: int | None = None

    for match in SECTION_HEADER_RE.finditer(markdown_body):
        classified = classify_section_header(match.group(2))
        if classified is None:
            continue
        kind, key = classified
        recognized.append((kind, key, match.start(), match.end()))
        if kind == "notes" and notes_start is None:
            notes_start = match.start()

    notes = ""
    step_notes: dict[str, str] = {}

    for index, (kind, key, _start, end) in enumerate(recognized):
        next_index = index + 1
        section_end = recognized[next_index][2] if next_index < len(recognized) else len(markdown_body)
        content = markdown_body[end:section_end].strip()
        if kind == "notes":
            if not notes:
                notes = content
        else:
            step_notes[key] = content

    first_section_start = recognized[0][2] if recognized else None
    return ParsedChainSections(
        notes=notes,
        step_notes=step_notes,
        notes_start=notes_start,
        first_section_start=first_section_start,
    )
