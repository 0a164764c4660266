"""YAML frontmatter for Markdown files.

A file is a ``---`` delimited YAML header followed by a free-text body::

    ---
    mood: 4
    context: standup
    ---

    Seemed energised after the launch.
"""

from __future__ import annotations

import yaml

from rapport.storage.errors import FrontmatterError

DELIMITER = "---"


def _drop_line_break(text: str) -> str:
    if text.startswith("\r\n"):
        return text[2:]
    if text.startswith("\n"):
        return text[1:]
    return text


def parse_frontmatter(text: str) -> tuple[str | None, str]:
    """Split text into (header, body).

    The header is None when the text does not start with ``---`` or the
    closing delimiter is missing; the body is then the whole text. Otherwise
    the body is whatever follows the closing delimiter line and the one
    blank separator line, kept verbatim.
    """
    stripped = text.lstrip()
    if not stripped.startswith(DELIMITER):
        return None, text

    after_start = stripped[len(DELIMITER):]
    end = after_start.find("\n" + DELIMITER)
    if end == -1:
        return None, text

    header = after_start[:end].strip()
    rest = after_start[end + 1 + len(DELIMITER):]
    body = _drop_line_break(_drop_line_break(rest))
    return header, body


def load_header(header: str | None) -> dict:
    """Parse a header block into a dict; missing or empty headers give {}."""
    if not header:
        return {}
    try:
        data = yaml.safe_load(header)
    except yaml.YAMLError as e:
        raise FrontmatterError(f"Invalid YAML header: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontmatterError(
            f"Header must be a mapping, got {type(data).__name__}"
        )
    return data


def read_document(text: str) -> tuple[dict, str]:
    header, body = parse_frontmatter(text)
    return load_header(header), body


def render_document(data: dict, body: str) -> str:
    """Serialise a header dict and body back into a Markdown document."""
    yaml_text = yaml.safe_dump(
        data, sort_keys=False, allow_unicode=True, default_flow_style=False
    )
    return f"{DELIMITER}\n{yaml_text}{DELIMITER}\n\n{body}"
