"""
Formatter — normalizes every file staged in a tree.

JSON files are re-serialized with a two-space indent (key order kept);
other text files lose trailing whitespace and end with exactly one
newline. Running it twice changes nothing the second time.
"""

from __future__ import annotations

import json
import logging

from libgen.core.engine.tree import Tree

logger = logging.getLogger(__name__)


def format_json(content: str) -> str:
    """Pretty-print JSON. Content that doesn't parse is formatted as text."""
    try:
        data = json.loads(content)
    except json.JSONDecodeError:
        return format_text(content)
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def format_text(content: str) -> str:
    lines = [line.rstrip() for line in content.splitlines()]
    while lines and not lines[-1]:
        lines.pop()
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def format_content(path: str, content: str) -> str:
    if path.endswith(".json"):
        return format_json(content)
    return format_text(content)


def format_files(tree: Tree) -> int:
    """Format every staged file in place. Returns how many changed."""
    changed = 0
    for path in tree.staged_paths():
        content = tree.read(path)
        if content is None:
            continue
        formatted = format_content(path, content)
        if formatted != content:
            tree.write(path, formatted)
            changed += 1
    logger.debug("Formatted %d staged file(s)", changed)
    return changed
