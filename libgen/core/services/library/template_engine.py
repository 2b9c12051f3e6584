"""
Template engine for generator file sets.

Template files are real source files (TypeScript, JSON, Markdown) that
editors can highlight. Two mechanisms turn them into output:

  1. Conditional blocks:  // __IF_FEATURE_xxx__ / // __IF_NOT_FEATURE_xxx__ / // __ENDIF__
  2. Placeholder substitution:  __key__  (in file content AND file paths)

A path placeholder that resolves to an empty string disappears, which
is how the ``__tmpl__`` suffix keeps template files from being picked
up by the workspace's own tooling:  ``package.json__tmpl__`` → ``package.json``.
"""

from __future__ import annotations

import re
from pathlib import Path

from libgen.core.models.template import GeneratedFile

_PLACEHOLDER_RE = re.compile(r"__([A-Za-z][A-Za-z0-9]*)__")


def load_template_set(template_dir: Path) -> list[tuple[str, str]]:
    """Read every file under ``template_dir`` as (relative posix path, content).

    Order is sorted by path so the same directory always yields the same set.
    """
    files: list[tuple[str, str]] = []
    for path in sorted(p for p in template_dir.rglob("*") if p.is_file()):
        rel = path.relative_to(template_dir).as_posix()
        files.append((rel, path.read_text(encoding="utf-8")))
    return files


def substitute(text: str, placeholders: dict[str, str]) -> str:
    """Replace ``__key__`` markers whose key is known; leave the rest alone."""

    def _replace(m: re.Match) -> str:
        key = m.group(1)
        if key in placeholders:
            return placeholders[key]
        return m.group(0)

    return _PLACEHOLDER_RE.sub(_replace, text)


def process_template(
    content: str,
    features: dict[str, bool],
    placeholders: dict[str, str],
) -> str:
    """Process a template file with conditional blocks and placeholders.

    Conditional blocks use comment syntax; the marker lines themselves
    are always removed:

        // __IF_FEATURE_xxx__
        ... included only if feature 'xxx' is enabled ...
        // __ENDIF__

        // __IF_NOT_FEATURE_xxx__
        ... included only if feature 'xxx' is DISABLED ...
        // __ENDIF__

    Blocks may be nested; processing repeats until no markers remain.
    """
    changed = True
    while changed:
        changed = False

        def _replace_if(m: re.Match) -> str:
            nonlocal changed
            changed = True
            body = m.group(2)
            return body if features.get(m.group(1), False) else ""

        content = re.sub(
            r"[ \t]*//\s*__IF_FEATURE_(\w+?)__[ \t]*\n"
            r"((?:(?![ \t]*//\s*__IF_(?:NOT_)?FEATURE_).)*?)"
            r"[ \t]*//\s*__ENDIF__[ \t]*\n",
            _replace_if,
            content,
            flags=re.DOTALL,
        )

        def _replace_if_not(m: re.Match) -> str:
            nonlocal changed
            changed = True
            body = m.group(2)
            return "" if features.get(m.group(1), False) else body

        content = re.sub(
            r"[ \t]*//\s*__IF_NOT_FEATURE_(\w+?)__[ \t]*\n"
            r"((?:(?![ \t]*//\s*__IF_(?:NOT_)?FEATURE_).)*?)"
            r"[ \t]*//\s*__ENDIF__[ \t]*\n",
            _replace_if_not,
            content,
            flags=re.DOTALL,
        )

    content = substitute(content, placeholders)

    # Collapse blank runs left by removed blocks
    content = re.sub(r"\n{3,}", "\n\n", content)

    return content


def render_template_set(
    template_dir: Path,
    features: dict[str, bool],
    placeholders: dict[str, str],
) -> list[GeneratedFile]:
    """Render a whole template directory into generated files (paths unrebased)."""
    rendered: list[GeneratedFile] = []
    for rel_path, content in load_template_set(template_dir):
        rendered.append(
            GeneratedFile(
                path=substitute(rel_path, placeholders),
                content=process_template(content, features, placeholders),
                reason=f"template {rel_path}",
            )
        )
    return rendered
