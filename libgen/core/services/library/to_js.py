"""
TypeScript → JavaScript conversion for generated sources.

This is a text transform for the small, regular sources generators
emit, not a compiler: it drops type-only imports and declarations and
strips annotations and casts. Files that are not ``.ts``/``.tsx``
sources pass through untouched, so converting twice is the same as
converting once.
"""

from __future__ import annotations

import logging
import re

from libgen.core.engine.tree import Tree
from libgen.core.models.options import NormalizedOptions
from libgen.core.models.template import GeneratedFile

logger = logging.getLogger(__name__)

_TS_EXT_RE = re.compile(r"\.tsx?$")

_TYPE_IMPORT_RE = re.compile(r"^[ \t]*import\s+type\s[^\n]*\n?", re.MULTILINE)
_TYPE_ALIAS_RE = re.compile(r"^[ \t]*(?:export\s+)?type\s+\w+(?:<[^>]*>)?\s*=[^;]*;[ \t]*\n?", re.MULTILINE)
_INTERFACE_RE = re.compile(
    r"^[ \t]*(?:export\s+)?interface\s+\w+[^{]*\{.*?^\}[ \t]*\n?",
    re.MULTILINE | re.DOTALL,
)
_TYPE = r"[\w.<>\[\]|&' ]+?"
_RETURN_TYPE_RE = re.compile(r"\)\s*:\s*" + _TYPE + r"\s*(\{|=>)")
_VAR_TYPE_RE = re.compile(r"\b(const|let|var)\s+(\w+)\s*:\s*" + _TYPE + r"\s*=")
_PARAM_LIST_RE = re.compile(r"\(([^(){}'\"`]*)\)")
_PARAM_TYPE_RE = re.compile(r"(\w+)\??\s*:\s*" + _TYPE + r"(?=\s*(?:,|=|$))")
_CAST_RE = re.compile(
    r"\s+as\s+(?:const|unknown|any|string|number|boolean|[A-Z]\w*(?:<[^>]*>)?(?:\[\])?)\b"
)
_IMPORT_EXPORT_LINE_RE = re.compile(r"^\s*(?:import|export\s*\{)")
_STRING_RE = re.compile(r"""('(?:\\.|[^'\\\n])*'|"(?:\\.|[^"\\\n])*"|`(?:\\.|[^`\\])*`)""")


def is_ts_source(path: str) -> bool:
    """Whether ``path`` is a TypeScript source that gets converted."""
    return bool(_TS_EXT_RE.search(path)) and not path.endswith(".d.ts")


def js_path(path: str) -> str:
    """``src/index.ts`` → ``src/index.js``. Non-TS paths are returned as-is."""
    if not is_ts_source(path):
        return path
    return _TS_EXT_RE.sub(".js", path)


def maybe_js(options: NormalizedOptions, path: str) -> str:
    """Return the JS path when the library is generated as JavaScript."""
    return js_path(path) if options.js else path


def _strip_params(m: re.Match) -> str:
    params = m.group(1)
    if ":" not in params:
        return m.group(0)
    return "(" + _PARAM_TYPE_RE.sub(r"\1", params) + ")"


def _strip_casts(line: str) -> str:
    if _IMPORT_EXPORT_LINE_RE.match(line):
        return line
    # Odd parts are string literals, left as written
    parts = _STRING_RE.split(line)
    return "".join(
        part if i % 2 else _CAST_RE.sub("", part)
        for i, part in enumerate(parts)
    )


def strip_types(source: str) -> str:
    """Remove TypeScript-only syntax from ``source``."""
    out = _TYPE_IMPORT_RE.sub("", source)
    out = _INTERFACE_RE.sub("", out)
    out = _TYPE_ALIAS_RE.sub("", out)
    out = _RETURN_TYPE_RE.sub(r") \1", out)
    out = _VAR_TYPE_RE.sub(r"\1 \2 =", out)
    out = _PARAM_LIST_RE.sub(_strip_params, out)
    out = "".join(_strip_casts(line) for line in out.splitlines(keepends=True))
    return out


def to_js(file: GeneratedFile) -> GeneratedFile:
    """Convert one generated file to plain JavaScript.

    Non-TypeScript files (including already converted ``.js`` files)
    are returned unchanged.
    """
    if not is_ts_source(file.path):
        return file
    return file.model_copy(
        update={"path": js_path(file.path), "content": strip_types(file.content)}
    )


def _uniq(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


def update_tsconfigs_to_js(tree: Tree, options: NormalizedOptions) -> None:
    """Let the library's tsconfig files pick up JavaScript sources."""
    tsconfig = f"{options.project_root}/tsconfig.json"
    if tree.exists(tsconfig):
        data = tree.read_json(tsconfig)
        compiler_options = data.setdefault("compilerOptions", {})
        compiler_options["allowJs"] = True
        tree.write_json(tsconfig, data)
    else:
        logger.debug("No %s — skipping allowJs", tsconfig)

    tsconfig_lib = f"{options.project_root}/tsconfig.lib.json"
    if tree.exists(tsconfig_lib):
        data = tree.read_json(tsconfig_lib)
        data["include"] = _uniq([*data.get("include", []), "**/*.js"])
        data["exclude"] = _uniq([*data.get("exclude", []), "**/*.spec.js"])
        tree.write_json(tsconfig_lib, data)
    else:
        logger.debug("No %s — skipping include/exclude", tsconfig_lib)
