"""
Tests for the placeholder / conditional-block template engine.
"""

from pathlib import Path

from libgen.core.services.library.template_engine import (
    load_template_set,
    process_template,
    render_template_set,
    substitute,
)


class TestSubstitute:
    def test_known_keys_replaced(self):
        assert substitute("__name__-lib", {"name": "foo"}) == "foo-lib"

    def test_unknown_keys_left(self):
        assert substitute("__dirname + __other__", {"name": "foo"}) == "__dirname + __other__"

    def test_empty_value_removes_marker(self):
        assert substitute("package.json__tmpl__", {"tmpl": ""}) == "package.json"

    def test_multiple_markers_in_path(self):
        out = substitute("src/lib/__fileName__.spec.ts__tmpl__", {"fileName": "foo", "tmpl": ""})
        assert out == "src/lib/foo.spec.ts"


class TestProcessTemplate:
    def test_feature_on_keeps_body(self):
        src = "a\n// __IF_FEATURE_jest__\nb\n// __ENDIF__\nc\n"
        assert process_template(src, {"jest": True}, {}) == "a\nb\nc\n"

    def test_feature_off_drops_body(self):
        src = "a\n// __IF_FEATURE_jest__\nb\n// __ENDIF__\nc\n"
        assert process_template(src, {"jest": False}, {}) == "a\nc\n"

    def test_missing_feature_is_off(self):
        src = "a\n// __IF_FEATURE_jest__\nb\n// __ENDIF__\n"
        assert process_template(src, {}, {}) == "a\n"

    def test_if_not(self):
        src = "// __IF_NOT_FEATURE_js__\nts\n// __ENDIF__\n"
        assert process_template(src, {"js": False}, {}) == "ts\n"
        assert process_template(src, {"js": True}, {}) == ""

    def test_nested_blocks(self):
        src = (
            "// __IF_FEATURE_a__\n"
            "outer\n"
            "// __IF_FEATURE_b__\n"
            "inner\n"
            "// __ENDIF__\n"
            "// __ENDIF__\n"
        )
        assert process_template(src, {"a": True, "b": True}, {}) == "outer\ninner\n"
        assert process_template(src, {"a": True, "b": False}, {}) == "outer\n"
        assert process_template(src, {"a": False, "b": True}, {}) == ""

    def test_placeholders_in_body(self):
        src = "// __IF_FEATURE_on__\nname=__name__\n// __ENDIF__\n"
        assert process_template(src, {"on": True}, {"name": "foo"}) == "name=foo\n"

    def test_blank_runs_collapsed(self):
        src = "a\n\n// __IF_FEATURE_x__\nb\n// __ENDIF__\n\nc\n"
        assert process_template(src, {}, {}) == "a\n\nc\n"


class TestTemplateSet:
    def _make_set(self, root: Path) -> Path:
        tpl = root / "tpl"
        (tpl / "src" / "lib").mkdir(parents=True)
        (tpl / "src" / "lib" / "__fileName__.ts__tmpl__").write_text(
            "export const x = '__name__';\n", encoding="utf-8",
        )
        (tpl / "README.md").write_text("# __name__\n", encoding="utf-8")
        return tpl

    def test_load_is_sorted(self, tmp_path: Path):
        tpl = self._make_set(tmp_path)
        paths = [p for p, _ in load_template_set(tpl)]
        assert paths == ["README.md", "src/lib/__fileName__.ts__tmpl__"]

    def test_render(self, tmp_path: Path):
        tpl = self._make_set(tmp_path)
        files = render_template_set(tpl, {}, {"name": "foo", "fileName": "foo", "tmpl": ""})
        assert [f.path for f in files] == ["README.md", "src/lib/foo.ts"]
        assert files[1].content == "export const x = 'foo';\n"
        assert files[0].reason == "template README.md"
