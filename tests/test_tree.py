"""
Tests for the staging tree and its two-phase commit.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from libgen.core.engine.tree import Tree, TreeError


class TestPaths:
    def test_normalize(self):
        assert Tree.normalize_path("libs/./foo//a.ts") == "libs/foo/a.ts"
        assert Tree.normalize_path("libs\\foo\\a.ts") == "libs/foo/a.ts"

    @pytest.mark.parametrize("path", ["/etc/passwd", "../outside", "libs/../../x", ".", ""])
    def test_rejected(self, path):
        with pytest.raises(TreeError):
            Tree.normalize_path(path)


class TestStaging:
    def test_read_falls_through_to_disk(self, tree: Tree):
        assert tree.exists("nx.json")
        assert tree.read_json("nx.json")["npmScope"] == "acme"

    def test_staged_wins(self, tree: Tree):
        tree.write("nx.json", "{}\n")
        assert tree.read_json("nx.json") == {}
        # disk untouched
        assert "acme" in (tree.root / "nx.json").read_text()

    def test_missing(self, tree: Tree):
        assert tree.read("nope.txt") is None
        assert not tree.exists("nope.txt")
        with pytest.raises(TreeError, match="not found"):
            tree.read_json("nope.txt")

    def test_invalid_json(self, tree: Tree):
        tree.write("bad.json", "{")
        with pytest.raises(TreeError, match="Invalid JSON"):
            tree.read_json("bad.json")

    def test_write_json_format(self, tree: Tree):
        tree.write_json("a.json", {"a": [1]})
        assert tree.read("a.json") == '{\n  "a": [\n    1\n  ]\n}\n'

    def test_delete(self, tree: Tree):
        tree.delete("nx.json")
        assert not tree.exists("nx.json")
        assert tree.read("nx.json") is None

    def test_rename(self, tree: Tree):
        tree.write("a.ts", "x")
        tree.rename("a.ts", "b.ts")
        assert tree.read("b.ts") == "x"
        assert not tree.exists("a.ts")

    def test_rename_missing(self, tree: Tree):
        with pytest.raises(TreeError):
            tree.rename("nope.ts", "b.ts")

    def test_staged_paths_in_order(self, tree: Tree):
        tree.write("b.txt", "1")
        tree.write("a.txt", "2")
        tree.delete("c.txt")
        assert tree.staged_paths() == ["b.txt", "a.txt"]


class TestChanges:
    def test_kinds(self, tree: Tree):
        tree.write("new.txt", "x")
        tree.write("nx.json", "{}\n")
        tree.delete("tsconfig.base.json")
        tree.delete("never-existed.txt")

        changes = [(c.path, c.kind) for c in tree.changes()]
        assert changes == [
            ("new.txt", "create"),
            ("nx.json", "update"),
            ("tsconfig.base.json", "delete"),
        ]

    def test_identical_write_is_not_a_change(self, tree: Tree):
        tree.write("nx.json", (tree.root / "nx.json").read_text())
        assert tree.changes() == []


class TestCommit:
    def test_commit_writes_and_clears(self, tree: Tree):
        tree.write("libs/foo/src/index.ts", "export {};\n")
        tree.delete("tsconfig.base.json")

        changes = tree.commit()

        assert [c.kind for c in changes] == ["create", "delete"]
        assert (tree.root / "libs/foo/src/index.ts").read_text() == "export {};\n"
        assert not (tree.root / "tsconfig.base.json").exists()
        assert tree.staged_paths() == []
        assert not list(tree.root.rglob(".libgen_*.tmp"))

    def test_failed_commit_writes_nothing(self, tree: Tree):
        tree.write("a.txt", "a")
        tree.write("nx.json", "{}\n")
        original = (tree.root / "nx.json").read_text()

        real_write = Path.write_text
        calls = {"n": 0}

        def flaky_write(self, *args, **kwargs):
            calls["n"] += 1
            if calls["n"] == 2:
                raise OSError("disk full")
            return real_write(self, *args, **kwargs)

        with patch.object(Path, "write_text", flaky_write):
            with pytest.raises(OSError, match="disk full"):
                tree.commit()

        assert not (tree.root / "a.txt").exists()
        assert (tree.root / "nx.json").read_text() == original
        assert not list(tree.root.rglob(".libgen_*.tmp"))
        # Still staged, a retry is possible
        assert tree.staged_paths() == ["a.txt", "nx.json"]
