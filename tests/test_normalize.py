"""
Tests for option normalization and the publishable import-path gate.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from libgen.core.models.options import LibraryOptions
from libgen.core.models.workspace import WorkspaceContext
from libgen.core.services.library.normalize import (
    IMPORT_PATH_REQUIRED,
    ConfigurationError,
    ensure_publishable_import_path,
    is_valid_package_name,
    normalize_options,
    parse_tags,
)


# ═══════════════════════════════════════════════════════════════════
#  normalize_options
# ═══════════════════════════════════════════════════════════════════


class TestNormalizeNames:
    def test_without_directory(self, workspace_context: WorkspaceContext):
        opts = normalize_options(LibraryOptions(name="MyLib"), workspace_context)
        assert opts.project_directory == "my-lib"
        assert opts.name == "my-lib"
        assert opts.file_name == "my-lib"
        assert opts.project_root == "libs/my-lib"

    def test_with_directory(self, workspace_context: WorkspaceContext):
        opts = normalize_options(
            LibraryOptions(name="foo", directory="shared"), workspace_context,
        )
        assert opts.project_directory == "shared/foo"
        assert opts.name == "shared-foo"
        assert opts.file_name == "shared-foo"
        assert opts.project_root == "libs/shared/foo"

    def test_nested_directory_flattens_to_one_key(self, workspace_context: WorkspaceContext):
        opts = normalize_options(
            LibraryOptions(name="Foo", directory="Shared/Data Access"), workspace_context,
        )
        assert opts.project_directory == "shared/data-access/foo"
        assert opts.name == "shared-data-access-foo"
        assert "/" not in opts.name

    def test_custom_libs_root(self, tmp_path: Path):
        ctx = WorkspaceContext(root=tmp_path, libs_root="packages", npm_scope="acme")
        opts = normalize_options(LibraryOptions(name="foo"), ctx)
        assert opts.project_root == "packages/foo"
        assert opts.libs_root == "packages"

    def test_project_root_is_normalized(self, tmp_path: Path):
        ctx = WorkspaceContext(root=tmp_path, libs_root="./libs/", npm_scope="acme")
        opts = normalize_options(LibraryOptions(name="foo"), ctx)
        assert opts.project_root == "libs/foo"

    def test_normalized_is_frozen(self, workspace_context: WorkspaceContext):
        opts = normalize_options(LibraryOptions(name="foo"), workspace_context)
        with pytest.raises(ValidationError):
            opts.name = "other"

    def test_raw_fields_carried_over(self, workspace_context: WorkspaceContext):
        raw = LibraryOptions(name="foo", buildable=True, js=True, unitTestRunner="none", rootDir="src")
        opts = normalize_options(raw, workspace_context)
        assert opts.buildable is True
        assert opts.js is True
        assert opts.unit_test_runner == "none"
        assert opts.root_dir == "src"

    def test_dotted_names_allowed(self, workspace_context: WorkspaceContext):
        opts = normalize_options(LibraryOptions(name="utils.v2"), workspace_context)
        assert opts.project_root == "libs/utils.v2"

    def test_libs_root_is_workspace_root(self, tmp_path: Path):
        ctx = WorkspaceContext(root=tmp_path, libs_root=".", npm_scope="acme")
        opts = normalize_options(LibraryOptions(name="foo"), ctx)
        assert opts.project_root == "foo"
        with pytest.raises(ConfigurationError):
            normalize_options(LibraryOptions(name="."), ctx)


class TestProjectRootContainment:
    @pytest.mark.parametrize("name, directory", [
        ("..", None),
        (".", None),
        ("..", "x"),
        ("foo", "../x"),
        ("foo", "../../elsewhere"),
        ("foo", "./shared"),
        ("foo", "shared/../.."),
    ])
    def test_dot_segments_rejected(self, workspace_context: WorkspaceContext, name, directory):
        with pytest.raises(ConfigurationError, match="'.' or '..'"):
            normalize_options(LibraryOptions(name=name, directory=directory), workspace_context)

    def test_empty_name_is_the_libs_dir(self, workspace_context: WorkspaceContext):
        with pytest.raises(ConfigurationError, match="must be created under 'libs'"):
            normalize_options(LibraryOptions(name=""), workspace_context)

    def test_slash_only_name(self, workspace_context: WorkspaceContext):
        with pytest.raises(ConfigurationError, match="not at 'libs'"):
            normalize_options(LibraryOptions(name="/"), workspace_context)


class TestImportPath:
    def test_synthesized_from_scope(self, workspace_context: WorkspaceContext):
        opts = normalize_options(
            LibraryOptions(name="foo", directory="shared"), workspace_context,
        )
        assert opts.prefix == "acme"
        assert opts.import_path == "@acme/shared/foo"

    def test_user_value_wins(self, workspace_context: WorkspaceContext):
        opts = normalize_options(
            LibraryOptions(name="foo", importPath="@other/foo"), workspace_context,
        )
        assert opts.import_path == "@other/foo"

    def test_no_scope(self, tmp_path: Path):
        ctx = WorkspaceContext(root=tmp_path)
        opts = normalize_options(LibraryOptions(name="foo"), ctx)
        assert opts.prefix == ""
        assert opts.import_path == "@/foo"


class TestTags:
    def test_no_tags(self):
        assert parse_tags(None) == []
        assert parse_tags("") == []

    def test_trimmed(self):
        assert parse_tags(" scope:shared , type:util") == ["scope:shared", "type:util"]

    def test_empty_tokens_kept(self):
        assert parse_tags("a,,b") == ["a", "", "b"]

    def test_parsed_tags_on_options(self, workspace_context: WorkspaceContext):
        opts = normalize_options(LibraryOptions(name="foo", tags="a, b"), workspace_context)
        assert opts.parsed_tags == ["a", "b"]


# ═══════════════════════════════════════════════════════════════════
#  ensure_publishable_import_path
# ═══════════════════════════════════════════════════════════════════


class TestPublishableGate:
    def test_publishable_without_import_path_fails(self, workspace_context: WorkspaceContext):
        raw = LibraryOptions(name="foo", publishable=True)
        opts = normalize_options(raw, workspace_context)
        # A synthesized path is not enough
        assert opts.import_path == "@acme/foo"
        with pytest.raises(ConfigurationError) as exc:
            ensure_publishable_import_path(opts, raw)
        assert str(exc.value) == IMPORT_PATH_REQUIRED
        assert "--importPath" in str(exc.value)
        assert "my-awesome-lib" in str(exc.value)
        assert "@myorg/my-lib" in str(exc.value)

    def test_publishable_with_import_path_passes(self, workspace_context: WorkspaceContext):
        raw = LibraryOptions(name="foo", publishable=True, importPath="@acme/foo")
        ensure_publishable_import_path(normalize_options(raw, workspace_context), raw)

    def test_publishable_with_invalid_import_path_fails(self, workspace_context: WorkspaceContext):
        raw = LibraryOptions(name="foo", publishable=True, importPath="@Acme/Foo Bar")
        with pytest.raises(ConfigurationError, match="not a valid npm package name"):
            ensure_publishable_import_path(normalize_options(raw, workspace_context), raw)

    def test_not_publishable_never_fails(self, workspace_context: WorkspaceContext):
        raw = LibraryOptions(name="foo", buildable=True)
        ensure_publishable_import_path(normalize_options(raw, workspace_context), raw)


class TestPackageName:
    def test_valid(self):
        for name in ("my-awesome-lib", "@myorg/my-lib", "lib.js", "a~b"):
            assert is_valid_package_name(name), name

    def test_invalid(self):
        for name in ("", "MyLib", "@myorg/", ".hidden", "_private", "has space", "@a/b/c"):
            assert not is_valid_package_name(name), name

    def test_too_long(self):
        assert not is_valid_package_name("a" * 215)
