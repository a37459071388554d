"""
tests/test_generator.py
Integration tests for modgen.generator.

Tests cover:
- Flat and nested module generation on a real temp directory
- Byte sizes reported vs. bytes on disk
- Completion of partial modules and untouched complete modules
- Update-only mode reporting missing modules
- YAML configuration loading and errors
- Write failures keeping earlier files
"""

from __future__ import annotations

import os
import pathlib
import stat
from typing import Callable

import pytest

from modgen import generator as generator_module
from modgen.errors import ConfigError, InvalidResourceNameError
from modgen.generator import (
    ResourceScaffolder,
    build_config,
    load_config_file,
    resolve_target,
    split_nested_path,
)
from modgen.models import FileRole, ModuleState, ResolutionMode, ScaffoldConfig

ScaffolderFactory = Callable[..., ResourceScaffolder]


# ===========================================================================
# Path resolution
# ===========================================================================


class TestResolveTarget:
    def test_split_nested_path(self) -> None:
        assert split_nested_path("a/b/widget") == (["a", "b"], "widget")
        assert split_nested_path("widget") == ([], "widget")

    def test_flat(self, config: ScaffoldConfig, modules_root: pathlib.Path) -> None:
        target = resolve_target(config, "blog-post")
        assert target.directory == modules_root / "blog-post"
        assert target.import_depth == 2
        assert target.resource.identifier == "blogPost"

    def test_nested(self, config: ScaffoldConfig, modules_root: pathlib.Path) -> None:
        target = resolve_target(config, "a/b/widget", nested=True)
        assert target.directory == modules_root / "a" / "b" / "widget"
        assert target.nested_folders == ["a", "b"]
        assert target.import_depth == 4

    def test_flat_rejects_slash(self, config: ScaffoldConfig) -> None:
        with pytest.raises(InvalidResourceNameError):
            resolve_target(config, "a/b")

    def test_nested_rejects_traversal(self, config: ScaffoldConfig) -> None:
        with pytest.raises(InvalidResourceNameError):
            resolve_target(config, "../escape", nested=True)


# ===========================================================================
# Generation
# ===========================================================================


class TestScaffoldFlat:
    """``resource <name>`` end to end."""

    def test_creates_four_files(
        self, make_scaffolder: ScaffolderFactory, modules_root: pathlib.Path
    ) -> None:
        report = make_scaffolder().scaffold("blog")

        directory = modules_root / "blog"
        assert sorted(p.name for p in directory.iterdir()) == [
            "blog.controller.ts",
            "blog.route.ts",
            "blog.service.ts",
            "blog.validation.ts",
        ]
        assert report.state is ModuleState.EMPTY
        assert report.created_directory
        assert report.written_roles == list(FileRole)
        assert report.directory == "src/modules/blog"

    def test_reported_sizes_match_disk(
        self, make_scaffolder: ScaffolderFactory, project_root: pathlib.Path
    ) -> None:
        report = make_scaffolder().scaffold("blog-post")
        for record in report.files:
            on_disk = project_root / record.relative_path
            assert on_disk.stat().st_size == record.size_bytes
        assert report.total_bytes == sum(r.size_bytes for r in report.files)

    def test_files_are_trimmed(
        self, make_scaffolder: ScaffolderFactory, modules_root: pathlib.Path
    ) -> None:
        make_scaffolder().scaffold("blog")
        for path in (modules_root / "blog").iterdir():
            content = path.read_text(encoding="utf-8")
            assert content == content.strip()

    def test_create_lines_printed(
        self, make_scaffolder: ScaffolderFactory, capsys: pytest.CaptureFixture[str]
    ) -> None:
        report = make_scaffolder().scaffold("blog")
        out = capsys.readouterr().out
        for record in report.files:
            assert f"CREATE {record.relative_path} ({record.size_bytes} bytes)" in out

    def test_hyphenated_name(
        self, make_scaffolder: ScaffolderFactory, modules_root: pathlib.Path
    ) -> None:
        make_scaffolder().scaffold("blog-post")
        service = (modules_root / "blog-post" / "blog-post.service.ts").read_text(encoding="utf-8")
        assert "export const blogPostServices = {" in service

    def test_non_ascii_name_kept_whole(
        self, make_scaffolder: ScaffolderFactory, modules_root: pathlib.Path
    ) -> None:
        make_scaffolder().scaffold("café")
        service = (modules_root / "café" / "café.service.ts").read_text(encoding="utf-8")
        assert "export const caféServices = {" in service
        assert "prismaClient.café.create" in service

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
    def test_generated_files_readable_by_others(
        self, make_scaffolder: ScaffolderFactory, modules_root: pathlib.Path
    ) -> None:
        old_mask = os.umask(0o022)
        try:
            make_scaffolder().scaffold("blog")
        finally:
            os.umask(old_mask)
        for path in (modules_root / "blog").iterdir():
            assert stat.S_IMODE(path.stat().st_mode) == 0o644

    def test_complete_module_untouched(
        self,
        make_scaffolder: ScaffolderFactory,
        modules_root: pathlib.Path,
        populate_module: Callable[..., pathlib.Path],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        directory = populate_module(modules_root / "blog", "blog")
        before = {p.name: p.read_text(encoding="utf-8") for p in directory.iterdir()}

        report = make_scaffolder().scaffold("blog")

        assert report.state is ModuleState.COMPLETE
        assert report.files == []
        after = {p.name: p.read_text(encoding="utf-8") for p in directory.iterdir()}
        assert after == before
        assert "Blog module already exists." in capsys.readouterr().out

    def test_partial_create_all_fills_gap_only(
        self,
        make_scaffolder: ScaffolderFactory,
        modules_root: pathlib.Path,
        populate_module: Callable[..., pathlib.Path],
    ) -> None:
        directory = populate_module(
            modules_root / "blog",
            "blog",
            [FileRole.CONTROLLER, FileRole.SERVICE, FileRole.VALIDATION],
        )
        report = make_scaffolder(answers=["create"]).scaffold("blog")

        assert report.state is ModuleState.PARTIAL
        assert report.mode is ResolutionMode.CREATE_ALL
        assert report.written_roles == [FileRole.ROUTE]
        assert (directory / "blog.service.ts").read_text(encoding="utf-8") == "// existing service\n"
        assert "router.post(" in (directory / "blog.route.ts").read_text(encoding="utf-8")

    def test_partial_invalid_answer_writes_nothing(
        self,
        make_scaffolder: ScaffolderFactory,
        modules_root: pathlib.Path,
        populate_module: Callable[..., pathlib.Path],
    ) -> None:
        directory = populate_module(modules_root / "blog", "blog", [FileRole.ROUTE])
        report = make_scaffolder(answers=["whatever"]).scaffold("blog")

        assert report.aborted
        assert report.files == []
        assert sorted(p.name for p in directory.iterdir()) == ["blog.route.ts"]

    def test_partial_assume_create_all(
        self,
        make_scaffolder: ScaffolderFactory,
        modules_root: pathlib.Path,
        populate_module: Callable[..., pathlib.Path],
    ) -> None:
        populate_module(modules_root / "blog", "blog", [FileRole.ROUTE])
        report = make_scaffolder(assume_create_all=True).scaffold("blog")
        assert len(report.files) == 3

    def test_invalid_name_touches_nothing(
        self, make_scaffolder: ScaffolderFactory, modules_root: pathlib.Path
    ) -> None:
        with pytest.raises(InvalidResourceNameError):
            make_scaffolder().scaffold("123")
        assert list(modules_root.iterdir()) == []

    def test_modules_root_created_when_missing(self, tmp_path: pathlib.Path) -> None:
        config = ScaffoldConfig(project_root=tmp_path, modules_dir="app/mods", color=False)
        report = ResourceScaffolder(config, ask=lambda _q: "").scaffold("blog")
        assert (tmp_path / "app" / "mods" / "blog" / "blog.route.ts").is_file()
        assert report.directory == "app/mods/blog"


class TestScaffoldNested:
    """``nested-resource <path>`` end to end."""

    def test_nested_layout(
        self, make_scaffolder: ScaffolderFactory, modules_root: pathlib.Path
    ) -> None:
        report = make_scaffolder().scaffold("admin/reports/daily-sales", nested=True)
        directory = modules_root / "admin" / "reports" / "daily-sales"
        assert directory.is_dir()
        assert report.written_roles == list(FileRole)
        assert report.directory == "src/modules/admin/reports/daily-sales"

    def test_nested_import_prefix(
        self, make_scaffolder: ScaffolderFactory, modules_root: pathlib.Path
    ) -> None:
        make_scaffolder().scaffold("a/b/widget", nested=True)
        controller = (modules_root / "a" / "b" / "widget" / "widget.controller.ts").read_text(
            encoding="utf-8"
        )
        assert "from '../../../../helpers/responses/custom-response';" in controller

    def test_nested_partial_reconciled(
        self,
        make_scaffolder: ScaffolderFactory,
        modules_root: pathlib.Path,
        populate_module: Callable[..., pathlib.Path],
    ) -> None:
        populate_module(modules_root / "shop" / "order", "order", [FileRole.CONTROLLER])
        report = make_scaffolder(answers=["c"]).scaffold("shop/order", nested=True)
        assert report.state is ModuleState.PARTIAL
        assert report.written_roles == [FileRole.ROUTE, FileRole.SERVICE, FileRole.VALIDATION]


class TestUpdateOnly:
    def test_missing_module_reported(
        self,
        make_scaffolder: ScaffolderFactory,
        modules_root: pathlib.Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        report = make_scaffolder(update_only=True).scaffold("blog")
        assert report.state is ModuleState.NOT_FOUND
        assert not report.created_directory
        assert not (modules_root / "blog").exists()
        assert "Module blog not found." in capsys.readouterr().out

    def test_existing_module_completed(
        self,
        make_scaffolder: ScaffolderFactory,
        modules_root: pathlib.Path,
        populate_module: Callable[..., pathlib.Path],
    ) -> None:
        populate_module(modules_root / "blog", "blog", [FileRole.SERVICE])
        report = make_scaffolder(answers=["create"], update_only=True).scaffold("blog")
        assert len(report.files) == 3


class TestWriteFailure:
    def test_earlier_files_kept(
        self,
        make_scaffolder: ScaffolderFactory,
        modules_root: pathlib.Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        real_write = generator_module.write_file
        calls = []

        def failing_write(path: pathlib.Path, content: str, atomic: bool = True) -> int:
            calls.append(path.name)
            if len(calls) == 2:
                raise PermissionError(f"read-only: {path}")
            return real_write(path, content, atomic=atomic)

        monkeypatch.setattr(generator_module, "write_file", failing_write)

        with pytest.raises(PermissionError):
            make_scaffolder().scaffold("blog")

        assert sorted(p.name for p in (modules_root / "blog").iterdir()) == ["blog.controller.ts"]


# ===========================================================================
# Configuration
# ===========================================================================


class TestConfiguration:
    """Defaults, YAML file and overrides layered into ScaffoldConfig."""

    def test_defaults(self, project_root: pathlib.Path) -> None:
        config = build_config(project_root)
        assert config.project_root == project_root.resolve()
        assert config.modules_dir == "src/modules"

    def test_auto_loads_dotfile(self, project_root: pathlib.Path) -> None:
        (project_root / ".modgen.yaml").write_text(
            "modules_dir: app/modules\ncolor: false\n", encoding="utf-8"
        )
        config = build_config(project_root)
        assert config.modules_dir == "app/modules"
        assert config.color is False

    def test_overrides_win(self, project_root: pathlib.Path) -> None:
        (project_root / ".modgen.yaml").write_text("update_only: true\n", encoding="utf-8")
        config = build_config(project_root, overrides={"update_only": False})
        assert config.update_only is False

    def test_explicit_path(self, project_root: pathlib.Path, tmp_path: pathlib.Path) -> None:
        cfg_file = tmp_path / "custom.yaml"
        cfg_file.write_text("assume_create_all: true\n", encoding="utf-8")
        assert build_config(project_root, config_path=cfg_file).assume_create_all is True

    def test_empty_file(self, tmp_path: pathlib.Path) -> None:
        cfg_file = tmp_path / "empty.yaml"
        cfg_file.write_text("", encoding="utf-8")
        assert load_config_file(cfg_file) == {}

    def test_missing_file(self, tmp_path: pathlib.Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            build_config(tmp_path, config_path=tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path: pathlib.Path) -> None:
        cfg_file = tmp_path / "bad.yaml"
        cfg_file.write_text("modules_dir: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config_file(cfg_file)

    def test_not_a_mapping(self, tmp_path: pathlib.Path) -> None:
        cfg_file = tmp_path / "list.yaml"
        cfg_file.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="mapping"):
            load_config_file(cfg_file)

    def test_unknown_key(self, tmp_path: pathlib.Path) -> None:
        (tmp_path / ".modgen.yaml").write_text("colour: false\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="validation failed"):
            build_config(tmp_path)

    def test_project_root_not_allowed_in_file(self, tmp_path: pathlib.Path) -> None:
        (tmp_path / ".modgen.yaml").write_text("project_root: /tmp\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="project_root"):
            build_config(tmp_path)
