"""Tests for the Less and Sass preprocessor adapters."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from ant_tokens.config import ThemeConfig
from ant_tokens.core.errors import CompilerError
from ant_tokens.core.preprocessor import (
    LessCompiler,
    SassCompiler,
    create_compiler,
    get_lessc_binary,
)


@pytest.fixture
def less_sources(tmp_path: Path) -> Path:
    (tmp_path / "ant-design-blazor.variable.less").write_text("@import 'style';\n")
    return tmp_path


@pytest.fixture
def sass_sources(tmp_path: Path) -> Path:
    (tmp_path / "ant-design-blazor.variable.scss").write_text("a { color: $blue-6; }\n")
    return tmp_path


class TestGetLesscBinary:
    def test_returns_system_binary_if_on_path(self) -> None:
        with patch("ant_tokens.core.preprocessor.shutil.which", return_value="/usr/bin/lessc"):
            assert get_lessc_binary() == Path("/usr/bin/lessc")

    def test_returns_none_when_missing(self) -> None:
        with patch("ant_tokens.core.preprocessor.shutil.which", return_value=None):
            assert get_lessc_binary() is None

    def test_configured_file(self, tmp_path: Path) -> None:
        binary = tmp_path / "lessc"
        binary.write_bytes(b"#!/bin/sh\n")
        assert get_lessc_binary(str(binary)) == binary

    def test_configured_command_name(self) -> None:
        with patch(
            "ant_tokens.core.preprocessor.shutil.which", return_value="/opt/node/bin/lessc"
        ) as which:
            assert get_lessc_binary("lessc4") == Path("/opt/node/bin/lessc")
            which.assert_called_once_with("lessc4")


class TestLessCompiler:
    def test_build_command(self, less_sources: Path) -> None:
        compiler = LessCompiler(less_sources)
        entry = less_sources / "ant-design-blazor.variable.less"
        cmd = compiler.build_command(
            Path("/usr/bin/lessc"), entry, {"blue-6": "#1677ff", "font-size-base": "16px"}
        )

        assert cmd[0] == str(Path("/usr/bin/lessc"))
        assert cmd[1:3] == ["--js", "--math=always"]
        assert cmd[3].startswith("--include-path=")
        assert (less_sources / "style").as_posix() in cmd[3]
        assert "--modify-var=blue-6=#1677ff" in cmd
        assert "--modify-var=font-size-base=16px" in cmd
        assert cmd[-1] == entry.as_posix()

    def test_compile_returns_stdout(self, less_sources: Path) -> None:
        completed = MagicMock(returncode=0, stdout=".ant-btn{}", stderr="")
        with (
            patch("ant_tokens.core.preprocessor.shutil.which", return_value="/usr/bin/lessc"),
            patch(
                "ant_tokens.core.preprocessor.subprocess.run", return_value=completed
            ) as run,
        ):
            css = LessCompiler(less_sources).compile({"blue-6": "#1677ff"})

        assert css == ".ant-btn{}"
        args, kwargs = run.call_args
        assert "--modify-var=blue-6=#1677ff" in args[0]
        assert kwargs["cwd"] == str(less_sources)
        assert kwargs["capture_output"] is True

    def test_missing_sources(self, tmp_path: Path) -> None:
        with pytest.raises(CompilerError, match="dotnet restore"):
            LessCompiler(tmp_path).compile({})

    def test_missing_lessc(self, less_sources: Path) -> None:
        with patch("ant_tokens.core.preprocessor.shutil.which", return_value=None):
            with pytest.raises(CompilerError, match="lessc not found"):
                LessCompiler(less_sources).compile({})

    def test_non_zero_exit(self, less_sources: Path) -> None:
        completed = MagicMock(returncode=1, stdout="", stderr="NameError: variable @x\n")
        with (
            patch("ant_tokens.core.preprocessor.shutil.which", return_value="/usr/bin/lessc"),
            patch("ant_tokens.core.preprocessor.subprocess.run", return_value=completed),
        ):
            with pytest.raises(CompilerError, match="NameError: variable @x"):
                LessCompiler(less_sources).compile({})

    def test_timeout(self, less_sources: Path) -> None:
        with (
            patch("ant_tokens.core.preprocessor.shutil.which", return_value="/usr/bin/lessc"),
            patch(
                "ant_tokens.core.preprocessor.subprocess.run",
                side_effect=subprocess.TimeoutExpired(cmd="lessc", timeout=5),
            ),
        ):
            with pytest.raises(CompilerError, match="timed out after 5s"):
                LessCompiler(less_sources, timeout=5).compile({})


class TestSassCompiler:
    def test_build_source(self, sass_sources: Path) -> None:
        source = SassCompiler(sass_sources).build_source({"blue-6": "#1677ff"})
        assert source == '$blue-6: #1677ff;\n@import "ant-design-blazor.variable";\n'

    def test_compile_uses_libsass(self, sass_sources: Path) -> None:
        fake_sass = MagicMock()
        fake_sass.compile.return_value = "a{color:#1677ff}"
        with patch.dict(sys.modules, {"sass": fake_sass}):
            css = SassCompiler(sass_sources).compile({"blue-6": "#1677ff"})

        assert css == "a{color:#1677ff}"
        kwargs = fake_sass.compile.call_args.kwargs
        assert kwargs["include_paths"] == [str(sass_sources), str(sass_sources / "style")]
        assert kwargs["output_style"] == "expanded"
        assert kwargs["string"].startswith("$blue-6: #1677ff;")

    def test_compile_error(self, sass_sources: Path) -> None:
        class FakeCompileError(Exception):
            pass

        fake_sass = MagicMock()
        fake_sass.CompileError = FakeCompileError
        fake_sass.compile.side_effect = FakeCompileError("Undefined variable")
        with patch.dict(sys.modules, {"sass": fake_sass}):
            with pytest.raises(CompilerError, match="Undefined variable"):
                SassCompiler(sass_sources).compile({})

    def test_missing_sources(self, tmp_path: Path) -> None:
        with pytest.raises(CompilerError, match="not found"):
            SassCompiler(tmp_path).compile({})


class TestCreateCompiler:
    def test_less_by_default(self, tmp_path: Path) -> None:
        compiler = create_compiler(ThemeConfig(source_dir=tmp_path, lessc="/opt/lessc"))
        assert isinstance(compiler, LessCompiler)
        assert compiler.lessc == "/opt/lessc"
        assert compiler.entry_file == "ant-design-blazor.variable.less"

    def test_sass(self, tmp_path: Path) -> None:
        compiler = create_compiler(ThemeConfig(compiler="sass", source_dir=tmp_path))
        assert isinstance(compiler, SassCompiler)
        assert compiler.source_dir == tmp_path
