"""Tests for acl2img.output.console module."""

from __future__ import annotations

import pytest

from acl2img.output.console import ConsoleProtocol, MockConsole, RichConsole, Style


class TestMockConsole:
    def test_print_captures_message(self) -> None:
        console = MockConsole()
        console.print("hello")
        assert console.outputs[0].message == "hello"
        assert console.outputs[0].style == Style.DEFAULT

    def test_shorthands(self) -> None:
        console = MockConsole()
        console.success("pushed")
        console.error("push failed")
        console.warning("tag left behind")

        assert console.messages == ["OK pushed", "error: push failed", "warning: tag left behind"]
        assert console.has_error()
        assert console.has_warning()

    def test_find(self) -> None:
        console = MockConsole()
        console.print("$ docker push x")
        console.print("$ docker rmi x")
        assert len(console.find("docker")) == 2
        assert len(console.find("rmi")) == 1

    def test_satisfies_protocol(self) -> None:
        console: ConsoleProtocol = MockConsole()
        console.newline()


class TestRichConsole:
    def test_errors_go_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.print("ghcr.io/bendyarm/acl2:v1")
        console.error("docker build failed (exit 1)")

        captured = capsys.readouterr()
        assert "ghcr.io/bendyarm/acl2:v1" in captured.out
        assert "docker build failed" in captured.err
        assert "docker build failed" not in captured.out

    def test_brackets_are_not_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.warning("could not remove [red]x[/red]")

        captured = capsys.readouterr()
        assert "[red]x[/red]" in captured.err
