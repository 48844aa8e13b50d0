import sys
import types

import pytest

from trivia_quiz import cli
from trivia_quiz.quiz import _main as quiz_main
from trivia_quiz.quiz.config import default_config_text


@pytest.fixture(autouse=True)
def reset_metadata(monkeypatch):
    """Ensure metadata.version is controllable during tests."""

    def fake_version(name: str) -> str:
        assert name == "trivia-quiz"
        return "0.0-test"

    monkeypatch.setattr(cli.metadata, "version", fake_version)
    yield


def test_version_command_handles_missing_package(monkeypatch, capsys):
    monkeypatch.setattr(
        cli.metadata,
        "version",
        lambda name: (_ for _ in ()).throw(cli.metadata.PackageNotFoundError()),
    )
    code = cli.main(["version"])
    captured = capsys.readouterr()
    assert code == 0
    assert captured.out.strip() == "unknown"


def test_no_args_prints_usage_and_returns_error(capsys):
    code = cli.main([])
    captured = capsys.readouterr()
    assert code == 2
    assert "Usage: trivia" in captured.out
    assert "Available commands:" in captured.out


def test_help_flag_shows_usage(capsys):
    code = cli.main(["--help"])
    captured = capsys.readouterr()
    assert code == 0
    assert "Usage: trivia" in captured.out


def test_help_command_without_target(capsys):
    code = cli.main(["help"])
    captured = capsys.readouterr()
    assert code == 0
    assert "Usage: trivia" in captured.out


def test_list_outputs_command_table(capsys):
    code = cli.main(["list"])
    captured = capsys.readouterr()
    assert code == 0
    assert "Available commands:" in captured.out
    for name in ("init", "play", "questions", "config"):
        assert name in captured.out
    assert "(TUI)" in captured.out


def test_help_known_command(capsys):
    code = cli.main(["help", "play"])
    captured = capsys.readouterr()
    assert code == 0
    assert "Run `trivia play --help`" in captured.out


def test_help_unknown_command(capsys):
    code = cli.main(["help", "does-not-exist"])
    captured = capsys.readouterr()
    assert code == 2
    assert "Unknown command" in captured.err
    assert "Available commands:" in captured.err


def test_version_command(capsys):
    code = cli.main(["version"])
    captured = capsys.readouterr()
    assert code == 0
    assert captured.out.strip() == "0.0-test"


def test_version_flag(capsys):
    code = cli.main(["--version"])
    captured = capsys.readouterr()
    assert code == 0
    assert captured.out.strip() == "0.0-test"


def test_unknown_command_errors(capsys):
    code = cli.main(["bogus"])
    captured = capsys.readouterr()
    assert code == 2
    assert "Unknown command" in captured.err
    assert "Available commands:" in captured.err


def test_dispatch_prepends_quiz_subcommand(monkeypatch):
    before = list(sys.argv)
    captured: dict[str, list[str]] = {}

    def fake_import(module_name: str):
        assert module_name == "trivia_quiz.quiz._main"

        def stub_main(argv):
            captured["argv"] = list(argv)
            captured["sys_argv"] = list(sys.argv)
            return 7

        return types.SimpleNamespace(main=stub_main)

    monkeypatch.setattr(cli, "import_module", fake_import)
    code = cli.main(["play", "--tui", "--seed", "3"])
    assert code == 7
    assert captured["argv"] == ["play", "--tui", "--seed", "3"]
    assert captured["sys_argv"][0] == "trivia"
    assert list(sys.argv) == before


def test_dispatch_supports_main_without_parameters(monkeypatch):
    called = {"count": 0}

    def fake_import(module_name: str):
        assert module_name == "trivia_quiz.workspace.cli"

        def stub_main():
            called["count"] += 1
            assert sys.argv[0] == "trivia init"

        return types.SimpleNamespace(main=stub_main)

    monkeypatch.setattr(cli, "import_module", fake_import)
    code = cli.main(["init"])
    assert code == 0
    assert called["count"] == 1


def test_dispatch_propagates_system_exit_code(monkeypatch):
    def fake_import(module_name: str):
        def stub_main(argv):
            raise SystemExit(5)

        return types.SimpleNamespace(main=stub_main)

    monkeypatch.setattr(cli, "import_module", fake_import)
    code = cli.main(["questions"])
    assert code == 5


def test_dispatch_handles_system_exit_message(monkeypatch, capsys):
    def fake_import(module_name: str):
        def stub_main(argv):
            raise SystemExit("boom")

        return types.SimpleNamespace(main=stub_main)

    monkeypatch.setattr(cli, "import_module", fake_import)
    code = cli.main(["questions"])
    captured = capsys.readouterr()
    assert code == 1
    assert captured.err.strip() == "boom"


def test_dispatch_treats_system_exit_none_as_success(monkeypatch):
    def fake_import(module_name: str):
        def stub_main(argv):
            raise SystemExit()

        return types.SimpleNamespace(main=stub_main)

    monkeypatch.setattr(cli, "import_module", fake_import)
    assert cli.main(["config", "init"]) == 0


def test_dispatch_normalizes_non_int_return(monkeypatch):
    def fake_import(module_name: str):
        def stub_main(argv):
            return "done"

        return types.SimpleNamespace(main=stub_main)

    monkeypatch.setattr(cli, "import_module", fake_import)
    assert cli.main(["play"]) == 0


def test_trivia_cli_runs_init_end_to_end(tmp_path, capsys):
    target = tmp_path / "workspace"

    code = cli.main(["init", "--path", str(target)])

    captured = capsys.readouterr()
    assert code == 0
    assert "Workspace ready" in captured.out
    for entry in ("config", "logs"):
        assert (target / entry).is_dir()


def test_trivia_cli_runs_config_init(tmp_path, capsys):
    destination = tmp_path / "trivia.toml"

    code = cli.main(["config", "init", "--path", str(destination)])

    captured = capsys.readouterr()
    assert code == 0
    assert destination.read_text(encoding="utf-8") == default_config_text()
    assert str(destination) in captured.out


def test_trivia_cli_questions_end_to_end(capsys):
    code = cli.main(["questions", "--seed", "1"])

    captured = capsys.readouterr()
    assert code == 0
    assert "Question bank" in captured.out


def test_trivia_cli_play_help_uses_program_name(capsys):
    code = cli.main(["play", "--help"])

    captured = capsys.readouterr()
    assert code == 0
    assert "trivia play" in captured.out
    assert "--duration" in captured.out


def test_quiz_parser_lists_subcommands():
    parser = quiz_main.build_arg_parser()
    args = parser.parse_args(["config", "init", "--force"])
    assert args.command == "config"
    assert args.action == "init"
    assert args.force is True
