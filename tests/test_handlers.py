from pathlib import Path
from typing import Any

import pytest
from mcp.types import CallToolResult

from codex_bridge.codex import SubprocessResult
from codex_bridge.exceptions import BufferOverflowError, SubprocessSpawnError, SubprocessTimeoutError
from codex_bridge.tools import ToolDispatcher


def text_of(result: CallToolResult) -> str:
    assert len(result.content) == 1
    assert result.content[0].type == "text"
    return result.content[0].text


# codex_execute


@pytest.mark.asyncio
async def test_execute_requires_authentication(dispatcher: ToolDispatcher, mock_runner: Any, fake_home: Path) -> None:
    """No subprocess is started for an unauthenticated request."""
    result = await dispatcher.dispatch("codex_execute", {"prompt": "hello"})

    assert result.isError is True
    assert "codex_login" in text_of(result)
    mock_runner.run.assert_not_called()


@pytest.mark.asyncio
async def test_execute_runs_command_in_working_directory(
    dispatcher: ToolDispatcher, mock_runner: Any, auth_file: Path, tmp_path: Path
) -> None:
    mock_runner.run.return_value = SubprocessResult(stdout="done\n", stderr="", returncode=0)

    result = await dispatcher.dispatch(
        "codex_execute",
        {"prompt": "add tests", "mode": "non-interactive", "working_directory": str(tmp_path), "sandbox": "read-only"},
    )

    assert result.isError is False
    assert text_of(result) == "📤 Output:\ndone"
    call = mock_runner.run.call_args
    assert call.args[0] == [
        "codex",
        "exec",
        "--ask-for-approval",
        "never",
        "--model",
        "gpt-4",
        "--sandbox",
        "read-only",
        "add tests",
    ]
    assert call.kwargs["working_directory"] == str(tmp_path)


@pytest.mark.asyncio
async def test_execute_reports_stdout_and_stderr(dispatcher: ToolDispatcher, mock_runner: Any, auth_file: Path) -> None:
    mock_runner.run.return_value = SubprocessResult(stdout="patched", stderr="deprecated flag", returncode=0)

    result = await dispatcher.dispatch("codex_execute", {"prompt": "hello"})

    assert result.isError is False
    assert text_of(result) == "📤 Output:\npatched\n\n⚠️ Warnings/errors:\ndeprecated flag"


@pytest.mark.asyncio
async def test_execute_empty_output_reports_completion(
    dispatcher: ToolDispatcher, mock_runner: Any, auth_file: Path
) -> None:
    mock_runner.run.return_value = SubprocessResult(stdout="", stderr="", returncode=0)

    result = await dispatcher.dispatch("codex_execute", {"prompt": "hello"})

    assert result.isError is False
    assert text_of(result) == "✅ Codex task completed."


@pytest.mark.asyncio
async def test_execute_non_zero_exit_is_an_error(dispatcher: ToolDispatcher, mock_runner: Any, auth_file: Path) -> None:
    mock_runner.run.return_value = SubprocessResult(stdout="partial", stderr="model not found", returncode=1)

    result = await dispatcher.dispatch("codex_execute", {"prompt": "hello"})
    text = text_of(result)

    assert result.isError is True
    assert "Output: partial" in text
    assert "Errors: model not found" in text
    assert "status 1" in text


@pytest.mark.asyncio
async def test_execute_timeout_includes_partial_output(
    dispatcher: ToolDispatcher, mock_runner: Any, auth_file: Path
) -> None:
    mock_runner.run.side_effect = SubprocessTimeoutError(
        "Command timed out after 300 seconds.", stdout="halfway", stderr="still thinking"
    )

    result = await dispatcher.dispatch("codex_execute", {"prompt": "hello"})
    text = text_of(result)

    assert result.isError is True
    assert "Output: halfway" in text
    assert "Errors: still thinking" in text
    assert "Details: Command timed out after 300 seconds." in text


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [BufferOverflowError("Output exceeded"), SubprocessSpawnError("Failed to start")])
async def test_execute_runner_failures_are_error_envelopes(
    dispatcher: ToolDispatcher, mock_runner: Any, auth_file: Path, error: Exception
) -> None:
    mock_runner.run.side_effect = error

    result = await dispatcher.dispatch("codex_execute", {"prompt": "hello"})

    assert result.isError is True
    assert str(error) in text_of(result)


@pytest.mark.asyncio
async def test_execute_rejects_missing_prompt(dispatcher: ToolDispatcher, mock_runner: Any, auth_file: Path) -> None:
    result = await dispatcher.dispatch("codex_execute", {})

    assert result.isError is True
    assert "prompt" in text_of(result)
    mock_runner.run.assert_not_called()


@pytest.mark.asyncio
async def test_execute_rejects_unknown_mode(dispatcher: ToolDispatcher, mock_runner: Any, auth_file: Path) -> None:
    result = await dispatcher.dispatch("codex_execute", {"prompt": "hello", "mode": "turbo"})

    assert result.isError is True
    assert "mode" in text_of(result)
    mock_runner.run.assert_not_called()


# codex_status


@pytest.mark.asyncio
@pytest.mark.parametrize("installed", [True, False])
@pytest.mark.parametrize("authenticated", [True, False])
async def test_status_is_never_an_error(
    dispatcher: ToolDispatcher, mock_runner: Any, fake_home: Path, installed: bool, authenticated: bool
) -> None:
    if authenticated:
        (fake_home / ".codex").mkdir()
        (fake_home / ".codex" / "auth.json").write_text("{}", encoding="utf-8")
    if not installed:
        mock_runner.run.side_effect = SubprocessSpawnError("Failed to start 'codex'")

    first = await dispatcher.dispatch("codex_status", {})
    second = await dispatcher.dispatch("codex_status")

    assert first.isError is False
    assert text_of(first) == text_of(second)
    text = text_of(first)
    assert ("Codex CLI installed: codex-cli 0.1.0" in text) is installed
    assert ("npm install -g @openai/codex" in text) is not installed
    assert ("Authenticated with a ChatGPT account" in text) is authenticated
    assert ("Auth file date:" in text) is authenticated
    assert ("codex_login" in text) is not authenticated


@pytest.mark.asyncio
async def test_status_omits_unreadable_auth_date(
    dispatcher: ToolDispatcher, codex_tools: Any, auth_file: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def unreadable() -> Any:
        raise PermissionError("denied")

    monkeypatch.setattr(codex_tools.probe, "auth_modified_time", unreadable)

    result = await dispatcher.dispatch("codex_status", {})

    assert result.isError is False
    assert "Authenticated with a ChatGPT account" in text_of(result)
    assert "Auth file date:" not in text_of(result)


# codex_login


@pytest.mark.asyncio
async def test_login_instructions_depend_on_headless(dispatcher: ToolDispatcher) -> None:
    headless = await dispatcher.dispatch("codex_login", {"headless": True})
    local = await dispatcher.dispatch("codex_login", {"headless": False})
    default = await dispatcher.dispatch("codex_login", {})

    assert headless.isError is False
    assert local.isError is False
    assert text_of(headless) != text_of(local)
    assert text_of(local) == text_of(default)
    assert "ssh -L 1455:localhost:1455" in text_of(headless)
    assert "ssh -L" not in text_of(local)
    assert text_of(headless) == text_of(await dispatcher.dispatch("codex_login", {"headless": True}))


@pytest.mark.asyncio
async def test_login_requires_installation(dispatcher: ToolDispatcher, mock_runner: Any) -> None:
    mock_runner.run.return_value = SubprocessResult(stdout="", stderr="command not found", returncode=127)

    result = await dispatcher.dispatch("codex_login", {"headless": True})

    assert result.isError is True
    assert "npm install -g @openai/codex" in text_of(result)
    assert "brew install codex" in text_of(result)


# codex_project_init


@pytest.mark.asyncio
async def test_project_init_missing_directory(dispatcher: ToolDispatcher, tmp_path: Path) -> None:
    missing = tmp_path / "nope"

    result = await dispatcher.dispatch("codex_project_init", {"working_directory": str(missing)})

    assert result.isError is True
    assert str(missing) in text_of(result)


@pytest.mark.asyncio
async def test_project_init_regular_file(dispatcher: ToolDispatcher, tmp_path: Path) -> None:
    notes = tmp_path / "notes.txt"
    notes.write_text("not a project\n", encoding="utf-8")

    result = await dispatcher.dispatch("codex_project_init", {"working_directory": str(notes)})

    assert result.isError is True
    assert text_of(result) == f"❌ Not a directory: {notes}"


@pytest.mark.asyncio
async def test_project_init_plain_directory(dispatcher: ToolDispatcher, tmp_path: Path) -> None:
    result = await dispatcher.dispatch("codex_project_init", {"working_directory": str(tmp_path)})
    text = text_of(result)

    assert result.isError is False
    assert "read-only sandbox recommended" in text
    assert "Create an AGENTS.md file" in text
    assert list(tmp_path.iterdir()) == []


@pytest.mark.asyncio
async def test_project_init_git_repo_with_agents_file(dispatcher: ToolDispatcher, tmp_path: Path) -> None:
    (tmp_path / ".git").mkdir()
    (tmp_path / "AGENTS.md").write_text("# Guidelines\n", encoding="utf-8")

    result = await dispatcher.dispatch("codex_project_init", {"working_directory": str(tmp_path)})
    text = text_of(result)

    assert result.isError is False
    assert "workspace-write sandbox recommended" in text
    assert "AGENTS.md already exists" in text
    assert "Example content" not in text


@pytest.mark.asyncio
async def test_project_init_defaults_to_cwd(
    dispatcher: ToolDispatcher, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)

    result = await dispatcher.dispatch("codex_project_init", {})

    assert result.isError is False
    assert str(tmp_path) in text_of(result)
