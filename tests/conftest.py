from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from codex_bridge.codex import CodexTools, EnvironmentProbe, SubprocessResult, SubprocessRunner
from codex_bridge.tools import MCPToolRegistry, ToolDispatcher


@pytest.fixture
def fake_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A temporary home directory with no Codex credentials."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("USERPROFILE", raising=False)
    return home


@pytest.fixture
def auth_file(fake_home: Path) -> Path:
    """Signs the fake home in by creating ~/.codex/auth.json."""
    path = fake_home / ".codex" / "auth.json"
    path.parent.mkdir()
    path.write_text("{}", encoding="utf-8")
    return path


@pytest.fixture
def mock_runner() -> Any:
    runner = MagicMock(spec=SubprocessRunner)
    runner.run = AsyncMock(return_value=SubprocessResult(stdout="codex-cli 0.1.0\n", stderr="", returncode=0))
    return runner


@pytest.fixture
def probe(mock_runner: Any) -> EnvironmentProbe:
    return EnvironmentProbe(mock_runner)


@pytest.fixture
def codex_tools(probe: EnvironmentProbe, mock_runner: Any) -> CodexTools:
    return CodexTools(probe, mock_runner)


@pytest.fixture
def registry(codex_tools: CodexTools) -> MCPToolRegistry:
    registry = MCPToolRegistry()
    codex_tools.register_into(registry)
    return registry


@pytest.fixture
def dispatcher(registry: MCPToolRegistry) -> ToolDispatcher:
    return ToolDispatcher(registry)
