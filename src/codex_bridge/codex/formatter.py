"""Text templates for every tool response."""

from datetime import datetime
from typing import List, Optional

from ..exceptions import SubprocessRunError

INSTALL_COMMAND = "npm install -g @openai/codex"
BREW_INSTALL_COMMAND = "brew install codex"
COMPLETED_MESSAGE = "✅ Codex task completed."

AGENTS_TEMPLATE = """```markdown
# Project guidelines

## Coding style
- Follow the existing formatter and linter configuration
- Keep functions small and documented

## Testing
- Add or update unit tests for every change
- Run the full test suite before finishing
```"""


def not_authenticated() -> str:
    return "❌ Codex CLI is not authenticated. Use the 'codex_login' tool to sign in with your ChatGPT account first."


def not_installed() -> str:
    return (
        "❌ Codex CLI is not installed. Install it with:\n\n"
        f"{INSTALL_COMMAND}\n"
        "or\n"
        f"{BREW_INSTALL_COMMAND}"
    )


def execution_output(stdout: str, stderr: str) -> str:
    """Compose the successful ``codex_execute`` response.

    Each stream gets its own section when non-empty. Text on stderr is shown as a
    warning section, not as a failure.
    """
    sections = []
    if stdout:
        sections.append(f"📤 Output:\n{stdout}")
    if stderr:
        sections.append(f"⚠️ Warnings/errors:\n{stderr}")
    if not sections:
        return COMPLETED_MESSAGE
    return "\n\n".join(section.strip() for section in sections)


def execution_failure(error: Exception) -> str:
    """Compose the ``codex_execute`` error response, keeping any partial output."""
    stdout = stderr = ""
    if isinstance(error, SubprocessRunError):
        stdout, stderr = error.stdout, error.stderr
    return _failure_text(stdout, stderr, str(error))


def execution_exit_failure(stdout: str, stderr: str, returncode: int) -> str:
    return _failure_text(stdout, stderr, f"Codex exited with status {returncode}.")


def _failure_text(stdout: str, stderr: str, details: str) -> str:
    lines = ["Codex CLI execution failed:"]
    if stdout:
        lines.append(f"Output: {stdout}")
    if stderr:
        lines.append(f"Errors: {stderr}")
    lines.append(f"Details: {details}")
    return "\n".join(lines)


def status_report(
    installed: bool,
    version: Optional[str],
    authenticated: bool,
    auth_modified: Optional[datetime],
) -> str:
    """Compose the ``codex_status`` text.

    Args:
        installed: Result of the install probe.
        version: Version string, or None when it could not be re-read.
        authenticated: Result of the auth probe.
        auth_modified: Auth file modification time; the line is omitted when None.
    """
    lines: List[str] = ["🔍 Codex CLI status:", ""]

    if installed and version is not None:
        lines.append(f"✅ Codex CLI installed: {version}")
    elif installed:
        lines.append("⚠️ Codex CLI is installed but its version could not be read")
    else:
        lines.append("❌ Codex CLI is not installed")
        lines.append(f"Install with: {INSTALL_COMMAND}")

    if authenticated:
        lines.append("✅ Authenticated with a ChatGPT account")
        if auth_modified is not None:
            lines.append(f"Auth file date: {auth_modified.strftime('%Y-%m-%d %H:%M:%S')}")
    else:
        lines.append("❌ Not authenticated")
        lines.append("To sign in: use the codex_login tool")

    return "\n".join(lines) + "\n"


def login_instructions(headless: bool) -> str:
    lines = ["🔐 Codex CLI ChatGPT sign-in:", ""]
    if headless:
        lines += [
            "Signing in from a headless environment:",
            "1. On your local machine, open an SSH tunnel:",
            "   ssh -L 1455:localhost:1455 <user>@<remote-host>",
            "",
            "2. Start the sign-in from the SSH session:",
            "   codex",
            "",
            "3. Choose 'Sign in with ChatGPT'",
            "4. Open the printed localhost:1455 URL in your local browser",
            "5. Sign in with a ChatGPT Plus/Pro/Business account",
        ]
    else:
        lines += [
            "Standard sign-in:",
            "1. Run the following command in a terminal:",
            "   codex",
            "",
            "2. Choose 'Sign in with ChatGPT'",
            "3. Sign in with your ChatGPT account when the browser opens",
            "4. A Plus, Pro, Business, Edu or Enterprise plan is required",
        ]
    lines += ["", "💡 Note: once signed in, the file ~/.codex/auth.json exists."]
    return "\n".join(lines)


def directory_not_found(path: str) -> str:
    return f"❌ Directory does not exist: {path}"


def not_a_directory(path: str) -> str:
    return f"❌ Not a directory: {path}"


def project_init_report(target_dir: str, is_git_repo: bool, has_agents_file: bool) -> str:
    """Compose the advisory ``codex_project_init`` text. Nothing here creates files."""
    lines = [f"📁 Codex project setup: {target_dir}", ""]

    if is_git_repo:
        lines += [
            "✅ Git repository detected - workspace-write sandbox recommended",
            "Codex can write files and run commands after approval.",
            "",
        ]
    else:
        lines += [
            "⚠️ Not a Git repository - read-only sandbox recommended",
            "Codex works read-only and every change needs approval.",
            "",
        ]

    if has_agents_file:
        lines += ["✅ AGENTS.md already exists.", ""]
    else:
        lines += [
            "💡 Create an AGENTS.md file to give Codex project-specific guidance.",
            "Example content:",
            AGENTS_TEMPLATE,
            "",
        ]

    recommended = "workspace-write" if is_git_repo else "read-only"
    lines += [
        "🚀 Next steps:",
        f'- Use the codex_execute tool with working_directory "{target_dir}"',
        f'- Pass sandbox "{recommended}" for this project.',
    ]
    return "\n".join(lines)
