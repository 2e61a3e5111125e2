"""Built-in definitions for AI assistants and desktop tools."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AssistantDefinition:
    id: str
    name: str
    description: str
    command: str  # binary looked up on PATH
    install_cmd: str
    uninstall_cmd: str
    credential_env: tuple[str, ...] = ()
    credential_files: tuple[str, ...] = ()  # relative to $HOME
    login_hint: str = ""

    @property
    def is_separator(self) -> bool:
        return self.id.startswith("separator")


@dataclass(frozen=True)
class ToolDefinition:
    id: str
    name: str
    description: str
    install_instructions: str


def _separator(id: str) -> AssistantDefinition:
    return AssistantDefinition(
        id=id, name="", description="", command="", install_cmd="", uninstall_cmd=""
    )


ASSISTANT_DEFINITIONS: tuple[AssistantDefinition, ...] = (
    AssistantDefinition(
        id="claude_cli",
        name="Claude Code CLI",
        description="Anthropic Claude Code terminal assistant",
        command="claude",
        install_cmd="npm install -g @anthropic-ai/claude-code",
        uninstall_cmd="npm uninstall -g @anthropic-ai/claude-code",
        credential_env=("ANTHROPIC_API_KEY",),
        credential_files=(".claude/config.json",),
        login_hint="Run `claude login` or set ANTHROPIC_API_KEY",
    ),
    AssistantDefinition(
        id="copilot_cli",
        name="GitHub Copilot CLI",
        description="GitHub Copilot command line interface",
        command="copilot",
        install_cmd="npm install -g @github/copilot",
        uninstall_cmd="npm uninstall -g @github/copilot",
        login_hint="Run `copilot auth login`",
    ),
    AssistantDefinition(
        id="codex_cli",
        name="Codex CLI",
        description="OpenAI Codex terminal assistant",
        command="codex",
        install_cmd="npm install -g @openai/codex",
        uninstall_cmd="npm uninstall -g @openai/codex",
        credential_env=("OPENAI_API_KEY",),
        credential_files=(".codex/auth.json",),
        login_hint="Run `codex login` or set OPENAI_API_KEY",
    ),
    AssistantDefinition(
        id="gemini_cli",
        name="Gemini CLI",
        description="Google Gemini terminal assistant",
        command="gemini",
        install_cmd="npm install -g @google/gemini-cli",
        uninstall_cmd="npm uninstall -g @google/gemini-cli",
        login_hint="Run `gemini` and follow Google login prompts",
    ),
    AssistantDefinition(
        id="opencode_cli",
        name="OpenCode CLI",
        description="OpenCode terminal assistant",
        command="opencode",
        install_cmd="npm install -g opencode",
        uninstall_cmd="npm uninstall -g opencode",
    ),
    _separator("separator1"),
    AssistantDefinition(
        id="spec_kit",
        name="spec-kit",
        description="GitHub spec-kit for specifications",
        command="specify",
        install_cmd="uvx --from git+https://github.com/github/spec-kit.git specify",
        uninstall_cmd="",  # manual uninstall
    ),
    AssistantDefinition(
        id="openspec",
        name="OpenSpec",
        description="Fission OpenSpec CLI",
        command="openspec",
        install_cmd="npm install -g @fission-ai/openspec@latest",
        uninstall_cmd="npm uninstall -g @fission-ai/openspec",
    ),
)

# Assistants whose fresh install still needs a login before first use.
CREDENTIAL_FOLLOWUP_IDS = frozenset({"claude_cli", "codex_cli", "copilot_cli", "gemini_cli"})

TOOL_DEFINITIONS: tuple[ToolDefinition, ...] = (
    ToolDefinition(
        id="vscode",
        name="Visual Studio Code",
        description="VS Code with Dev Containers extension",
        install_instructions="Install VS Code from https://code.visualstudio.com/",
    ),
    ToolDefinition(
        id="warp",
        name="Warp Terminal",
        description="Modern terminal with AI features",
        install_instructions="Install Warp from https://www.warp.dev/",
    ),
    ToolDefinition(
        id="wave",
        name="Wave Terminal",
        description="Open source AI terminal",
        install_instructions="Install Wave from https://www.waveterm.dev/",
    ),
)

DEFAULT_BENCHES: tuple[str, ...] = ("flutterBench", "javaBench", "dotNetBench", "pythonBench")

BENCH_ID_PREFIX = "bench_"


def assistant_definition(id: str) -> AssistantDefinition | None:
    for definition in ASSISTANT_DEFINITIONS:
        if definition.id == id:
            return definition
    return None


def tool_definition(id: str) -> ToolDefinition | None:
    for definition in TOOL_DEFINITIONS:
        if definition.id == id:
            return definition
    return None


def bench_id(name: str) -> str:
    return f"{BENCH_ID_PREFIX}{name}"


def bench_name(id: str) -> str:
    return id[len(BENCH_ID_PREFIX):] if id.startswith(BENCH_ID_PREFIX) else id
