from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from relsync.core.config import Config, load_config_or_default
from relsync.core.errors import ErrorCode
from relsync.core.result import Err
from relsync.output.console import ConsoleProtocol, RichConsole

ROOT_ENV_VAR = "RELSYNC_ROOT"


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    config: Config
    console: ConsoleProtocol


def resolve_root() -> Path:
    env = os.environ.get(ROOT_ENV_VAR)
    if env:
        return Path(env).expanduser().resolve()
    return Path.cwd().resolve()


def build_context() -> CLIContext:
    root = resolve_root()
    console = RichConsole()

    config_result = load_config_or_default(root)
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    return CLIContext(root=root, config=config_result.value, console=console)
