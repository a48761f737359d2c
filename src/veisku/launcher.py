"""Hand control over to external programs."""

import logging
import os
import shutil
import subprocess
import sys
from pathlib import Path

from .config import MARKER_DIR, SCRIPT_DIR
from .errors import LaunchError

logger = logging.getLogger(__name__)

PLACEHOLDER = "{}"
SCRIPT_PREFIX = "v-"


def build_command(template: list[str], path: Path) -> list[str]:
    """Substitute ``{}`` arguments with the path, or append the path."""
    if PLACEHOLDER in template:
        return [str(path) if arg == PLACEHOLDER else arg for arg in template]
    return [*template, str(path)]


def child_env() -> dict[str, str]:
    """Environment for children, exposing the invoking program as ``V``."""
    env = dict(os.environ)
    env["V"] = sys.argv[0]
    return env


def spawn_foreground(argv: list[str], cwd: Path | None = None, env: dict[str, str] | None = None) -> int:
    """Run a command in the foreground and return its exit status."""
    if not argv:
        raise LaunchError(argv, "empty command")
    logger.debug(f"Spawning {argv} in {cwd or Path.cwd()}")
    try:
        result = subprocess.run(argv, cwd=cwd, env=env if env is not None else child_env())
    except FileNotFoundError as e:
        raise LaunchError(argv, "command not found") from e
    except OSError as e:
        raise LaunchError(argv, str(e)) from e
    logger.debug(f"{argv[0]} exited with status {result.returncode}")
    if result.returncode < 0:
        # Killed by a signal; report it the way shells do.
        return 128 - result.returncode
    return result.returncode


def find_script(marker_dir: Path, name: str) -> list[str] | None:
    """Locate a custom subcommand.

    Looks for ``NAME`` in the marker's script directory, then ``v-NAME`` on
    ``PATH``. Only single-component names are looked up on ``PATH``.
    """
    candidate = Path(name)
    if candidate.is_absolute():
        return [str(candidate)] if candidate.is_file() else None

    script = marker_dir / MARKER_DIR / SCRIPT_DIR / candidate
    logger.debug(f"Trying {script}")
    if script.is_file():
        return [str(script)]

    if len(candidate.parts) == 1:
        logger.debug(f"Trying {SCRIPT_PREFIX}{name} on PATH")
        found = shutil.which(f"{SCRIPT_PREFIX}{name}")
        if found:
            return [found]
    return None
