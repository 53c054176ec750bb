from __future__ import annotations

import logging
import subprocess  # nosec

# Reason: central wrapper validates executables against an allow list before invocation
from pathlib import Path
from typing import Optional, Sequence

_LOG = logging.getLogger("pgcheck.subprocess")

_ALLOWED_EXECUTABLES = {
    "adb",
    "adb.exe",
}


def register_allowed_executable(executable: str) -> None:
    """Allow an additional executable name (case-insensitive)."""
    if executable:
        _ALLOWED_EXECUTABLES.add(Path(executable).name.lower())


def is_allowed_executable(executable: str) -> bool:
    if not executable:
        return False
    return Path(executable).name.lower() in _ALLOWED_EXECUTABLES


def _ensure_allowed(cmd: Sequence[str]) -> Sequence[str]:
    if not cmd:
        raise ValueError("empty command passed to safe subprocess wrapper")
    if not is_allowed_executable(cmd[0]):
        raise ValueError(f"executable {cmd[0]!r} is not permitted by allow list")
    return cmd


def safe_run(
    cmd: Sequence[str],
    *,
    timeout: Optional[float] = None,
    check: bool = False,
) -> subprocess.CompletedProcess:
    """Run an allow-listed command, capturing text output."""
    _ensure_allowed(cmd)
    _LOG.debug("safe_run executing cmd=%s timeout=%s", list(cmd), timeout)
    return subprocess.run(  # nosec
        list(cmd),
        timeout=timeout,
        capture_output=True,
        text=True,
        check=check,
    )
    # Reason: _ensure_allowed enforces allow list, and shell is never enabled


CompletedProcessType = subprocess.CompletedProcess
TimeoutExpired = subprocess.TimeoutExpired
