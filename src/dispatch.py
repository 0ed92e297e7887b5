"""Forwarding of the cargo subcommand once the predicate selected it."""

from __future__ import annotations

import logging
import subprocess
from typing import List, Optional, Sequence

from common.logging_utils import Timer, extra_context, is_debug_enabled
from constants import Constants, ExitCodes

logger = logging.getLogger(__name__)


def normalize_command(command: Optional[Sequence[str]]) -> List[str]:
    """Strip a leading '--' separator from the forwarded command."""
    cmd = list(command or [])
    if cmd and cmd[0] == "--":
        cmd = cmd[1:]
    return cmd


def run_cargo(command: Sequence[str], cargo: str = Constants.CARGO) -> int:
    """Run ``cargo <command...>`` with inherited stdio and return its exit code.

    Args:
        command: Subcommand and its arguments, e.g. ["build", "--release"].
        cargo: Cargo executable.

    Returns:
        The subcommand's exit code; SPAWN_ERROR when it could not be started
        or was terminated by a signal.
    """
    final_cmd = [cargo] + list(command)
    logger.info("Running: %s", " ".join(final_cmd))

    with Timer() as t:
        try:
            result = subprocess.run(final_cmd, check=False)  # noqa: S603
        except OSError as e:
            logger.error("Failed to run %s: %s", cargo, e)
            return ExitCodes.SPAWN_ERROR.value

    if is_debug_enabled(logger):
        logger.debug(
            "Subcommand finished",
            extra=extra_context(
                event="dispatch",
                component="dispatch",
                action="run",
                outcome=result.returncode,
                duration_ms=t.duration_ms(),
            ),
        )
    if result.returncode < 0:
        logger.warning("%s terminated by signal %d", cargo, -result.returncode)
        return ExitCodes.SPAWN_ERROR.value
    return result.returncode
