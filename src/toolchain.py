"""Detection of the active rustc release channel and version."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Optional

import semantic_version

from common.logging_utils import Timer, extra_context, is_debug_enabled
from constants import Constants
from versioning.models import Channel
from versioning.parser import release_version

logger = logging.getLogger(__name__)


class ToolchainError(RuntimeError):
    """Raised when the compiler cannot be run or its version cannot be read."""


@dataclass(frozen=True)
class RustcInfo:
    """Channel and release version reported by ``rustc -V``.

    ``channel_name`` keeps the raw channel (e.g. "dev" for source builds);
    ``channel`` is only set for stable, beta and nightly.
    """

    channel_name: str
    version: semantic_version.Version

    @property
    def channel(self) -> Optional[Channel]:
        return Channel.from_name(self.channel_name)


def parse_rustc_version(output: str) -> RustcInfo:
    """Parse ``rustc -V`` output such as ``rustc 1.77.0-nightly (abc 2024-01-01)``.

    The channel is the first pre-release identifier, or "stable" when there is
    none. Pre-release and build metadata are stripped from the version.

    Raises:
        ToolchainError: If the output does not carry a semantic version.
    """
    fields = output.split()
    if len(fields) < 2:
        raise ToolchainError(f"Failed to get rustc version string from output: {output.strip()!r}")
    try:
        version = semantic_version.Version(fields[1])
    except ValueError as e:
        raise ToolchainError(f"Failed to parse rustc version '{fields[1]}': {e}") from e

    if version.prerelease:
        first = version.prerelease[0]
        channel_name = "unknown" if first.isdigit() else first
    else:
        channel_name = Channel.STABLE.value
    return RustcInfo(channel_name=channel_name, version=release_version(version))


def get_rustc_info(rustc: str = Constants.RUSTC) -> RustcInfo:
    """Run ``<rustc> -V`` and parse its output.

    Args:
        rustc: Compiler executable to query.

    Raises:
        ToolchainError: If the compiler cannot be run or exits non-zero.
    """
    with Timer() as t:
        try:
            result = subprocess.run(  # noqa: S603
                [rustc, "-V"],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                text=True,
                errors="replace",
                timeout=Constants.TOOLCHAIN_TIMEOUT,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise ToolchainError(f"Failed to get rustc version: {e}") from e

    if result.returncode != 0:
        raise ToolchainError(f"'{rustc} -V' exited with status {result.returncode}")

    info = parse_rustc_version(result.stdout or "")
    if is_debug_enabled(logger):
        logger.debug(
            "Detected rustc %s on channel %s",
            info.version,
            info.channel_name,
            extra=extra_context(
                event="toolchain", component="toolchain", action="detect", duration_ms=t.duration_ms()
            ),
        )
    if info.channel is None:
        logger.warning("rustc reports unrecognized channel '%s'; no --channel value will match", info.channel_name)
    return info
