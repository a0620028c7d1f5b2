"""
Child process execution for glab invocations.

Runs an external program to completion and hands back everything it wrote.
Interpretation of the exit code is left to the caller.
"""

import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvocationResult:
    """
    Outcome of one finished child process.

    Attributes:
        exit_code: Process exit status (0 if the platform reported none)
        stdout: Everything written to standard output
        stderr: Everything written to standard error
    """

    exit_code: int
    stdout: str
    stderr: str


def build_child_env(overlay: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """
    Build the environment for a child process.

    Takes a snapshot of the current environment and merges the overlay on
    top of it. The overlay wins on conflicting keys. The current process
    environment is left untouched.

    Args:
        overlay: Variables to add or replace for the child

    Returns:
        New mapping to pass to process creation
    """
    env = dict(os.environ)
    if overlay:
        env.update({str(k): str(v) for k, v in overlay.items()})
    return env


async def run_process(
    program: str,
    args: Sequence[str],
    env: Optional[Mapping[str, str]] = None,
) -> InvocationResult:
    """
    Run a program and wait for it to exit.

    Standard input is attached to the null device. A non-zero exit is
    reported in the result, never raised.

    Args:
        program: Executable name (resolved on PATH) or path
        args: Ordered command-line arguments
        env: Environment overlay merged over the current environment

    Returns:
        InvocationResult with exit code and captured output

    Raises:
        FileNotFoundError: If the executable cannot be found
    """
    logger.debug(f"Running {program} {' '.join(args)}")

    proc = await asyncio.create_subprocess_exec(
        program,
        *args,
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        env=build_child_env(env),
    )
    out, err = await proc.communicate()

    return InvocationResult(
        exit_code=proc.returncode if proc.returncode is not None else 0,
        stdout=out.decode("utf-8", errors="replace"),
        stderr=err.decode("utf-8", errors="replace"),
    )
