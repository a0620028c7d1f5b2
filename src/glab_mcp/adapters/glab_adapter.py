"""glab adapter for MCP tool invocation."""

import json
import logging
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from .process import InvocationResult, run_process

logger = logging.getLogger(__name__)

# glab caps listing pages at 100 items
PAGE_SIZE = 100

Runner = Callable[[str, Sequence[str], Optional[Mapping[str, str]]], Awaitable[InvocationResult]]


def _trim(text: str) -> str:
    """Strip surrounding whitespace, including a byte-order mark."""
    return text.strip().strip("\ufeff").strip()


class GlabError(Exception):
    """Base class for failures of a glab invocation."""


class GlabCommandError(GlabError):
    """Raised when glab exits with a non-zero status."""

    def __init__(self, command: Sequence[str], exit_code: int, detail: str):
        self.command = list(command)
        self.exit_code = exit_code
        self.detail = detail
        super().__init__(
            f"{' '.join(self.command)} failed ({exit_code}): {detail}"
        )


class GlabOutputError(GlabError):
    """Raised when glab succeeds but its output is not valid JSON."""

    def __init__(self, command: Sequence[str], output: str, reason: str):
        self.command = list(command)
        self.output = output
        super().__init__(
            f"Malformed output from {' '.join(self.command)}: {reason}"
        )


class GlabAdapter:
    """Runs glab subcommands and interprets their output."""

    def __init__(
        self,
        executable: str = "glab",
        env: Optional[Mapping[str, str]] = None,
        runner: Optional[Runner] = None,
    ):
        """
        Initialize adapter.

        Args:
            executable: glab executable name or path
            env: Environment overlay applied to every invocation
            runner: Process runner (defaults to run_process)
        """
        self.executable = executable
        self.env: Dict[str, str] = dict(env or {})
        self._runner = runner if runner is not None else run_process

    async def run(self, args: Sequence[str]) -> Tuple[str, str]:
        """
        Run glab and require a zero exit status.

        Args:
            args: glab arguments (without the executable)

        Returns:
            Tuple of (stdout, stderr)

        Raises:
            GlabCommandError: If glab is missing or exits non-zero
        """
        command = [self.executable, *args]
        try:
            result = await self._runner(self.executable, list(args), self.env)
        except FileNotFoundError as e:
            raise GlabCommandError(
                command, 127, f"{self.executable}: command not found"
            ) from e

        if result.exit_code != 0:
            raise GlabCommandError(
                command, result.exit_code, result.stderr or result.stdout
            )
        return result.stdout, result.stderr

    async def run_json(self, args: Sequence[str]) -> Any:
        """Run glab and parse its standard output as JSON."""
        out, _ = await self.run(args)
        try:
            return json.loads(out)
        except json.JSONDecodeError:
            pass

        try:
            return json.loads(_trim(out))
        except json.JSONDecodeError as e:
            raise GlabOutputError([self.executable, *args], out, str(e)) from e

    async def paginate(self, args: Sequence[str], page_size: int = PAGE_SIZE) -> List[Any]:
        """
        Collect every page of a glab listing.

        Appends ``--page N`` to the base arguments starting at page 1. The
        listing ends on the first page holding fewer than ``page_size``
        items, or on a response that is not a list at all.

        Args:
            args: Base arguments of the listing command
            page_size: Items per full page (must match the -P value in args)

        Returns:
            All items from all pages, in order
        """
        items: List[Any] = []
        page = 1
        while True:
            chunk = await self.run_json([*args, "--page", str(page)])
            if not isinstance(chunk, list):
                # A JSON object here may be an error payload, not an empty page
                logger.warning(
                    f"Listing ended on page {page} with a non-list response "
                    f"({type(chunk).__name__}); results may be incomplete"
                )
                break

            items.extend(chunk)
            logger.debug(f"Fetched page {page} with {len(chunk)} items")
            if len(chunk) < page_size:
                break
            page += 1
        return items
