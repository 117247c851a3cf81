"""Command line interface: print the release set for a Kubernetes selector."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import aiofiles
from pydantic import ValidationError

from . import __version__
from .config import Settings
from .core.builder import build_release_set
from .exceptions import ReleaseSetError
from .utils.logger import setup_logging
from .versions.models import COMPONENTS, ReleaseSet

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="release-set",
        description="Resolve a compatible set of component versions for a Kubernetes test cluster.",
        epilog=(
            "Selectors: 'latest' (default), '1' (major), '1.30' (minor), "
            "'1.30.2' (exact), '-1' (one minor release behind latest)"
        ),
    )
    parser.add_argument(
        "--kubernetes", default="latest", metavar="SELECTOR",
        help="Kubernetes version selector (default: latest)",
    )
    parser.add_argument(
        "--limit", action="append", default=[], choices=COMPONENTS, metavar="COMPONENT",
        help="Only resolve this component, may be repeated (default: all)",
    )
    parser.add_argument(
        "--format", choices=("json", "env"), default="json",
        help="json manifest or name=version lines (default: json)",
    )
    parser.add_argument("--output", type=Path, help="Write the manifest to a file instead of stdout")
    parser.add_argument("--timeout", type=float, help="Seconds before resolution is abandoned")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def render(release_set: ReleaseSet, output_format: str) -> str:
    if output_format == "env":
        return "\n".join(release_set.to_env_lines()) + "\n"
    return json.dumps(release_set.to_manifest(), indent=4) + "\n"


async def write_output(text: str, output: Optional[Path]):
    if output is None:
        sys.stdout.write(text)
        sys.stdout.flush()
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    async with aiofiles.open(output, "w", encoding="utf-8") as f:
        await f.write(text)
    logger.info("Wrote release set to %s", output)


async def main(args: argparse.Namespace, settings: Settings) -> int:
    try:
        release_set = await build_release_set(args.kubernetes, args.limit, settings=settings)
    except ReleaseSetError as e:
        logger.debug("Resolution failed: %s", e.details)
        print(f"error: {e.message}", file=sys.stderr)
        return e.exit_code

    await write_output(render(release_set, args.format), args.output)
    return 0


def load_settings(timeout: Optional[float] = None) -> Settings:
    """Settings from the environment, with the --timeout override applied."""
    overrides = {} if timeout is None else {"timeout": timeout}
    return Settings(**overrides)


def describe_validation_error(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'settings'}: {err['msg']}"
        for err in error.errors()
    )


def run(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args.timeout)
    except ValidationError as e:
        print(f"error: invalid configuration: {describe_validation_error(e)}", file=sys.stderr)
        return 2

    setup_logging(settings.log_dir, verbose=args.verbose)
    try:
        return asyncio.run(main(args, settings))
    except KeyboardInterrupt:
        print("error: interrupted", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(run())
