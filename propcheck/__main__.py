import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Iterator, List

from . import transform_file
from .core.ast_parser.utils import is_supported_file, should_skip_directory
from .core.instrument.config import load_options_file


def setup_logging(log_level: str = "WARNING") -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )


logger = logging.getLogger(__name__)


def iter_source_files(paths: List[str]) -> Iterator[Path]:
    """Expand files and directories into supported source files."""
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            for root, dirs, files in os.walk(path):
                dirs[:] = sorted(d for d in dirs if not should_skip_directory(d))
                for name in sorted(files):
                    if is_supported_file(name):
                        yield Path(root) / name
        else:
            yield path


def main(argv: List[str] | None = None) -> int:
    """Main entry point for propcheck."""
    parser = argparse.ArgumentParser(
        description="propcheck - inject runtime propTypes validation into JavaScript components"
    )
    parser.add_argument(
        "paths",
        nargs="+",
        help="Files or directories to instrument"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML file with plugin options (classComponentExtends, ...)"
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--in-place",
        action="store_true",
        help="Rewrite files in place"
    )
    output.add_argument(
        "--out-dir",
        type=str,
        default=None,
        help="Write instrumented files below this directory, mirroring their paths"
    )
    parser.add_argument(
        "--cwd",
        type=str,
        default=os.getcwd(),
        help="Directory diagnostic paths are relative to"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    options = load_options_file(args.config) if args.config else {}
    cwd = str(Path(args.cwd).resolve())
    status = 0

    for path in iter_source_files(args.paths):
        absolute = str(path.resolve())
        result = transform_file(absolute, cwd, options)
        if any(error.severity == "error" for error in result.errors) and not result.code:
            status = 1
            continue

        if result.instrumented:
            logger.info(f"{result.file_path}: instrumented {', '.join(result.instrumented)}")

        if args.in_place:
            if not result.changed:
                continue
            target = Path(absolute)
        elif args.out_dir:
            target = Path(args.out_dir) / result.file_path.lstrip("/")
        else:
            sys.stdout.write(result.code)
            continue

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(result.code, encoding="utf-8")
        except OSError as e:
            logger.error(f"Cannot write {target}: {e}")
            status = 1

    return status


if __name__ == "__main__":
    sys.exit(main())
