"""
Command-line interface for pgp-encrypt.

This module parses arguments, wires the components together and owns
everything the user sees: progress lines on stdout, a single error line
on stderr, and the process exit code.
"""

from __future__ import annotations

import sys
import argparse
from typing import List, NoReturn, Optional

from .config import (
    DEFAULT_CONFIG_FILE,
    ENV_PUBLIC_KEY,
    EXIT_INTERRUPTED,
    EXIT_SUCCESS,
    TOOL_VERSION,
    public_key_from_env,
)
from .errors import EncryptorError, InvalidInputError, classify, describe
from .keys import load_recipient_key
from .pipeline import EncryptionPipeline, FileTask, validate_roots
from .settings import Settings


# ---------------------------------------------------------------------------
# Color output helpers
# ---------------------------------------------------------------------------


class Colors:
    """ANSI color codes for terminal output."""
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    RESET = "\033[0m"
    BOLD = "\033[1m"


def colored(text: str, color: str) -> str:
    """Return colored text for terminal output."""
    return f"{color}{text}{Colors.RESET}"


def print_error(msg: str) -> None:
    """Print error message to stderr."""
    print(colored(f"✗ Error: {msg}", Colors.RED), file=sys.stderr)


def print_success(msg: str) -> None:
    """Print success message."""
    print(colored(f"✓ {msg}", Colors.GREEN))


def print_warning(msg: str) -> None:
    """Print warning message."""
    print(colored(f"⚠ Warning: {msg}", Colors.YELLOW))


def print_info(msg: str) -> None:
    """Print info message."""
    print(colored(f"ℹ {msg}", Colors.CYAN))


# ---------------------------------------------------------------------------
# CLI context
# ---------------------------------------------------------------------------


class CLIContext:
    """Shared context for the encrypt command."""

    def __init__(self, verbose: bool, quiet: bool, dry_run: bool):
        self.verbose = verbose
        self.quiet = quiet
        self.dry_run = dry_run

    def log(self, msg: str) -> None:
        """Log message if not quiet."""
        if not self.quiet:
            print(msg)

    def log_verbose(self, msg: str) -> None:
        """Log message if verbose."""
        if self.verbose and not self.quiet:
            print(colored(f"  → {msg}", Colors.BLUE))


# ---------------------------------------------------------------------------
# Command implementation
# ---------------------------------------------------------------------------


def cmd_encrypt(ctx: CLIContext, args: argparse.Namespace) -> int:
    """
    Encrypt every file under the input folder for the recipient key.
    """
    if not args.folder:
        raise InvalidInputError("Input folder is required (-f/--folder)")
    if not args.output:
        raise InvalidInputError("Output folder is required (-o/--output)")

    key_path = args.key or public_key_from_env()
    if not key_path:
        raise InvalidInputError(
            f"Public key file is required (-k/--key or {ENV_PUBLIC_KEY})"
        )

    settings = Settings.discover(args.config).with_overrides(
        suffix=args.suffix,
        armor=args.armor,
        exclude=args.exclude,
    )
    if settings.source is not None:
        ctx.log_verbose(f"Settings loaded from {settings.source}")

    # Roots are checked before the key, so a bad folder reports as bad input.
    input_root, output_root = validate_roots(args.folder, args.output)

    recipient = load_recipient_key(key_path)
    ctx.log_verbose(f"Recipient key: {recipient.fingerprint} ({recipient.path})")

    def report(task: FileTask) -> None:
        ctx.log(f"  ✓ {task.source.relative_to(input_root)} → {task.destination}")

    pipeline = EncryptionPipeline(recipient, settings=settings, on_encrypted=report)

    if ctx.dry_run:
        ctx.log(colored("[DRY RUN] Preview of changes:", Colors.YELLOW))
        count = 0
        for task in pipeline.plan(input_root, output_root):
            ctx.log(f"  {colored('→', Colors.CYAN)} {task.source}")
            ctx.log(f"    Output:  {task.destination}")
            count += 1
        ctx.log("")
        ctx.log(colored("[DRY RUN] Preview complete - no files were written", Colors.YELLOW))
        if not ctx.quiet:
            print_info(f"Would encrypt {count} file(s)")
        return EXIT_SUCCESS

    ctx.log(colored(f"Encrypting {input_root} → {output_root}", Colors.BOLD))
    ctx.log_verbose(f"Output suffix: {settings.suffix!r}, armor: {settings.armor}")

    result = pipeline.run(input_root, output_root)

    if not result.ok:
        print_error(result.message)
        ctx.log_verbose(f"{result.files_written} file(s) written before the failure were kept")
        if ctx.verbose and not isinstance(result.error, EncryptorError):
            _print_traceback(result.error)
        return result.exit_code

    if not ctx.quiet:
        ctx.log("")
        if result.files_written == 0:
            print_warning("No files found to encrypt")
        else:
            print_success(f"Successfully encrypted {result.files_written} file(s)")
    return EXIT_SUCCESS


def _print_traceback(error: BaseException) -> None:
    import traceback
    traceback.print_exception(type(error), error, error.__traceback__)


def print_help() -> None:
    help_text = f"""
{colored('pgp-encrypt', Colors.BOLD)} — encrypt a folder tree for one OpenPGP recipient

{colored('USAGE:', Colors.CYAN)}
  pgp-encrypt -f INPUT_DIR -o OUTPUT_DIR -k KEY_FILE [options]

{colored('DESCRIPTION:', Colors.CYAN)}
  Every file under INPUT_DIR is encrypted for the public key in KEY_FILE
  and written to the same relative path under OUTPUT_DIR. The first
  failure stops the run; files already written are kept.

{colored('OPTIONS:', Colors.CYAN)}
  -f, --folder PATH         Input folder containing files to encrypt
  -o, --output PATH         Output folder for encrypted files
  -k, --key PATH            Public key file (armored or binary)
                            (default: ${ENV_PUBLIC_KEY})
  -c, --config PATH         Settings file
                            (default: ./{DEFAULT_CONFIG_FILE} if present)
  --suffix SUFFIX           Append SUFFIX to output filenames (e.g. .pgp)
  --armor                   Write ASCII-armored messages
  --exclude PATTERN         Skip files matching PATTERN (repeatable)
  -n, --dry-run             Show what would happen without writing files
  -v, --verbose             Enable verbose output
  -q, --quiet               Suppress non-error output
  --version                 Show version and exit
  -h, --help                Show this help message and exit

{colored('EXIT CODES:', Colors.CYAN)}
  0  success
  1  invalid input (missing folder, bad arguments)
  2  key error (missing, unreadable or unusable key)
  3  encryption failure
  4  I/O error (reading sources, writing outputs)

{colored('EXAMPLES:', Colors.CYAN)}
  pgp-encrypt -f docs -o docs-encrypted -k alice.asc
  pgp-encrypt -f docs -o out -k alice.asc --suffix .pgp --exclude '*.pgp'
  pgp-encrypt -f docs -o out -k alice.asc --dry-run

{colored('VERSION:', Colors.CYAN)}
  {TOOL_VERSION}
"""
    print(help_text)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


class ArgumentParser(argparse.ArgumentParser):
    """Parser that reports usage errors as invalid input instead of exiting."""

    def error(self, message: str) -> NoReturn:
        raise InvalidInputError(message)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = ArgumentParser(
        prog="pgp-encrypt",
        description="Encrypt files using PGP",
        add_help=False,
    )

    parser.add_argument("-f", "--folder", metavar="INPUT_DIR", help="Input folder containing files to encrypt")
    parser.add_argument("-o", "--output", metavar="OUTPUT_DIR", help="Output folder for encrypted files")
    parser.add_argument("-k", "--key", metavar="KEY_FILE", help="Public key file path")
    parser.add_argument("-c", "--config", metavar="PATH", help="Settings file")
    parser.add_argument("--suffix", help="Append a suffix to output filenames")
    parser.add_argument(
        "--armor",
        action="store_const",
        const=True,
        default=None,
        help="Write ASCII-armored messages",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        metavar="PATTERN",
        help="Skip files matching PATTERN",
    )
    parser.add_argument(
        "-n", "--dry-run",
        action="store_true",
        help="Show what would happen without writing files",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument(
        "-h", "--help",
        action="store_true",
        help="Show help message",
    )

    return parser


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()

    try:
        args = parser.parse_args(argv)
    except InvalidInputError as e:
        print_error(describe(e))
        return classify(e)

    if args.help:
        print_help()
        return EXIT_SUCCESS

    if args.version:
        print(f"pgp-encrypt {TOOL_VERSION}")
        return EXIT_SUCCESS

    ctx = CLIContext(
        verbose=args.verbose,
        quiet=args.quiet,
        dry_run=args.dry_run,
    )

    try:
        return cmd_encrypt(ctx, args)
    except KeyboardInterrupt:
        print_error("Interrupted")
        return EXIT_INTERRUPTED
    except EncryptorError as e:
        print_error(describe(e))
        return classify(e)
    except Exception as e:
        print_error(f"Unexpected error: {describe(e)}")
        if args.verbose:
            _print_traceback(e)
        return classify(e)


if __name__ == "__main__":
    sys.exit(main())
