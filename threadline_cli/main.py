"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    threadline root [ITEMS...] [--file F] [--domain-separated] [--json]
    threadline prove --index I [ITEMS...] [--file F] [--out PATH] [--json]
    threadline verify-proof --item S --proof PATH --root HEX [--leaf-count N]
    threadline verify --chain-id ID [ITEMS...] [--file F] (--root HEX | --anchor-file PATH)
    threadline anchor --chain-id ID [ITEMS...] [--file F] [--anchor-file PATH]
    threadline verify-statement --content C --context-id G --timestamp T --signature S --public-key K
    threadline config --init | --show

Evidence files are .json (a list of strings or evidence objects) or text
with one item per non-empty line.

Environment Variables:
    THREADLINE_DOMAIN_SEPARATED      Tagged leaf/node hashing (default: false)
    THREADLINE_MESSAGE_FORMAT        length_prefixed or delimited
    THREADLINE_PUBLIC_KEY_ENCODING   base58, base64 or hex (default: base58)
    THREADLINE_SIGNATURE_ENCODING    base58, base64 or hex (default: base64)
    THREADLINE_ANCHOR_PATH           Default anchor file
    THREADLINE_LOG_LEVEL             Log level (default: INFO)
    THREADLINE_LOG_FILE              Also write logs to this file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from core.schemas.errors import ThreadlineException
from threadline_cli.commands import commit, statement, verify
from threadline_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
)
from threadline_cli.config import get_default_config_template, get_log_file, load_config


__all__ = [
    "EXIT_SUCCESS",
    "EXIT_RUNTIME_ERROR",
    "EXIT_VERIFICATION_FAILED",
    "create_parser",
    "main",
    "setup_logging",
]


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _add_evidence_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "items",
        nargs="*",
        help="Evidence strings in chain order (appended after --file items)",
    )
    parser.add_argument(
        "--file", "-f",
        type=str,
        default=None,
        help="Evidence file: .json list or text with one item per line",
    )
    _add_hashing_args(parser)


def _add_hashing_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--domain-separated",
        action="store_true",
        default=False,
        help="Use tagged leaf/node hashing (default: from config, legacy)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="threadline",
        description="Threadline CLI - Commit evidence chains, check proofs, and verify signed statements.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file, .json/.yaml/.yml (default: ./threadline.json or ~/.config/threadline/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Compute the Merkle root of an evidence chain",
        description="Hash each evidence item into a leaf and fold the leaves into a root.",
    )
    _add_evidence_args(root_parser)
    root_parser.add_argument(
        "--chain-id",
        type=str,
        default="unnamed",
        help="Chain identifier to report (default: unnamed)",
    )
    root_parser.set_defaults(func=commit.root_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Build an inclusion proof for one evidence item",
        description="Build the sibling path proving the item at --index is in the chain.",
    )
    _add_evidence_args(prove_parser)
    prove_parser.add_argument(
        "--index", "-i",
        type=int,
        required=True,
        help="0-based index of the item to prove",
    )
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof JSON to this path",
    )
    prove_parser.set_defaults(func=commit.prove_cmd)

    # --- verify-proof command ---
    verify_proof_parser = subparsers.add_parser(
        "verify-proof",
        help="Check an inclusion proof against a root",
        description="Exit 0 when the item is included under the root, 2 otherwise.",
    )
    verify_proof_parser.add_argument("--item", type=str, required=True, help="Evidence string to check")
    verify_proof_parser.add_argument("--proof", type=str, required=True, help="Proof JSON written by 'prove --out'")
    verify_proof_parser.add_argument("--root", type=str, required=True, help="Expected root, hex")
    verify_proof_parser.add_argument(
        "--leaf-count", type=int, default=None, help="Chain length; rejects indexes past the last item"
    )
    _add_hashing_args(verify_proof_parser)
    verify_proof_parser.set_defaults(func=verify.verify_proof_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Re-verify an evidence chain against a root",
        description="Recompute the chain's root and compare it to --root or the anchored root.",
    )
    _add_evidence_args(verify_parser)
    verify_parser.add_argument("--chain-id", type=str, required=True, help="Chain identifier")
    root_source = verify_parser.add_mutually_exclusive_group(required=True)
    root_source.add_argument("--root", type=str, default=None, help="Expected root, hex")
    root_source.add_argument("--anchor-file", type=str, default=None, help="JSON anchor file holding the root")
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- anchor command ---
    anchor_parser = subparsers.add_parser(
        "anchor",
        help="Commit an evidence chain and anchor its root",
        description="Store the chain's root in a JSON anchor file under --chain-id.",
    )
    _add_evidence_args(anchor_parser)
    anchor_parser.add_argument("--chain-id", type=str, required=True, help="Chain identifier")
    anchor_parser.add_argument(
        "--anchor-file",
        type=str,
        default=None,
        help="JSON anchor file (default: anchor.path from config)",
    )
    anchor_parser.set_defaults(func=commit.anchor_cmd)

    # --- verify-statement command ---
    statement_parser = subparsers.add_parser(
        "verify-statement",
        help="Verify a signed post or comment",
        description="Exit 0 when the signature is valid for the claimed public key, 2 otherwise.",
    )
    statement_parser.add_argument("--content", type=str, required=True, help="Statement body")
    statement_parser.add_argument("--context-id", type=str, required=True, help="Post / thread identifier")
    statement_parser.add_argument("--timestamp", type=int, required=True, help="Authoring time, unix milliseconds")
    statement_parser.add_argument("--signature", type=str, required=True, help="Encoded signature")
    statement_parser.add_argument("--public-key", type=str, required=True, help="Encoded public key")
    statement_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    statement_parser.add_argument("--debug", action="store_true", default=False, help="Debug mode")
    statement_parser.set_defaults(func=statement.verify_statement_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="threadline.json",
        help="Path for config file (default: threadline.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (THREADLINE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.runtime_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: threadline config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=get_log_file(config))

    # Attach config to args for commands to use
    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except ThreadlineException as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
