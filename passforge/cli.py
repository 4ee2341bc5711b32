"""
Command-line interface.
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Sequence

from .config import DEFAULT_CONFIG, GenerationConfig, Mode
from .generator import generate_many
from .errors import StoreError
from .history import PasswordStore
from .random_source import RandomSource, default_random_source
from .strength import StrengthResult, score

logger = logging.getLogger(__name__)

BANNER = "[passforge]"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="passforge",
        description="Generate passwords and estimate their strength.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument(
        "--store",
        default=None,
        help="history/favorites file (default: per-user data dir or $PASSFORGE_STORE)",
    )
    parser.add_argument(
        "--master-password",
        default=os.getenv("PASSFORGE_MASTER_PASSWORD"),
        help="encrypt the store with this password (or $PASSFORGE_MASTER_PASSWORD)",
    )
    sub = parser.add_subparsers(dest="command")

    gen = sub.add_parser("generate", help="generate passwords")
    gen.add_argument("-l", "--length", type=int, default=DEFAULT_CONFIG.length)
    gen.add_argument(
        "-m", "--mode",
        choices=[m.value for m in Mode],
        default=DEFAULT_CONFIG.mode.value,
    )
    gen.add_argument("--no-uppercase", action="store_true")
    gen.add_argument("--no-lowercase", action="store_true")
    gen.add_argument("--no-numbers", action="store_true")
    gen.add_argument("--no-special", action="store_true")
    gen.add_argument("--exclude-ambiguous", action="store_true")
    gen.add_argument("--avoid-repeating", action="store_true")
    gen.add_argument("-n", "--count", type=int, default=1)
    gen.add_argument(
        "--quantum",
        action="store_true",
        help="draw randomness from the simulated quantum circuit",
    )
    gen.add_argument("-s", "--show-strength", action="store_true")
    gen.add_argument("--no-history", action="store_true", help="do not record in history")

    sc = sub.add_parser("score", help="estimate the strength of a password")
    sc.add_argument("password")

    hist = sub.add_parser("history", help="show recent passwords and favorites")
    hist.add_argument("--clear", action="store_true", help="clear the history")

    fav = sub.add_parser("favorite", help="star or unstar a password")
    fav.add_argument("password")

    exp = sub.add_parser("export", help="write history and favorites as a numbered list")
    exp.add_argument("path", nargs="?", default=".")

    return parser


def config_from_args(args: argparse.Namespace) -> GenerationConfig:
    return GenerationConfig(
        length=args.length,
        include_uppercase=not args.no_uppercase,
        include_lowercase=not args.no_lowercase,
        include_numbers=not args.no_numbers,
        include_special=not args.no_special,
        exclude_ambiguous=args.exclude_ambiguous,
        avoid_repeating=args.avoid_repeating,
        mode=Mode(args.mode),
    )


def format_strength(result: StrengthResult) -> str:
    return (
        f"  strength: {result.score:.1f}/10 ({result.label})\n"
        f"  entropy:  {result.entropy} bits (charset ~{result.charset_size})\n"
        f"  crack time online:  {result.crack_time.online}\n"
        f"  crack time offline: {result.crack_time.offline}"
    )


def _random_source(args: argparse.Namespace) -> RandomSource:
    if args.quantum:
        # Local import: qiskit is heavy and only needed here.
        from .quantum_engine import QuantumRandomSource

        return QuantumRandomSource()
    return default_random_source()


def _open_store(args: argparse.Namespace) -> PasswordStore:
    return PasswordStore(args.store, args.master_password).load()


def cmd_generate(args: argparse.Namespace) -> int:
    cfg = config_from_args(args)
    # Open the store first so a bad store fails before anything is shown.
    store = None if args.no_history else _open_store(args)

    rng = _random_source(args)
    if not rng.secure:
        logger.warning(
            "%s is not a cryptographically secure source; "
            "do not use these passwords for real accounts.",
            type(rng).__name__,
        )
    passwords = generate_many(cfg, args.count, rng)

    print(f"\n{BANNER} {cfg.mode.value} mode")
    for pw in passwords:
        print(pw)
        if args.show_strength:
            print(format_strength(score(pw)))

    if store is not None:
        for pw in passwords:
            store.add_to_history(pw)
        store.save()
    return 0


def cmd_score(args: argparse.Namespace) -> int:
    print(format_strength(score(args.password)))
    return 0


def cmd_history(args: argparse.Namespace) -> int:
    store = _open_store(args)
    if args.clear:
        store.clear_history()
        store.save()
        print("History cleared!")
        return 0

    print("Recent:")
    for pw in store.history:
        mark = "*" if store.is_favorite(pw) else " "
        print(f" {mark} {pw}")
    print("Favorites:")
    for pw in store.favorites:
        print(f"   {pw}")
    return 0


def cmd_favorite(args: argparse.Namespace) -> int:
    store = _open_store(args)
    starred = store.toggle_favorite(args.password)
    store.save()
    print("Added to favorites." if starred else "Removed from favorites.")
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    target = _open_store(args).export_to(args.path)
    print(f"Passwords exported to {target}")
    return 0


COMMANDS = {
    "generate": cmd_generate,
    "score": cmd_score,
    "history": cmd_history,
    "favorite": cmd_favorite,
    "export": cmd_export,
}


def main(argv: Sequence[str] | None = None) -> int:
    """
    Entry point for `passforge`, `python -m passforge` or `run_passforge.py`.
    Without a sub-command, prints one password with the default settings.
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        args = parser.parse_args([*argv, "generate"])

    try:
        return COMMANDS[args.command](args)
    except StoreError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
