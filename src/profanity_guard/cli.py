"""CLI interface for profanity-guard — for moderation and audit tooling.

Usage:
    # Check one text (stdin: text, stdout: JSON result)
    echo 'This is some bullshit work' | \
        python -m profanity_guard.cli check --locale en

    # Validate against a policy (exit status 1 when blocked)
    echo 'Тази работа е пълна глупост' | \
        python -m profanity_guard.cli validate --locale bg --allow-mild

    # Check many texts (stdin: JSON array of strings, stdout: JSON array)
    echo '["Clean text", "What the f.u.c.k"]' | \
        python -m profanity_guard.cli batch --locale en

    # Print censored text only
    echo 'Fix my damn sink' | python -m profanity_guard.cli clean

    # Show loaded lexicons
    python -m profanity_guard.cli lexicons
"""

from __future__ import annotations
import argparse
import json
import logging
import os
import sys

from .config import load_from_yaml, moderator_config, load_config
from .moderator import Moderator
from .types import Severity, ValidationPolicy


DEFAULT_CONFIG = os.environ.get("PROFANITY_GUARD_CONFIG", "")


def _build_moderator(args: argparse.Namespace) -> Moderator:
    cfg = load_from_yaml(args.config) if args.config else load_config({})
    if args.no_heuristic:
        cfg["use_heuristic"] = False
    if args.lexicon_dir:
        cfg["lexicon_dir"] = args.lexicon_dir
    if args.workers:
        cfg["batch_workers"] = args.workers
    return Moderator(moderator_config(cfg))


def _dump(data: object) -> None:
    json.dump(data, sys.stdout, ensure_ascii=False)
    sys.stdout.write("\n")


def cmd_check(args: argparse.Namespace) -> int:
    """Check plain text on stdin."""
    moderator = _build_moderator(args)
    _dump(moderator.check(sys.stdin.read(), args.locale).to_dict())
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate plain text on stdin; exit status 1 when blocked."""
    moderator = _build_moderator(args)
    policy = ValidationPolicy(
        allow_mild=args.allow_mild,
        block_threshold=Severity.parse(args.block_threshold),
    )
    verdict = moderator.validate(sys.stdin.read(), args.locale, policy)
    _dump({"valid": verdict.valid, "severity": verdict.severity.value, "error": verdict.error})
    return 0 if verdict.valid else 1


def cmd_batch(args: argparse.Namespace) -> int:
    """Check a JSON array of strings on stdin."""
    moderator = _build_moderator(args)
    texts = json.loads(sys.stdin.read() or "[]")
    if not isinstance(texts, list):
        sys.stderr.write("batch expects a JSON array of strings\n")
        return 2
    _dump([r.to_dict() for r in moderator.batch_check(texts, args.locale)])
    return 0


def cmd_clean(args: argparse.Namespace) -> int:
    """Write the censored text to stdout."""
    moderator = _build_moderator(args)
    sys.stdout.write(moderator.clean(sys.stdin.read(), args.locale))
    return 0


def cmd_lexicons(args: argparse.Namespace) -> int:
    """Dump loaded language packs and term counts as JSON."""
    moderator = _build_moderator(args)
    stats = moderator.store.stats()
    if args.locale:
        stats["chain"] = moderator.resolve(args.locale)
    json.dump(stats, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="profanity_guard",
        description="Multi-locale profanity moderation",
    )
    parser.add_argument("--config", default=DEFAULT_CONFIG, help="YAML config path")
    parser.add_argument("--locale", default=None, help="Locale of the text (en, bg, ru, uk, ...)")
    parser.add_argument("--lexicon-dir", default=None, help="Directory of lexicon YAML files")
    parser.add_argument("--no-heuristic", action="store_true", help="Lexicon-only mode")
    parser.add_argument("--workers", type=int, default=0, help="Threads for batch checks")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log to stderr")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("check", help="Check plain text (stdin)")
    p_validate = sub.add_parser("validate", help="Validate plain text against a policy (stdin)")
    p_validate.add_argument("--allow-mild", action="store_true", help="Accept mild language")
    p_validate.add_argument(
        "--block-threshold",
        default="none",
        choices=[s.value for s in Severity],
        help="Block severities above this level",
    )
    sub.add_parser("batch", help="Check a JSON array of texts (stdin)")
    sub.add_parser("clean", help="Censor plain text (stdin)")
    sub.add_parser("lexicons", help="Show loaded language packs")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    cmds = {
        "check": cmd_check,
        "validate": cmd_validate,
        "batch": cmd_batch,
        "clean": cmd_clean,
        "lexicons": cmd_lexicons,
    }
    return cmds[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
