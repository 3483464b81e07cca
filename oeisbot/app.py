import argparse
import json
from pathlib import Path
from typing import List, Optional

from . import __version__
from .env import Settings, load_env, load_settings
from .errors import ConfigError, FetchError, NotFoundError, PublishError, SamplingExhaustedError
from .fetch import DEFAULT_EXCLUDED_KEYWORDS, fetch_by_id, fetch_random
from .keywords import Keyword, from_string
from .logger import get_logger, reset_logger
from .mastodon import format_status, post_status
from .models import Sequence, render_text, to_dict


def _int_at_least(minimum: int):
    def parse(value: str) -> int:
        try:
            number = int(value)
        except ValueError:
            raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
        if number < minimum:
            raise argparse.ArgumentTypeError(f"must be >= {minimum}, got {number}")
        return number
    return parse


def _keyword_arg(value: str) -> Keyword:
    try:
        return from_string(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _lookup_options(settings: Settings) -> dict:
    return {
        "base_url": settings.base_url,
        "timeout": settings.timeout,
        "retries": settings.http_retries,
    }


def _excluded_keywords(args: argparse.Namespace) -> frozenset:
    excluded = set(DEFAULT_EXCLUDED_KEYWORDS)
    excluded.difference_update(args.allow or [])
    excluded.update(args.exclude or [])
    return frozenset(excluded)


def _print_sequence(seq: Sequence, as_json: bool) -> None:
    if as_json:
        print(json.dumps(to_dict(seq), indent=2))
    else:
        print(render_text(seq))


def _random_sequence(args: argparse.Namespace, settings: Settings) -> Sequence:
    max_draws = args.max_draws if args.max_draws is not None else settings.max_draws
    return fetch_random(
        excluded=_excluded_keywords(args),
        max_id=args.max_id if args.max_id is not None else settings.max_id,
        max_draws=max_draws,
        **_lookup_options(settings),
    )


def cmd_fetch(args: argparse.Namespace, settings: Settings) -> None:
    try:
        seq = fetch_by_id(args.id, **_lookup_options(settings))
    except NotFoundError as e:
        raise SystemExit(f"Not found: {e}")
    except FetchError as e:
        raise SystemExit(f"Lookup failed: {e}")
    _print_sequence(seq, args.json)


def cmd_random(args: argparse.Namespace, settings: Settings) -> None:
    try:
        seq = _random_sequence(args, settings)
    except (FetchError, SamplingExhaustedError) as e:
        raise SystemExit(f"Random lookup failed: {e}")
    finally:
        get_logger().log_metrics_summary()
    _print_sequence(seq, args.json)


def cmd_post(args: argparse.Namespace, settings: Settings) -> None:
    if not args.dry_run:
        try:
            instance_url, token = settings.require_mastodon()
        except ConfigError as e:
            raise SystemExit(str(e))

    try:
        if args.id is not None:
            seq = fetch_by_id(args.id, **_lookup_options(settings))
        else:
            seq = _random_sequence(args, settings)
    except (FetchError, SamplingExhaustedError) as e:
        raise SystemExit(f"Lookup failed: {e}")

    status = format_status(seq)
    if args.dry_run:
        print(status)
        return

    try:
        result = post_status(instance_url, token, status, timeout=settings.timeout)
    except PublishError as e:
        raise SystemExit(f"Failed to post status to Mastodon: {e}")
    print(f"Posted {seq.label}: {result.get('url') or 'ok'}")


def cmd_keywords(args: argparse.Namespace, settings: Settings) -> None:
    for kw in Keyword:
        marker = " (excluded)" if kw in DEFAULT_EXCLUDED_KEYWORDS else ""
        print(f"{kw.value}{marker}")


def _add_sampling_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--max-id", type=_int_at_least(1), help="Upper bound for random identifiers (or set OEIS_MAX_ID)")
    p.add_argument("--max-draws", type=_int_at_least(1), help="Give up after this many draws (or set OEIS_MAX_DRAWS)")
    p.add_argument("--allow", type=_keyword_arg, nargs="+", metavar="KEYWORD",
                   help="Keywords to drop from the default exclusion list")
    p.add_argument("--exclude", type=_keyword_arg, nargs="+", metavar="KEYWORD",
                   help="Additional keywords to exclude")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="oeisbot", description="Fetch OEIS sequences and post them to Mastodon")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--log-dir", help="Also write a daily log file to this directory")

    subparsers = parser.add_subparsers(dest="command")

    fet = subparsers.add_parser("fetch", help="Fetch one sequence by A-number")
    fet.add_argument("--id", type=_int_at_least(0), required=True, help="Numeric identifier, e.g. 45 for A000045")
    fet.add_argument("--json", action="store_true", help="Print the decoded sequence as JSON")
    fet.set_defaults(func=cmd_fetch)

    rnd = subparsers.add_parser("random", help="Fetch a random non-excluded sequence")
    rnd.add_argument("--json", action="store_true", help="Print the decoded sequence as JSON")
    _add_sampling_options(rnd)
    rnd.set_defaults(func=cmd_random)

    pst = subparsers.add_parser("post", help="Post a sequence to Mastodon (random unless --id is given)")
    pst.add_argument("--id", type=_int_at_least(0), help="Post this identifier instead of a random one")
    pst.add_argument("--dry-run", action="store_true", help="Print the status instead of posting it")
    _add_sampling_options(pst)
    pst.set_defaults(func=cmd_post)

    kws = subparsers.add_parser("keywords", help="List known OEIS keywords")
    kws.set_defaults(func=cmd_keywords, needs_settings=False)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    # Load .env if present (MASTODON_INSTANCE_URL, MASTODON_ACCESS_TOKEN, etc.)
    load_env()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if getattr(args, "needs_settings", True):
        try:
            settings = load_settings()
        except ConfigError as e:
            raise SystemExit(f"Configuration error: {e}")
    else:
        settings = Settings()

    reset_logger()
    get_logger(
        level=settings.log_level,
        enable_file=args.log_dir is not None,
        log_dir=Path(args.log_dir) if args.log_dir else None,
    )

    if hasattr(args, "func"):
        args.func(args, settings)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
