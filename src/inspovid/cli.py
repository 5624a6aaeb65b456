#!/usr/bin/env python3
"""
inspovid CLI - Save-worthy metadata for YouTube and TikTok links.

Usage:
    inspovid resolve "https://youtube.com/watch?v=VIDEO_ID"
    inspovid resolve "https://www.tiktok.com/@user/video/123" --json
    inspovid serve --port 8000
    inspovid validate-config
"""

import argparse
import json
import logging
import sys

from dotenv import load_dotenv

from inspovid.config.defaults import DEFAULT_HOST, DEFAULT_PORT
from inspovid.exceptions import InspovidError
from inspovid.utils.formatting import format_duration
from inspovid.utils.logging import configure_logging

logger = logging.getLogger(__name__)


def _cmd_resolve(args):
    """Handle the resolve subcommand."""
    from inspovid.providers.resolver import MetadataResolver

    resolver = MetadataResolver()
    try:
        metadata = resolver.resolve_url(args.url)
    except InspovidError as e:
        print(f"ERROR: {e.message}", file=sys.stderr)
        if e.suggestion:
            print(f"  {e.suggestion}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps(metadata.to_response(), indent=2, ensure_ascii=False))
        return

    print("\n=== RESULT ===")
    print(f"Title: {metadata.title}")
    if metadata.author:
        print(f"Author: {metadata.author}")
    if metadata.stats:
        stats = metadata.stats
        print(
            f"Stats: {stats.views_formatted} views, {stats.likes_formatted} likes, "
            f"{stats.comments_formatted} comments"
        )
    duration = format_duration(metadata.duration)
    if duration:
        print(f"Duration: {duration}{' (Short)' if metadata.is_short else ''}")
    if metadata.hashtags:
        print(f"Hashtags: {' '.join('#' + tag for tag in metadata.hashtags)}")
    if metadata.source:
        print(f"Source: {metadata.source}")
    if metadata.error:
        print(f"WARNING: {metadata.error}")


def _cmd_serve(args):
    """Handle the serve subcommand."""
    import uvicorn

    from inspovid.server import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)


def _cmd_validate_config(args):
    """Handle the validate-config subcommand."""
    from inspovid.config.loader import (
        _get_user_config_path,
        _load_yaml_config,
        find_config_file,
        validate_config_dict,
    )
    from inspovid.providers.registry import list_all, list_available

    config_path, _ = find_config_file()

    if config_path:
        print(f"Config file: {config_path}")
        yaml_config = _load_yaml_config(config_path)
        if yaml_config is None:
            print("  Failed to parse config file.")
            sys.exit(1)
    else:
        print("No config file found.")
        print("  Searched: .inspovid/config.yaml (project)")
        print(f"  Searched: {_get_user_config_path()} (user)")
        yaml_config = None

    result = validate_config_dict(yaml_config)

    if result.errors:
        print(f"\nErrors ({len(result.errors)}):")
        for error in result.errors:
            print(f"  x {error}")

    if result.warnings:
        print(f"\nWarnings ({len(result.warnings)}):")
        for warning in result.warnings:
            print(f"  ! {warning}")

    if not args.skip_availability:
        print("\nProvider availability:")
        available = list_available()
        for name in list_all():
            status = "available" if name in available else "not configured"
            marker = "+" if name in available else "-"
            print(f"  {marker} {name}: {status}")

    if result.is_valid and not result.warnings:
        print("\nConfig is valid.")
    elif result.is_valid:
        print(f"\nConfig is valid with {len(result.warnings)} warning(s).")
    else:
        print(
            f"\nConfig is invalid: {len(result.errors)} error(s), "
            f"{len(result.warnings)} warning(s)."
        )

    sys.exit(0 if result.is_valid else 1)


def main(argv=None):
    load_dotenv()

    from inspovid.config.loader import get_config

    configure_logging(get_config().log_level)

    parser = argparse.ArgumentParser(
        description="Collect YouTube and TikTok videos with their metadata",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s resolve "https://youtube.com/watch?v=VIDEO_ID"
    %(prog)s resolve "https://youtube.com/shorts/VIDEO_ID" --json
    %(prog)s serve --host 0.0.0.0 --port 8080
    %(prog)s validate-config
    %(prog)s validate-config --skip-availability
        """,
    )

    subparsers = parser.add_subparsers(dest="command")

    # resolve subcommand
    r_parser = subparsers.add_parser("resolve", help="Fetch metadata for a video link")
    r_parser.add_argument("url", help="YouTube or TikTok video URL")
    r_parser.add_argument("--json", action="store_true", help="Print the API JSON shape")

    # serve subcommand
    s_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    s_parser.add_argument("--host", default=DEFAULT_HOST, help=f"Bind address (default: {DEFAULT_HOST})")
    s_parser.add_argument(
        "--port", type=int, default=DEFAULT_PORT,
        help=f"Port (default: {DEFAULT_PORT})",
    )

    # validate-config subcommand
    vc_parser = subparsers.add_parser(
        "validate-config",
        help="Validate provider configuration",
    )
    vc_parser.add_argument(
        "--skip-availability", action="store_true",
        help="Skip listing which providers have their secrets configured",
    )

    args = parser.parse_args(argv)

    if args.command == "resolve":
        _cmd_resolve(args)
    elif args.command == "serve":
        _cmd_serve(args)
    elif args.command == "validate-config":
        _cmd_validate_config(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
