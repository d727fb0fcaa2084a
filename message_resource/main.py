"""Command line entrypoint: load resource modules and print lookups."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Sequence

from message_resource.config import ResourceSettings
from message_resource.i18n.service import MessageResource
from message_resource.logging import configure_logging, logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="message-resource",
        description="Load message resource files and print the values of the given keys.",
    )
    parser.add_argument("keys", nargs="+", metavar="KEY")
    parser.add_argument("-m", "--module", dest="modules", action="append", default=None)
    parser.add_argument("-l", "--locale", default=None)
    parser.add_argument("--file-path", default=None)
    parser.add_argument("--extension", default=None)
    parser.add_argument("--transport", choices=("http", "file"), default=None)
    parser.add_argument("--debug", action="store_true")
    parser.add_argument("--console-logs", action="store_true", help="Human readable logs instead of JSON.")
    return parser


def settings_from_args(args: argparse.Namespace) -> ResourceSettings:
    overrides = {
        "file_path": args.file_path,
        "file_extension": args.extension,
        "transport": args.transport,
    }
    if args.debug:
        overrides["debug_mode"] = True
    return ResourceSettings(**{name: value for name, value in overrides.items() if value is not None})


def resolve_key(resources: MessageResource, key: str, modules: Sequence[str] | None, locale: str | None) -> str:
    for module in modules or [None]:
        value = resources.lookup(key, module, locale)
        if value is not None:
            return value
    return resources.get(key, locale=locale)


async def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(
        logging.DEBUG if args.debug else logging.WARNING,
        json_output=not args.console_logs,
    )
    settings = settings_from_args(args)

    async with MessageResource(settings) as resources:
        report = await resources.load(args.modules, locale=args.locale)
        for key in args.keys:
            print(f"{key}={resolve_key(resources, key, args.modules, args.locale)}")

    if report is not None and not report.ok:
        logger.error("resource_load_failed", modules=sorted(report.failures))
        return 1
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
