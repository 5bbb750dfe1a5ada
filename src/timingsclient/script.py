#!/usr/bin/env python3
"""Fetch one timings data file from the command line."""
import argparse
import asyncio
import json
import logging
import sys

import aiohttp

from timingsclient.config import get_page_context, init_config
from timingsclient.constants import HARNESSES, STATUSES
from timingsclient.exceptions import TimingsClientError
from timingsclient.fetch import fetch_data

log = logging.getLogger(__name__)


def get_parser(desc="Fetch a test timings data file"):
    """Create the timingsclient argparse parser.

    Args:
        desc (str, optional): the description for the parser.

    Returns:
        argparse.ArgumentParser: the parser.

    """
    parser = argparse.ArgumentParser(description=desc)
    parser.add_argument("--config", dest="config_path", type=str, default=None, help="the path to a yaml config file")
    parser.add_argument("--page-url", type=str, default=None, help="the dashboard page url to resolve the fetch mode from")
    parser.add_argument("--data-dir", type=str, default=None, help="read local data files from this directory")
    parser.add_argument("--kind", type=str, choices=HARNESSES, default=None, help="the harness to use for index.json")
    parser.add_argument("--output", "-o", type=str, default=None, help="write the json here instead of stdout")
    parser.add_argument("--verbose", "-v", action="store_true", default=None, help="log at debug level")
    parser.add_argument("filename", type=str, help="the data file to fetch, e.g. index.json")
    return parser


def _init_logging(config):
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if config.get("verbose") else logging.INFO,
    )
    logging.getLogger("aiohttp").setLevel(logging.WARNING)


async def async_main(config, filename, output=None, kind=None):
    """Fetch ``filename`` and write its json body.

    Returns:
        int: the exit code.

    """
    page = get_page_context(config, kind=kind)
    async with aiohttp.ClientSession() as session:
        response = await fetch_data(session, filename, page, config)
        if not response.ok:
            log.error(f"No data available for {filename}: {response.status} {response.status_text}")
            return STATUSES["failure"]
        data = await response.json()

    contents = json.dumps(data, indent=2, sort_keys=True)
    if output:
        with open(output, "w") as fh:
            print(contents, file=fh)
        log.info(f"Wrote {filename} to {output}")
    else:
        print(contents)
    return STATUSES["success"]


def main(commandline_args=None):
    parser = get_parser()
    parsed_args = parser.parse_args(commandline_args if commandline_args is not None else sys.argv[1:])
    try:
        config = init_config(
            config_path=parsed_args.config_path,
            overrides={
                "page_url": parsed_args.page_url,
                "data_dir": parsed_args.data_dir,
                "verbose": parsed_args.verbose,
            },
        )
        _init_logging(config)
        exit_code = asyncio.run(async_main(config, parsed_args.filename, output=parsed_args.output, kind=parsed_args.kind))
    except TimingsClientError as exc:
        log.exception("Failed to fetch %s", parsed_args.filename)
        sys.exit(exc.exit_code)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
