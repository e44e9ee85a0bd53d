#!/usr/bin/env python3
"""Local CLI entrypoint to check repository records against a PHP version.

Usage:
  python scripts/check.py --repositories repos.json [--php-version 8.4]
      [--config settings.json] [--show-forks] [--summary summary.md]
      [--warn-only] [--validate-only] [--verbose]

The records file is produced by whatever step fetched the repositories and
their composer.json files; see schemas/repositories.schema.json.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from php_compat_checker.config import ConfigError, load_settings
from php_compat_checker.core import check_inventory
from php_compat_checker.errors import MalformedVersionError
from php_compat_checker.summary import render_summary
from php_compat_checker.validators.repositories import validate_file


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--repositories", type=Path, required=True)
    parser.add_argument("--php-version", dest="php_version", type=str, default=None)
    parser.add_argument("--config", type=Path, default=None)
    parser.add_argument("--show-forks", action="store_true", default=None)
    parser.add_argument("--summary", type=Path, default=None)
    parser.add_argument("--warn-only", action="store_true")
    parser.add_argument("--validate-only", action="store_true")
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.validate_only:
            validate_file(args.repositories)
            print(f"OK: {args.repositories} is a valid repository records document")
            return 0
        settings = load_settings(args.config)
        report = check_inventory(
            args.repositories,
            target_version=args.php_version,
            settings=settings,
            show_forks=args.show_forks,
        )
    except (ConfigError, MalformedVersionError, FileNotFoundError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"ERROR: Invalid repository records:{exc}", file=sys.stderr)
        return 1

    print(json.dumps(report, indent=2))

    if args.summary is not None:
        args.summary.write_text(render_summary(report), encoding="utf-8")

    has_findings = bool(report.get("hasFindings"))

    # Default behavior: fail when something needs attention unless env override set or --warn-only
    if has_findings and not args.warn_only:
        warn_env = os.getenv("PHP_COMPAT_CHECKER_WARN_ONLY", "").strip().lower()
        if warn_env in {"1", "true", "yes", "y"}:
            return 0
        return 10

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
