"""Command line entry point.

Usage:
  python -m pgcheck check [--installed 0.385.2] [--json] [--no-notify]
  python -m pgcheck packages
  python -m pgcheck serve [--host 127.0.0.1] [--port 5000]
"""
from __future__ import annotations
import argparse, json, sys
from dataclasses import replace

from .config import load_config
from .installed import InstalledVersionProvider
from .logging_utils import configure_logging
from .notifier import LogNotifier
from .service import CheckService


def _cmd_check(args) -> int:
    config = load_config()
    if args.installed:
        config = replace(config, installed_version=args.installed)
    service = CheckService.from_config(config)
    if args.no_notify:
        service.notifier = LogNotifier()
    outcome = service.run_check()
    if args.json:
        print(json.dumps(outcome.to_dict(), indent=2))
    elif outcome.ok:
        print(f'Installed Pokemon Go: {outcome.installed_version}')
        print(f'Latest on PGSharp:    {outcome.latest_version}')
        if outcome.update_available:
            print(f'PGSharp supports v{outcome.latest_version} (You have: {outcome.installed_version})')
        else:
            print('Your version matches PGSharp')
    else:
        print(f'Check failed: {outcome.error}', file=sys.stderr)
    return 0 if outcome.ok else 1


def _cmd_packages(args) -> int:
    provider = InstalledVersionProvider(load_config())
    found = provider.search_packages()
    if not found:
        print('No Pokemon Go related packages found', file=sys.stderr)
        return 1
    for name in found:
        print(f'{name} {provider.version_of(name) or "?"}')
    return 0


def _cmd_serve(args) -> int:
    from . import create_app
    app = create_app()
    app.run(host=args.host, port=args.port, debug=False, use_reloader=False)
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog='pgcheck', description='Compare installed Pokemon Go with the version PGSharp supports')
    ap.add_argument('--log-level', default=None, help='Override PGCHECK_LOG_LEVEL')
    sub = ap.add_subparsers(dest='command', required=True)

    p_check = sub.add_parser('check', help='Run one version check now')
    p_check.add_argument('--installed', help='Installed version (skip adb lookup)')
    p_check.add_argument('--json', action='store_true', help='Print the outcome as JSON')
    p_check.add_argument('--no-notify', action='store_true', help='Log instead of calling the webhook')
    p_check.set_defaults(func=_cmd_check)

    p_pkgs = sub.add_parser('packages', help='List Pokemon Go related packages on the device')
    p_pkgs.set_defaults(func=_cmd_packages)

    p_serve = sub.add_parser('serve', help='Run the HTTP status/trigger API')
    p_serve.add_argument('--host', default='127.0.0.1')
    p_serve.add_argument('--port', type=int, default=5000)
    p_serve.set_defaults(func=_cmd_serve)
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
