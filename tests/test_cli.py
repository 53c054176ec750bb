"""Tests for the ``python -m pgcheck`` entry point."""
import json
import os
import sys
from unittest.mock import patch

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from conftest import FALLBACK, PRIMARY, make_service, transport_error
from pgcheck.__main__ import build_parser, main


def test_parser_requires_command():
    args = build_parser().parse_args(['check', '--installed', '0.385.2', '--json'])
    assert args.command == 'check'
    assert args.installed == '0.385.2'
    assert args.json is True


def test_check_json_output(capsys):
    with patch('pgcheck.__main__.CheckService.from_config', return_value=make_service()) as from_config:
        code = main(['check', '--installed', '0.385.2', '--json'])
    assert code == 0
    assert from_config.call_args.args[0].installed_version == '0.385.2'
    out = json.loads(capsys.readouterr().out)
    assert out['latest_version'] == '0.386.0'
    assert out['update_available'] is True


def test_check_failure_exit_code(capsys):
    service = make_service(primary=transport_error(PRIMARY), fallback=transport_error(FALLBACK))
    with patch('pgcheck.__main__.CheckService.from_config', return_value=service):
        code = main(['check', '--installed', '0.385.2'])
    assert code == 1
    assert 'could not determine latest version' in capsys.readouterr().err


def test_packages_command(capsys):
    with patch('pgcheck.__main__.InstalledVersionProvider.search_packages',
               return_value=['com.nianticlabs.pokemongo']), \
            patch('pgcheck.__main__.InstalledVersionProvider.version_of', return_value='0.385.2'):
        code = main(['packages'])
    assert code == 0
    assert 'com.nianticlabs.pokemongo 0.385.2' in capsys.readouterr().out
