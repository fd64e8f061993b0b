"""Tests for the interactive shell and CLI entry point."""

import logging

import pytest
from fastapi.testclient import TestClient

from cli import main as cli_main
from cli.constants import HELP_TEXT
from cli.registry_client import RegistryClient
from cli.repl import evaluate, repl_loop
from registry.file_registry import FileRegistry
from registry.hashing import Sha256HashFunction
from registry.identity import BearerIdentityProvider
from registry.main import create_app


@pytest.fixture
def live_client(temp_config):
    app = create_app(
        registry=FileRegistry(Sha256HashFunction()),
        identity_provider=BearerIdentityProvider()
    )
    client = RegistryClient(temp_config)
    client.session = TestClient(app)
    return client


def _lines(*lines):
    remaining = list(lines)

    def read_line():
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    return read_line


def test_evaluate_reports_parse_errors(live_client):
    assert evaluate('insert a.txt text', live_client).startswith('Error:')
    assert evaluate('frobnicate', live_client).startswith('Error:')


def test_evaluate_runs_registry_commands(live_client):
    evaluate('identity owner1', live_client)

    assert evaluate('insert a.txt text 100', live_client).startswith('Registered a.txt')
    assert len(evaluate('find a.txt', live_client)) == 64


def test_repl_runs_until_exit(live_client, capsys):
    repl_loop(live_client, read_line=_lines('identity owner1', '', 'insert a.txt text 100', 'help', 'exit', 'list'))

    out = capsys.readouterr().out
    assert 'Registered a.txt' in out
    assert HELP_TEXT in out
    assert out.rstrip().endswith('Goodbye!')
    assert 'descriptor(s)' not in out


def test_repl_stops_at_end_of_input(live_client, capsys):
    repl_loop(live_client, read_line=_lines('list'))

    out = capsys.readouterr().out
    assert 'No descriptors registered.' in out
    assert out.rstrip().endswith('Goodbye!')


def test_repl_continues_after_interrupt(live_client, capsys):
    calls = []

    def read_line():
        calls.append(None)
        if len(calls) == 1:
            raise KeyboardInterrupt
        if len(calls) == 2:
            return 'list'
        raise EOFError

    repl_loop(live_client, read_line=read_line)

    assert 'No descriptors registered.' in capsys.readouterr().out


def test_main_passes_arguments_to_client(tmp_path, monkeypatch):
    seen = {}

    def fake_create_client(config_path, base_url=None):
        seen['config_path'] = config_path
        seen['base_url'] = base_url
        return 'client'

    monkeypatch.setattr(cli_main, 'create_client', fake_create_client)
    monkeypatch.setattr(cli_main, 'repl_loop', lambda client: seen.setdefault('client', client))

    cli_main.main(['--config', str(tmp_path / 'c.json'), '--url', 'http://registry:9000'])

    assert seen == {
        'config_path': str(tmp_path / 'c.json'),
        'base_url': 'http://registry:9000',
        'client': 'client',
    }


def test_main_debug_flag_sets_log_level(tmp_path, monkeypatch):
    levels = []

    def fake_setup_logging(name, log_level=None):
        levels.append(log_level)
        return logging.getLogger(name)

    monkeypatch.setattr(cli_main, 'setup_logging', fake_setup_logging)
    monkeypatch.setattr(cli_main, 'create_client', lambda config_path, base_url=None: None)
    monkeypatch.setattr(cli_main, 'repl_loop', lambda client: None)

    cli_main.main(['--debug', '--config', str(tmp_path / 'c.json')])

    assert levels == ['DEBUG']
