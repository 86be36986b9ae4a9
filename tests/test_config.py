"""
Tests for YAML configuration and the command-line front end.
"""

import logging
from pathlib import Path

import pytest

import run_primes
from prime_engine.batch_sieve import DEFAULT_BATCH_SIZE
from prime_engine.config import EngineConfig, load_config
from prime_engine.errors import ConfigError

DEFAULT_CONFIG = Path(__file__).parent.parent / 'config' / 'default.yaml'


class TestLoadConfig:
    """Loading and validating config files."""

    def test_defaults(self):
        config = load_config(None)
        assert config.max_batch_size == DEFAULT_BATCH_SIZE
        assert config.log_level == 'WARNING'

    def test_repository_default_file(self):
        config = load_config(DEFAULT_CONFIG)
        assert config == EngineConfig()

    def test_custom_file(self, tmp_path):
        path = tmp_path / 'custom.yaml'
        path.write_text('max_batch_size: 1024\nlog_level: debug\n')
        config = load_config(path)
        assert config.max_batch_size == 1024
        assert config.log_level_value == logging.DEBUG

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / 'empty.yaml'
        path.write_text('')
        assert load_config(path) == EngineConfig()

    def test_partial_file(self, tmp_path):
        path = tmp_path / 'partial.yaml'
        path.write_text('log_level: INFO\n')
        config = load_config(path)
        assert config.max_batch_size == DEFAULT_BATCH_SIZE
        assert config.log_level == 'INFO'

    @pytest.mark.parametrize('text', [
        'max_batch_size: 0\n',
        'max_batch_size: -5\n',
        'max_batch_size: 1.5\n',
        'max_batch_size: true\n',
        'log_level: LOUD\n',
        'unknown_key: 1\n',
        '- just\n- a list\n',
        'max_batch_size: [1\n',
    ])
    def test_invalid(self, tmp_path, text):
        path = tmp_path / 'bad.yaml'
        path.write_text(text)
        with pytest.raises(ConfigError):
            load_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_config(tmp_path / 'missing.yaml')


class TestCommandLine:
    """run_primes.main()"""

    def test_primes_up_to(self, capsys):
        assert run_primes.main(['primes-up-to', '30']) == 0
        assert capsys.readouterr().out == '2 3 5 7 11 13 17 19 23 29\n'

    def test_is_prime(self, capsys):
        assert run_primes.main(['is-prime', '999999999999999989']) == 0
        assert capsys.readouterr().out == 'True\n'

    def test_factors_with_config(self, capsys):
        assert run_primes.main(['factors', '360', '--config', str(DEFAULT_CONFIG)]) == 0
        assert capsys.readouterr().out == '2 2 2 3 3 5\n'

    def test_navigation_and_totient(self, capsys):
        assert run_primes.main(['next', '14']) == 0
        assert run_primes.main(['previous', '14']) == 0
        assert run_primes.main(['totient', '36']) == 0
        assert capsys.readouterr().out == '17\n13\n12\n'

    def test_timing(self, capsys):
        assert run_primes.main(['primes-up-to', '5000', '--timing']) == 0
        out = capsys.readouterr().out
        assert 'Completed in' in out
        assert 'checked up to 5,000' in out

    def test_invalid_input(self, capsys):
        assert run_primes.main(['previous', '2']) == 2
        assert 'error' in capsys.readouterr().err

    def test_out_of_range(self, capsys):
        assert run_primes.main(['is-prime', str(2**64)]) == 2
        assert 'outside' in capsys.readouterr().err

    def test_bad_config(self, tmp_path, capsys):
        path = tmp_path / 'bad.yaml'
        path.write_text('max_batch_size: 0\n')
        assert run_primes.main(['is-prime', '7', '--config', str(path)]) == 2
        assert 'max_batch_size' in capsys.readouterr().err


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
