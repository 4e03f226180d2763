"""Tests for configuration management."""

import json
import tempfile
from pathlib import Path

import pytest

from blast_report.config import (
    Config, LoggingConfig, ReportConfig, RetrievalConfig, SearchConfig,
    create_example_config
)


class TestConfig:
    """Test cases for configuration management."""

    @pytest.fixture
    def temp_dir(self):
        """Create a temporary directory."""
        with tempfile.TemporaryDirectory() as tmpdir:
            yield Path(tmpdir)

    def test_default_config(self):
        """Test default configuration creation."""
        config = Config.default()

        assert config.report.base_url == ""
        assert config.search.num_threads == 1
        assert config.search.databases == []
        assert config.retrieval.database_dir == "."
        assert config.logging.level == "INFO"
        assert config.logging.log_to_file is False

    def test_config_to_file(self, temp_dir):
        """Test saving configuration to file."""
        config = Config.default()
        config.search.databases = ["Sinvicta2-2-3.prot.subset"]
        config_file = temp_dir / "nested" / "config.json"

        config.to_file(config_file)

        with open(config_file) as f:
            data = json.load(f)

        assert data['search']['databases'] == ["Sinvicta2-2-3.prot.subset"]
        assert data['report']['base_url'] == ""
        assert data['logging']['level'] == "INFO"

    def test_config_from_file(self, temp_dir):
        """Test loading configuration from file."""
        config_file = temp_dir / "config.json"
        config_file.write_text(json.dumps({
            'report': {'base_url': 'http://localhost:4567'},
            'search': {'num_threads': 8},
            'logging': {'level': 'DEBUG'}
        }))

        config = Config.from_file(config_file)

        assert config.report.base_url == 'http://localhost:4567'
        assert config.search.num_threads == 8
        assert config.logging.level == 'DEBUG'
        assert config.retrieval == RetrievalConfig()

    def test_config_from_missing_file(self, temp_dir):
        """Test a missing file gives the defaults."""
        config = Config.from_file(temp_dir / "missing.json")

        assert config.report == ReportConfig()
        assert config.search == SearchConfig()
        assert config.logging == LoggingConfig()

    def test_merge_env_vars(self, monkeypatch):
        """Test environment variables override the file."""
        monkeypatch.setenv('BLAST_REPORT_BASE_URL', 'https://blast.example.org')
        monkeypatch.setenv('BLAST_REPORT_DATABASE_DIR', '/data/blast')
        monkeypatch.setenv('BLAST_REPORT_NUM_THREADS', '6')
        monkeypatch.setenv('BLAST_REPORT_LOG_LEVEL', 'WARNING')

        config = Config.default()
        config.merge_env_vars()

        assert config.report.base_url == 'https://blast.example.org'
        assert config.retrieval.database_dir == '/data/blast'
        assert config.search.num_threads == 6
        assert config.logging.level == 'WARNING'

    def test_merge_cli_args(self):
        """Test command line options override everything."""
        config = Config.default()
        config.merge_cli_args(
            base_url='http://localhost',
            databases=('db1', 'db2'),
            database_dir='/dbs',
            verbose=True,
            log_file='run.log'
        )

        assert config.report.base_url == 'http://localhost'
        assert config.search.databases == ['db1', 'db2']
        assert config.retrieval.database_dir == '/dbs'
        assert config.logging.level == 'DEBUG'
        assert config.logging.log_to_file is True

    def test_merge_cli_args_ignores_unset(self):
        """Test options that were not given leave the config alone."""
        config = Config.default()
        config.search.databases = ['db']
        config.merge_cli_args(base_url=None, databases=(), database_dir=None)

        assert config.search.databases == ['db']
        assert config.report.base_url == ""

    def test_create_example_config(self, temp_dir):
        """Test example configuration generation."""
        path = create_example_config(temp_dir / "example.json")

        config = Config.from_file(path)
        assert config.search.num_threads == 4
        assert config.report.base_url == "http://localhost:4567"
