"""Configuration management for the BLAST report tool."""

import json
import os
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import List, Optional


@dataclass
class ReportConfig:
    """Report rendering settings."""
    base_url: str = ""


@dataclass
class SearchConfig:
    """Settings passed on to BLAST runs."""
    num_threads: int = 1
    databases: List[str] = field(default_factory=list)


@dataclass
class RetrievalConfig:
    """Sequence retrieval settings."""
    database_dir: str = "."


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "INFO"
    log_dir: str = ".blast_report_logs"
    log_to_file: bool = False
    colors: bool = True


@dataclass
class Config:
    """Main configuration container."""
    report: ReportConfig
    search: SearchConfig
    retrieval: RetrievalConfig
    logging: LoggingConfig

    @classmethod
    def default(cls) -> 'Config':
        """Create default configuration."""
        return cls(
            report=ReportConfig(),
            search=SearchConfig(),
            retrieval=RetrievalConfig(),
            logging=LoggingConfig()
        )

    @classmethod
    def from_file(cls, path: Path) -> 'Config':
        """Load configuration from JSON file."""
        if not path.exists():
            return cls.default()

        with open(path, 'r') as f:
            data = json.load(f)

        return cls(
            report=ReportConfig(**data.get('report', {})),
            search=SearchConfig(**data.get('search', {})),
            retrieval=RetrievalConfig(**data.get('retrieval', {})),
            logging=LoggingConfig(**data.get('logging', {}))
        )

    def to_file(self, path: Path) -> None:
        """Save configuration to JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            'report': asdict(self.report),
            'search': asdict(self.search),
            'retrieval': asdict(self.retrieval),
            'logging': asdict(self.logging)
        }

        with open(path, 'w') as f:
            json.dump(data, f, indent=2)

    def merge_env_vars(self) -> None:
        """Merge environment variables into configuration."""
        if os.getenv('BLAST_REPORT_BASE_URL'):
            self.report.base_url = os.getenv('BLAST_REPORT_BASE_URL')
        if os.getenv('BLAST_REPORT_DATABASE_DIR'):
            self.retrieval.database_dir = os.getenv('BLAST_REPORT_DATABASE_DIR')
        if os.getenv('BLAST_REPORT_NUM_THREADS'):
            self.search.num_threads = int(os.getenv('BLAST_REPORT_NUM_THREADS'))
        if os.getenv('BLAST_REPORT_LOG_LEVEL'):
            self.logging.level = os.getenv('BLAST_REPORT_LOG_LEVEL')

    def merge_cli_args(self, **kwargs) -> None:
        """Merge CLI arguments into configuration."""
        if kwargs.get('base_url') is not None:
            self.report.base_url = kwargs['base_url']
        if kwargs.get('databases'):
            self.search.databases = list(kwargs['databases'])
        if kwargs.get('database_dir'):
            self.retrieval.database_dir = kwargs['database_dir']
        if kwargs.get('verbose'):
            self.logging.level = 'DEBUG'
        if kwargs.get('log_file'):
            self.logging.log_to_file = True


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    locations = [
        Path.home() / '.blast_report' / 'config.json',
        Path.home() / '.config' / 'blast_report' / 'config.json',
        Path('.blast_report.json'),
        Path('blast_report.config.json')
    ]

    for path in locations:
        if path.exists():
            return path

    return Path.home() / '.blast_report' / 'config.json'


def create_example_config(path: Optional[Path] = None) -> Path:
    """Create an example configuration file."""
    if path is None:
        path = Path('blast_report.config.example.json')

    config = Config.default()

    config.report.base_url = "http://localhost:4567"
    config.search.num_threads = 4
    config.search.databases = ["Sinvicta2-2-3.cdna.subset.fasta"]
    config.retrieval.database_dir = "/path/to/blast/databases"

    config.to_file(path)
    return path
