"""
Configuration settings for the maintenance dashboard core.
Load configuration from environment variables or a .env file.
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
env_file = Path(__file__).parent.parent.parent / '.env'
if env_file.exists():
    load_dotenv(env_file)


class Settings:
    """Application settings loaded from environment variables."""

    # Project paths
    PROJECT_ROOT = Path(__file__).parent.parent.parent
    DATA_DIR = Path(os.getenv('WINDFARM_DATA_DIR', str(PROJECT_ROOT / 'data')))
    STATE_DIR = Path(os.getenv('WINDFARM_STATE_DIR', str(DATA_DIR / 'state')))
    OUTPUT_DATA_DIR = DATA_DIR / 'output'
    FILTERS_STATE_FILE = os.getenv('WINDFARM_FILTERS_STATE_FILE', 'dashboard_state.json')

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('WINDFARM_LOG_DIR', '')

    # ============================================================================
    # Aggregation defaults
    # ============================================================================
    DEFAULT_TREND_DAYS = int(os.getenv('WINDFARM_TREND_DAYS', '30'))
    DEFAULT_BACKLOG_DAYS = int(os.getenv('WINDFARM_BACKLOG_DAYS', '90'))
    DEFAULT_CHANGE_WINDOW_HOURS = int(os.getenv('WINDFARM_CHANGE_WINDOW_HOURS', '24'))

    # ============================================================================
    # Recommendation rules
    # ============================================================================
    CASES_PER_TURBINE_THRESHOLD = float(os.getenv('WINDFARM_CASES_PER_TURBINE_THRESHOLD', '3'))

    @classmethod
    def get_state_path(cls) -> Path:
        """Full path of the persisted dashboard state file."""
        return cls.STATE_DIR / cls.FILTERS_STATE_FILE

    @classmethod
    def validate_required_settings(cls) -> list[str]:
        """
        Validate that configured values are usable.
        Returns list of problems found.
        """
        problems = []

        if cls.LOG_LEVEL.upper() not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            problems.append(f'LOG_LEVEL: unknown level {cls.LOG_LEVEL!r}')
        if cls.DEFAULT_BACKLOG_DAYS <= 0:
            problems.append('WINDFARM_BACKLOG_DAYS must be positive')
        if cls.DEFAULT_TREND_DAYS <= 0:
            problems.append('WINDFARM_TREND_DAYS must be positive')
        if cls.CASES_PER_TURBINE_THRESHOLD <= 0:
            problems.append('WINDFARM_CASES_PER_TURBINE_THRESHOLD must be positive')

        return problems


# Create settings instance
settings = Settings()
