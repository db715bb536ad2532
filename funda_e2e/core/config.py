from pydantic_settings import BaseSettings
from pydantic import Field
from pathlib import Path
from typing import Dict, Optional

from funda_e2e.core.run_mode import RunMode

PROJECT_ROOT = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    # Target site
    auth_base_url: str = Field(default="https://login.funda.nl", env="AUTH_BASE_URL")
    main_base_url: str = Field(default="https://www.funda.nl", env="MAIN_BASE_URL")

    # Data files (relative paths resolve against data_dir)
    data_dir: str = Field(default=str(PROJECT_ROOT / "data"), env="DATA_DIR")
    state_file: str = Field(default="state.json", env="STATE_FILE")
    test_data_file: str = Field(default="test-data.json", env="TEST_DATA_FILE")
    credentials_file: str = Field(default="credentials.json", env="CREDENTIALS_FILE")

    # Browser
    headless: bool = Field(default=True, env="HEADLESS")
    slow_mo: int = Field(default=50, env="SLOW_MO")
    default_timeout_ms: int = Field(default=15000, env="DEFAULT_TIMEOUT_MS")
    navigation_timeout_ms: int = Field(default=30000, env="NAVIGATION_TIMEOUT_MS")

    # CAPTCHA handling (manual solving in headed runs)
    captcha_check_interval_ms: int = Field(default=3000, env="CAPTCHA_CHECK_INTERVAL_MS")
    captcha_timeout_ms: int = Field(default=120000, env="CAPTCHA_TIMEOUT_MS")

    # Logging
    log_level: str = Field(default="INFO", env="LOG_LEVEL")
    log_file: str = Field(default="funda_e2e.log", env="LOG_FILE")

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

    def resolve_path(self, name: str) -> Path:
        """Resolve a data file name against data_dir unless it is absolute"""
        path = Path(name).expanduser()
        if path.is_absolute():
            return path
        return Path(self.data_dir).expanduser() / path

    def get_state_path(self) -> Path:
        return self.resolve_path(self.state_file)

    def get_test_data_path(self) -> Path:
        return self.resolve_path(self.test_data_file)

    def get_credentials_path(self) -> Path:
        return self.resolve_path(self.credentials_file)

    def get_run_mode(self) -> RunMode:
        """Headed runs allow a human to solve CAPTCHAs; headless runs do not"""
        return RunMode.from_headless(self.headless)

    def get_launch_options(self, overrides: Optional[Dict] = None) -> Dict:
        """
        Browser launch options for pytest-playwright.

        overrides are the options pytest-playwright built from its own command
        line flags (--headed, --slowmo); they take precedence over the settings.
        """
        launch_options = {
            "headless": self.headless,
            "slow_mo": self.slow_mo,
        }
        launch_options.update(overrides or {})
        return launch_options


# Global settings instance
settings = Settings()
