from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DATA_DIR = Path(__file__).resolve().parent / "data"


class Settings(BaseSettings):
	environment: Literal["development", "production"] = "development"
	data_dir: Path = PACKAGE_DATA_DIR
	log_level: str = "INFO"
	log_json: bool = True

	model_config = SettingsConfigDict(
		env_prefix="BANDQUOTE_",
		env_file=".env",
		env_file_encoding="utf-8",
		extra="ignore",
	)

	@property
	def use_config_cache(self) -> bool:
		# Development always re-reads the data files so edits show up immediately.
		return self.environment == "production"


def get_settings() -> Settings:
	return Settings()
