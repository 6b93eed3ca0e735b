from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DATA_DIR = Path(__file__).resolve().parent / "data"


class EngineSettings(BaseSettings):
  model_config = SettingsConfigDict(env_prefix="FILMCARBON_", env_file=".env", extra="ignore")

  factors_dir: Path = PACKAGE_DATA_DIR
  default_mpg: float = 20.0
  default_days_occupied: int = 365
  global_region: str = "World"


@lru_cache(maxsize=1)
def get_settings() -> EngineSettings:
  return EngineSettings()
