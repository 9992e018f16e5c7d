import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from pr_autograder.models import AllowList, Rubric

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config.yml")
DEFAULT_RUBRIC_PATH = Path(__file__).parent / "rubrics" / "github_basics.yml"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    repo_names: frozenset[str] = frozenset()
    user_names: frozenset[str] = frozenset()
    gemini_api_key: str = Field(..., min_length=1)

    gemini_model: str = "models/gemini-2.5-flash"
    github_api_url: str = "https://api.github.com"
    readme_path: str = "README.md"
    review_banner: str = "### DSI Autograder"
    rubric_file: Path = DEFAULT_RUBRIC_PATH
    # disabled by default; never point it at the directory holding config.yml
    static_dir: Optional[Path] = None

    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    @property
    def allow_list(self) -> AllowList:
        return AllowList(owners=self.user_names, repos=self.repo_names)


def load_settings(config_path: Path = DEFAULT_CONFIG_PATH, **overrides) -> Settings:
    """
    Build settings from a YAML file, falling back to environment variables
    and ``.env`` for anything the file leaves out.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        yaml.YAMLError: If the config file is invalid YAML.
        pydantic.ValidationError: If a required value is missing or invalid.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config_data = yaml.safe_load(f) or {}

    if not isinstance(config_data, dict):
        raise ValueError(f"Configuration file must contain a mapping: {config_path}")

    # relative rubric paths are resolved against the config file location
    rubric_file = config_data.get("rubric_file")
    if rubric_file and not Path(rubric_file).is_absolute():
        config_data["rubric_file"] = config_path.parent / rubric_file

    config_data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**config_data)


def load_rubric(rubric_path: Path) -> Rubric:
    with open(rubric_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    rubric = Rubric(**data)
    logger.info("Loaded rubric %s v%d from %s", rubric.name, rubric.version, rubric_path)
    return rubric
