"""Configuration loader."""

import os
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

import yaml
from pydantic import ValidationError

from .models import ConfigModel

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "archivist" / "config.yaml"

TRUE_VALUES = {"1", "true", "yes", "on"}


class Config:
    """Configuration manager."""

    def __init__(
        self,
        config_path: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        """Initialize config manager."""
        self.explicit_path = config_path is not None
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH
        self.config_path = config_path
        self.environ = os.environ if environ is None else environ
        self._config: Optional[ConfigModel] = None

    @property
    def config(self) -> ConfigModel:
        """Get loaded config with environment overrides applied."""
        if self._config is None:
            if self.config_path.exists() or self.explicit_path:
                model = load_config(self.config_path)
            else:
                model = ConfigModel()
            self._config = apply_env_overrides(model, self.environ)
        return self._config

    @property
    def workspace_root(self) -> Path:
        """Get workspace root path."""
        return Path(self.config.storage.workspace_root).expanduser()

    @property
    def data_dir(self) -> Path:
        """Directory holding the store and generated artifacts."""
        return self.workspace_root / self.config.storage.data_dir

    @property
    def articles_path(self) -> Path:
        """Path of the JSON article store."""
        return self.data_dir / self.config.storage.articles_file

    @property
    def outbox_dir(self) -> Path:
        return self.data_dir / "outbox"

    @property
    def reports_dir(self) -> Path:
        return self.data_dir / "reports"

    def get_search_credentials(self) -> Tuple[Optional[str], Optional[str]]:
        """Get (api_key, engine_id), preferring environment variables."""
        search = self.config.search
        api_key = self.environ.get(search.api_key_env) or search.api_key
        engine_id = self.environ.get(search.engine_id_env) or search.engine_id
        return api_key, engine_id


def apply_env_overrides(config: ConfigModel, environ: Mapping[str, str]) -> ConfigModel:
    """Apply DISCOVERY_* environment variables on top of file config."""
    search: Dict = {}
    verification: Dict = {}
    filters: Dict = {}

    if environ.get("DISCOVERY_DATE_WINDOW"):
        search["date_window"] = environ["DISCOVERY_DATE_WINDOW"].strip()

    if environ.get("DISCOVERY_VERIFY"):
        verification["enabled"] = environ["DISCOVERY_VERIFY"].strip().lower() in TRUE_VALUES

    if "DISCOVERY_LANG" in environ:
        verification["language"] = environ["DISCOVERY_LANG"].strip().lower()

    if environ.get("DISCOVERY_BLOCKLIST"):
        extra = [h.strip().lower() for h in environ["DISCOVERY_BLOCKLIST"].split(",") if h.strip()]
        merged = list(config.filters.blocklist)
        merged.extend(h for h in extra if h not in merged)
        filters["blocklist"] = merged

    if not (search or verification or filters):
        return config

    return config.model_copy(
        update={
            "search": config.search.model_copy(update=search),
            "verification": config.verification.model_copy(update=verification),
            "filters": config.filters.model_copy(update=filters),
        }
    )


def load_config(config_path: Path) -> ConfigModel:
    """Load configuration from YAML file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path) as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            config_data = {}

        return ConfigModel(**config_data)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file: {e}")
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}")


def save_config(config: ConfigModel, config_path: Path) -> None:
    """Save configuration to YAML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        yaml.dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)
