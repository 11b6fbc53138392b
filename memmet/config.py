"""
memmet configuration.

Settings come from the environment (MEMMET_*). The user's persisted
defaults live in a single JSON (or YAML) record managed by ConfigStore.
"""

import json
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigIOFailure, ConfigParseFailure
from .ffmpeg_wrapper import DEFAULT_SILENCE_SOURCE
from .logging_conf import logger
from .models import SMALLEST, DimensionPolicy, FileType

DEFAULT_VIDEO_CODEC = "libx265"


def default_config_dir() -> Path:
    base = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(base) / "memmet"


class Settings(BaseSettings):
    config_dir: Path = Field(default_factory=default_config_dir)
    config_file: str = "config"
    ffmpeg_path: str = "ffmpeg"
    ffprobe_path: str = "ffprobe"
    video_codec: str = DEFAULT_VIDEO_CODEC
    silence_source: str = DEFAULT_SILENCE_SOURCE

    model_config = SettingsConfigDict(env_prefix="MEMMET_")

    @property
    def config_path(self) -> Path:
        return self.config_dir / self.config_file


class ConfigRecord(BaseModel):
    """User defaults persisted between runs."""

    out_dir: Optional[Path] = None
    dimensions: Optional[DimensionPolicy] = None
    no_audio: Optional[bool] = None
    overwrite: Optional[bool] = None
    file_type: Optional[FileType] = None

    # Keys written by other memmet versions are dropped
    model_config = ConfigDict(extra="ignore")


def _is_yaml(path: Path) -> bool:
    """Check if file is YAML based on extension."""
    return path.suffix in ('.yaml', '.yml')


class ConfigStore:
    """
    Load and persist the ConfigRecord.

    open() creates the directory and file when needed; an empty file reads
    as all defaults. set() merges only the fields given and rewrites the
    whole record. There is no locking, the last writer wins.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self.record = ConfigRecord()

    def open(self) -> ConfigRecord:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigIOFailure(f"Cannot create config directory {self.path.parent}: {e}") from e

        try:
            # a+ creates the file without truncating it
            with open(self.path, "a+", encoding="utf-8") as f:
                f.seek(0)
                content = f.read()
        except UnicodeDecodeError as e:
            raise ConfigParseFailure(f"Config file {self.path} is not valid UTF-8: {e}") from e
        except OSError as e:
            raise ConfigIOFailure(f"Cannot open config file {self.path}: {e}") from e

        self.record = self._parse(content)
        return self.record

    def _parse(self, content: str) -> ConfigRecord:
        if not content.strip():
            return ConfigRecord()

        try:
            if _is_yaml(self.path):
                loaded = yaml.safe_load(content)
            else:
                loaded = json.loads(content)
        except (yaml.YAMLError, ValueError) as e:
            raise ConfigParseFailure(f"Config file {self.path} is malformed: {e}") from e

        if loaded is None:
            return ConfigRecord()
        if not isinstance(loaded, dict):
            raise ConfigParseFailure(f"Config file {self.path} must contain an object")

        try:
            return ConfigRecord.model_validate(loaded)
        except ValidationError as e:
            raise ConfigParseFailure(f"Config file {self.path} is invalid: {e}") from e

    def set(self, **updates) -> ConfigRecord:
        """Merge the non-None updates into the record and write it back."""
        changes = {key: value for key, value in updates.items() if value is not None}
        unknown = set(changes) - set(ConfigRecord.model_fields)
        if unknown:
            raise ValueError(f"Unknown config fields: {', '.join(sorted(unknown))}")

        if changes.get("dimensions") == SMALLEST:
            logger.warning('Saving "smallest" dimensions, which runs do not support yet')

        merged = self.record.model_dump()
        merged.update(changes)
        self.record = ConfigRecord.model_validate(merged)
        self.save()
        return self.record

    def save(self):
        data = self.record.model_dump(mode="json", exclude_none=True)
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                if _is_yaml(self.path):
                    yaml.dump(data, f, default_flow_style=False, sort_keys=False)
                else:
                    json.dump(data, f, indent=2)
        except OSError as e:
            raise ConfigIOFailure(f"Cannot write config file {self.path}: {e}") from e
