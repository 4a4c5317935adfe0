import json
import os
from typing import Any, Dict, Optional

from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from .events import Signal


# --- Settings Models ---
class GeneralSettings(BaseModel):
    debug_mode: bool = True
    log_dir: str = "logs"
    log_to_file: bool = False


class QuoteSettings(BaseModel):
    product_type: str = "rollerBlind"
    # JSON rate table; None uses the built-in catalog
    catalog_path: Optional[str] = None


class AppConfig(BaseModel):
    general: GeneralSettings = Field(default_factory=GeneralSettings)
    quote: QuoteSettings = Field(default_factory=QuoteSettings)


# --- Manager ---
class ConfigManager:
    """
    Settings of one quote session, validated by pydantic.

    JSON files are read and written back on every update; TOML files are
    treated as hand-maintained and only read. Listeners on `on_changed`
    receive (section, key, value) after a successful update.
    """

    def __init__(self, filepath: str = "config.json"):
        self.filepath = filepath
        self.on_changed = Signal("ConfigChanged")
        # Set when the file on disk could not be loaded; saved once before the first overwrite
        self._broken_contents: Optional[bytes] = None
        self._data = self._load()

    @property
    def data(self) -> AppConfig:
        return self._data

    @property
    def is_read_only(self) -> bool:
        return self.filepath.endswith(".toml")

    def get(self, section: str, key: str) -> Any:
        return getattr(self._section(section), key)

    def update(self, section: str, key: str, value: Any) -> None:
        """
        Change one setting.

        Raises:
            ValueError: unknown section/key, or a value the model rejects
        """
        current = self._section(section)
        if key not in type(current).model_fields:
            raise ValueError(f"Invalid key: {key} in section {section}")

        # ValidationError is a ValueError
        updated = current.model_validate({**current.model_dump(), key: value})
        setattr(self._data, section, updated)
        self._save()
        self.on_changed.emit(section, key, getattr(updated, key))

    def _section(self, section: str) -> BaseModel:
        if section not in AppConfig.model_fields:
            raise ValueError(f"Invalid section: {section}")
        return getattr(self._data, section)

    def _load(self) -> AppConfig:
        if not os.path.isfile(self.filepath):
            self._data = AppConfig()
            self._save()
            return self._data

        try:
            return AppConfig.model_validate(self._read_raw())
        except (OSError, ValueError, ValidationError) as e:
            logger.error(f"Failed to load config from {self.filepath}: {e}")
            self._broken_contents = self._read_bytes()
            return AppConfig()

    def _read_raw(self) -> Dict[str, Any]:
        if self.is_read_only:
            import tomllib
            with open(self.filepath, "rb") as f:
                return tomllib.load(f)
        with open(self.filepath, "r", encoding="utf-8") as f:
            return json.load(f)

    def _read_bytes(self) -> Optional[bytes]:
        try:
            with open(self.filepath, "rb") as f:
                return f.read()
        except OSError:
            return None

    @property
    def backup_path(self) -> str:
        return self.filepath + ".broken"

    def _save(self) -> None:
        if self.is_read_only:
            return
        try:
            if self._broken_contents is not None:
                with open(self.backup_path, "wb") as f:
                    f.write(self._broken_contents)
                logger.warning(f"Unreadable config kept as {self.backup_path}")
                self._broken_contents = None
            dirname = os.path.dirname(self.filepath)
            if dirname:
                os.makedirs(dirname, exist_ok=True)
            with open(self.filepath, "w", encoding="utf-8") as f:
                json.dump(self._data.model_dump(), f, indent=4)
        except OSError as e:
            logger.error(f"Failed to save config to {self.filepath}: {e}")
