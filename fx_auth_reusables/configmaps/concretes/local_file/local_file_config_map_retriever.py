import logging
import re
import threading
from pathlib import Path
from typing import Dict, List, Optional, Pattern, Sequence

from fx_auth_reusables.configmaps.base.config_map_validator import ConfigMapValidator
from fx_auth_reusables.configmaps.interfaces.config_map_retriever_interface import (
    IConfigMapRetriever,
    ConfigMapDto,
)


class LocalFileConfigMapRetriever(IConfigMapRetriever):
    """
    Reads config maps from local key=value property files, e.g. a developer's
    "authentication.configmaps.properties" holding AUTHENTICATION_CACHE_POLICY.

    Files are merged in order, so a later file overrides an earlier one.  The merged
    map is read once and kept (lazy_load=True) or re-read on every lookup.
    """

    DEFAULT_CONFIG_MAP_NAME_REGEX = r"^[A-Za-z0-9_.\-]+$"
    COMMENT_PREFIXES = ("#", "!")

    def __init__(
        self,
        properties_file_names: Sequence[str],
        *,
        base_directory: Optional[Path] = None,
        config_map_name_regex: str = DEFAULT_CONFIG_MAP_NAME_REGEX,
        encoding: str = "utf-8",
        logger: Optional[logging.Logger] = None,
        lazy_load: bool = True,
    ) -> None:
        if not properties_file_names:
            raise ValueError("At least one properties file name is required")
        blank_names: List[str] = [str(name) for name in properties_file_names if not name or not str(name).strip()]
        if blank_names:
            raise ValueError("Properties file names must not be blank")

        self._paths: List[Path] = [self._to_path(name, base_directory) for name in properties_file_names]
        self._name_pattern: Pattern[str] = re.compile(config_map_name_regex)
        self._encoding: str = encoding
        self._logger: logging.Logger = logger or logging.getLogger(self.__class__.__name__)
        self._lazy_load: bool = lazy_load
        self._merged: Optional[Dict[str, str]] = None
        self._merge_lock: threading.Lock = threading.Lock()

    def retrieve_config_map(self, configuration_item_name: str) -> Optional[ConfigMapDto]:
        if not self._name_pattern.match(configuration_item_name):
            raise ValueError(
                f'Config map name "{configuration_item_name}" does not match "{self._name_pattern.pattern}"'
            )

        value: str = self._properties().get(configuration_item_name, "")
        ConfigMapValidator.check_for_name_and_value_are_same(configuration_item_name, value)
        if not value.strip():
            self._logger.debug("Config map %s not present in %s", configuration_item_name, self._paths)
            return None
        return ConfigMapDto(name=configuration_item_name, value=value)

    def retrieve_mandatory_config_map_value(self, configuration_item_name: str) -> str:
        dto: Optional[ConfigMapDto] = self.retrieve_config_map(configuration_item_name)
        if dto is None:
            raise ValueError(f'Missing mandatory config map "{configuration_item_name}"')
        return dto.value

    def retrieve_optional_config_map_value(self, configuration_item_name: str) -> Optional[str]:
        dto: Optional[ConfigMapDto] = self.retrieve_config_map(configuration_item_name)
        return None if dto is None else dto.value

    def _properties(self) -> Dict[str, str]:
        if not self._lazy_load:
            return self._read_all()
        merged: Optional[Dict[str, str]] = self._merged
        if merged is None:
            with self._merge_lock:
                if self._merged is None:
                    self._merged = self._read_all()
                merged = self._merged
        return merged

    def _read_all(self) -> Dict[str, str]:
        merged: Dict[str, str] = {}
        for path in self._paths:
            if not path.is_file():
                raise FileNotFoundError(f'Properties file "{path}" not found')
            try:
                merged.update(self._parse(path.read_text(encoding=self._encoding)))
            except OSError as ex:
                self._logger.error("Could not read properties file %s: %s", path, ex)
                raise
        return merged

    @classmethod
    def _parse(cls, text: str) -> Dict[str, str]:
        properties: Dict[str, str] = {}
        for line in text.splitlines():
            stripped: str = line.strip()
            if not stripped or stripped.startswith(cls.COMMENT_PREFIXES) or "=" not in stripped:
                continue
            key, value = stripped.split("=", 1)
            properties[key.strip()] = value.strip()
        return properties

    @staticmethod
    def _to_path(file_name: str, base_directory: Optional[Path]) -> Path:
        path: Path = Path(file_name)
        if not path.is_absolute() and base_directory is not None:
            path = base_directory / path
        return path
