import logging
import os
from typing import Optional

from fx_auth_reusables.configmaps.base.config_map_validator import ConfigMapValidator
from fx_auth_reusables.configmaps.interfaces.config_map_retriever_interface import IConfigMapRetriever, ConfigMapDto


class EnvironmentVariablesConfigMapRetriever(IConfigMapRetriever):
    """
    Implementation of IConfigMapRetriever that reads configuration from environment variables.

    The config map name is the environment variable name.  Blank values are treated as not set.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger: logging.Logger = logger or logging.getLogger(self.__class__.__name__)

    def retrieve_config_map(self, configuration_item_name: str) -> Optional[ConfigMapDto]:
        self._logger.debug("Attempting retrieval for config map: %s", configuration_item_name)
        value: Optional[str] = os.environ.get(configuration_item_name)

        if value is None or not value.strip():
            self._logger.debug("Config map not set in environment: %s", configuration_item_name)
            return None

        ConfigMapValidator.check_for_name_and_value_are_same(configuration_item_name, value)
        return ConfigMapDto(name=configuration_item_name, value=value.strip())

    def retrieve_mandatory_config_map_value(self, configuration_item_name: str) -> str:
        """
        Retrieves a mandatory config value from environment variables.

        Raises:
            KeyError if the environment variable is not found
        """
        dto: Optional[ConfigMapDto] = self.retrieve_config_map(configuration_item_name)
        if dto is None:
            raise KeyError(f"Mandatory configuration '{configuration_item_name}' not found in environment variables")
        return dto.value

    def retrieve_optional_config_map_value(self, configuration_item_name: str) -> Optional[str]:
        dto: Optional[ConfigMapDto] = self.retrieve_config_map(configuration_item_name)
        return None if dto is None else dto.value
