class ConfigMapValidator:
    """
    Rejects a config map whose non-blank value equals its own name (case-insensitive),
    which usually means a placeholder was never replaced.
    """
    ERROR_MSG_CONFIG_MAP_NAME_AND_VALUE_ARE_THE_SAME = (
        'The config-map-name and config-map-value are the same.  (Is this is placeholder situation?)  (ConfigMapName="{0}")'
    )

    @staticmethod
    def check_for_name_and_value_are_same(config_map_name: str, config_map_value: str) -> None:
        if config_map_value is not None and config_map_value.strip() and \
           config_map_name.lower() == config_map_value.strip().lower():
            raise ValueError(
                ConfigMapValidator.ERROR_MSG_CONFIG_MAP_NAME_AND_VALUE_ARE_THE_SAME.format(config_map_name)
            )
