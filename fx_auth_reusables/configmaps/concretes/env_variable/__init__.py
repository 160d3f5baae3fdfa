"""
Configuration map retrieval concrete implementations.
"""

from fx_auth_reusables.configmaps.concretes.env_variable.environment_variables_config_map_retriever import EnvironmentVariablesConfigMapRetriever

__all__ = [
    "EnvironmentVariablesConfigMapRetriever"
]
