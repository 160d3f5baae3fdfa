"""
Configuration map retrieval module.

Provides interfaces and implementations for retrieving configuration values
(such as the authentication cache policy) from environment variables or local property files.
"""

from fx_auth_reusables.configmaps.concretes.env_variable import EnvironmentVariablesConfigMapRetriever
from fx_auth_reusables.configmaps.concretes.local_file import LocalFileConfigMapRetriever
from .interfaces.config_map_retriever_interface import ConfigMapDto, IConfigMapRetriever

__all__ = [
    "ConfigMapDto",
    "IConfigMapRetriever",
    "EnvironmentVariablesConfigMapRetriever",
    "LocalFileConfigMapRetriever"
]
