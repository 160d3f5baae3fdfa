"""
Configuration map retrieval concrete implementations.
"""

from fx_auth_reusables.configmaps.concretes.local_file.local_file_config_map_retriever import LocalFileConfigMapRetriever

__all__ = [
    "LocalFileConfigMapRetriever"
]
