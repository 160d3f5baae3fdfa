from typing import Optional

from dependency_injector import containers, providers

from fx_auth_reusables.authenticators.cache_aside_decorators.caching_authenticator_cache_aside_decorator import CachingAuthenticatorCacheAsideDecorator
from fx_auth_reusables.authenticators.domain.caching_authenticator_settings import CachingAuthenticatorSettings
from fx_auth_reusables.authenticators.interfaces.authenticator_interface import IAuthenticator
from fx_auth_reusables.configmaps.concretes.env_variable.environment_variables_config_map_retriever import EnvironmentVariablesConfigMapRetriever
from fx_auth_reusables.configmaps.interfaces.config_map_retriever_interface import IConfigMapRetriever
from fx_auth_reusables.environment_fetcher.concrete_dotenv.environment_fetcher import EnvironmentFetcher
from fx_auth_reusables.environment_fetcher.concrete_empty.empty_environment_fetcher import EmptyEnvironmentFetcher
from fx_auth_reusables.environment_fetcher.interfaces.environment_fetch_interface import IEnvironmentFetcher

ENVIRONMENT_SOURCE_DOTENV = "DOTENV"
ENVIRONMENT_SOURCE_PROCESS = "PROCESS"


def _hydrate_settings(
    environment_fetcher: IEnvironmentFetcher,
    config_map_retriever: IConfigMapRetriever,
) -> CachingAuthenticatorSettings:
    environment_fetcher.load_environment()
    return CachingAuthenticatorSettings.hydrate(config_map_retriever)


class CachingAuthenticatorCompositionRoot(containers.DeclarativeContainer):
    """
    IoC container for the caching authenticator.
    The underlying authenticator must be supplied by the application; the cache policy
    is hydrated from config maps (environment variables unless overridden), after the
    selected environment fetcher has run (a .env file for DOTENV, nothing for PROCESS).
    """

    config = providers.Configuration(default={"EnvironmentSource": ENVIRONMENT_SOURCE_PROCESS})

    underlying_authenticator: providers.Provider[IAuthenticator] = providers.Dependency(instance_of=IAuthenticator)

    environment_fetcher: providers.Provider[IEnvironmentFetcher] = providers.Selector(
        config.EnvironmentSource,
        DOTENV=providers.Factory(EnvironmentFetcher),
        PROCESS=providers.Factory(EmptyEnvironmentFetcher),
    )  # type: providers.Provider[IEnvironmentFetcher]

    config_map_retriever: providers.Provider[IConfigMapRetriever] = providers.Factory(
        EnvironmentVariablesConfigMapRetriever
    )  # type: providers.Provider[IConfigMapRetriever]

    caching_authenticator_settings: providers.Provider[CachingAuthenticatorSettings] = providers.Singleton(
        _hydrate_settings,
        environment_fetcher=environment_fetcher,
        config_map_retriever=config_map_retriever,
    )  # type: providers.Provider[CachingAuthenticatorSettings]

    # Singleton: every consumer must share one cache
    caching_authenticator: providers.Provider[CachingAuthenticatorCacheAsideDecorator] = providers.Singleton(
        CachingAuthenticatorCacheAsideDecorator,
        inner_item_to_decorate=underlying_authenticator,
        settings=caching_authenticator_settings,
    )  # type: providers.Provider[CachingAuthenticatorCacheAsideDecorator]


def get_container(
    underlying_authenticator: IAuthenticator,
    config_map_retriever: Optional[IConfigMapRetriever] = None,
    load_dotenv: bool = False,
) -> CachingAuthenticatorCompositionRoot:
    container: CachingAuthenticatorCompositionRoot = CachingAuthenticatorCompositionRoot()
    container.config.EnvironmentSource.from_value(
        ENVIRONMENT_SOURCE_DOTENV if load_dotenv else ENVIRONMENT_SOURCE_PROCESS
    )
    container.underlying_authenticator.override(providers.Object(underlying_authenticator))
    if config_map_retriever is not None:
        container.config_map_retriever.override(providers.Object(config_map_retriever))
    return container


def get_caching_authenticator(
    underlying_authenticator: IAuthenticator,
    config_map_retriever: Optional[IConfigMapRetriever] = None,
    load_dotenv: bool = False,
) -> CachingAuthenticatorCacheAsideDecorator:
    container: CachingAuthenticatorCompositionRoot = get_container(underlying_authenticator, config_map_retriever, load_dotenv)
    authenticator: CachingAuthenticatorCacheAsideDecorator = container.caching_authenticator()
    return authenticator
