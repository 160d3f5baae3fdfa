import logging

from fx_auth_reusables.environment_fetcher.interfaces.environment_fetch_interface import IEnvironmentFetcher


class EmptyEnvironmentFetcher (IEnvironmentFetcher):

    def load_environment(self, dotenv_path: str | None = None, override: bool = True, current_working_directory: bool = True) -> bool:
        """ an "empty" implementation.
        this will be used to satisfy IoC/DI needs when environment variables do NOT come from .env file.
        """
        logging.info("EmptyEnvironmentFetcher.load_environment called - no action taken.")
        return False
