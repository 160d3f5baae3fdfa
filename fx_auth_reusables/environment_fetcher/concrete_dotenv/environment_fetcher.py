import logging

from dotenv import load_dotenv, find_dotenv

from fx_auth_reusables.environment_fetcher.interfaces.environment_fetch_interface import IEnvironmentFetcher


class EnvironmentFetcher (IEnvironmentFetcher):

    def load_environment(self, dotenv_path: str | None = None, override: bool = True, current_working_directory: bool = True) -> bool:
        """Load environment variables from a .env file.

        By default this will search for a .env file starting from the current working
        directory and walk up parent directories. override=True ensures variables in
        the file are written into os.environ (useful for tests).

        Returns:
            True if at least one variable was loaded
        """

        logging.debug("EnvironmentFetcher.load_environment called.  Looking for .env file.")

        path = dotenv_path or find_dotenv(usecwd=current_working_directory)
        if not path:
            logging.info("No .env file found to load")
            return False

        loaded = load_dotenv(path, override=override)
        if loaded:
            logging.debug("Environment variables loaded from .env file")
        else:
            logging.info("Failed to load .env file or no variables were set")
        return loaded
