import logging
import time
from typing import Dict, Optional

from fx_auth_reusables.authenticators import IAuthenticator, PrincipalImpl, CachingAuthenticatorCacheAsideDecorator
from fx_auth_reusables.authenticators.factories import get_caching_authenticator

logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(message)s")


class SlowDictionaryAuthenticator(IAuthenticator[str, PrincipalImpl]):
    """Stands in for an expensive identity provider call."""

    def __init__(self, tokens_to_names: Dict[str, str]):
        self._tokens_to_names = tokens_to_names

    def authenticate(self, credentials: str) -> Optional[PrincipalImpl]:
        time.sleep(0.5)
        name: Optional[str] = self._tokens_to_names.get(credentials)
        return None if name is None else PrincipalImpl(name)


def main() -> None:
    # load_dotenv: AUTHENTICATION_CACHE_POLICY etc. may come from a .env file
    underlying: IAuthenticator[str, PrincipalImpl] = SlowDictionaryAuthenticator({"token-abc": "alice", "token-def": "bob"})
    authenticator: CachingAuthenticatorCacheAsideDecorator = get_caching_authenticator(underlying, load_dotenv=True)

    for token in ("token-abc", "token-abc", "token-def", "not-a-token", "not-a-token"):
        started: float = time.perf_counter()
        principal: Optional[PrincipalImpl] = authenticator.authenticate(token)
        logging.info("Authenticated as %s in %.3fs", principal, time.perf_counter() - started)

    logging.info("Cache size=%s stats=%s", authenticator.size(), authenticator.stats())

    authenticator.invalidate_all(lambda credentials: credentials.endswith("abc"))
    logging.info("Cache size after predicate invalidation=%s", authenticator.size())


if __name__ == "__main__":
    main()
