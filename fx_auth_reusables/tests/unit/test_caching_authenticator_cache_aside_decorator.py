"""
Unit tests for CachingAuthenticatorCacheAsideDecorator
"""

import itertools

import pytest
from unittest.mock import Mock, call

from fx_auth_reusables.authenticators import (
    AuthenticationException,
    CachingAuthenticatorCacheAsideDecorator,
    CachingAuthenticatorSettings,
    IAuthenticator,
    PrincipalImpl,
)


class TestCachingAuthenticatorCacheAsideDecorator:
    """Test suite for the caching authenticator decorator."""

    @pytest.fixture
    def underlying(self):
        """Create a mock inner authenticator that always succeeds."""
        mock = Mock(spec=IAuthenticator)
        mock.authenticate.return_value = PrincipalImpl("principal")
        return mock

    @pytest.fixture
    def cached(self, underlying):
        """Create a decorator holding at most one principal."""
        return CachingAuthenticatorCacheAsideDecorator.from_policy(underlying, "maximumSize=1")

    def test_caches_the_first_returned_principal(self, cached, underlying):
        """Test that the second call is answered from the cache."""
        assert cached.authenticate("credentials") == PrincipalImpl("principal")
        assert cached.authenticate("credentials") == PrincipalImpl("principal")

        underlying.authenticate.assert_called_once_with("credentials")

    def test_respects_the_cache_configuration(self, cached, underlying):
        """Test that with maximumSize=1 the second credential evicts the first."""
        counter = itertools.count(1)
        underlying.authenticate.side_effect = lambda credentials: PrincipalImpl(f"principal{next(counter)}")

        first = cached.authenticate("credentials1")
        second = cached.authenticate("credentials2")
        third = cached.authenticate("credentials1")

        assert first is not None and second is not None and third is not None
        assert second is not first
        assert third is not second
        assert third == PrincipalImpl("principal3")
        assert underlying.authenticate.call_args_list == [
            call("credentials1"),
            call("credentials2"),
            call("credentials1"),
        ]
        assert cached.size() == 1
        assert cached.stats().eviction_count == 2

    def test_invalidates_single_credentials(self, cached, underlying):
        cached.authenticate("credentials")
        cached.invalidate("credentials")
        cached.authenticate("credentials")

        assert underlying.authenticate.call_count == 2

    def test_invalidate_of_unknown_credentials_is_a_no_op(self, cached, underlying):
        cached.authenticate("credentials")
        cached.invalidate("other")

        assert cached.size() == 1
        underlying.authenticate.assert_called_once_with("credentials")

    def test_invalidates_sets_of_credentials(self, cached, underlying):
        cached.authenticate("credentials")
        cached.invalidate_all({"credentials"})
        cached.authenticate("credentials")

        assert underlying.authenticate.call_count == 2

    def test_invalidates_credentials_matching_given_predicate(self, cached, underlying):
        cached.authenticate("credentials")
        cached.invalidate_all("credentials".__eq__)
        cached.authenticate("credentials")

        assert underlying.authenticate.call_count == 2

    def test_invalidates_all_credentials(self, cached, underlying):
        cached.authenticate("credentials")
        cached.invalidate_all()
        cached.authenticate("credentials")

        assert underlying.authenticate.call_count == 2

    def test_invalidate_all_rejects_a_single_string(self, cached):
        with pytest.raises(TypeError):
            cached.invalidate_all("credentials")

    def test_calculates_the_size_of_the_cache(self, cached):
        cached.authenticate("credentials1")
        assert cached.size() == 1

    def test_calculates_cache_stats(self, cached):
        cached.authenticate("credentials1")

        assert cached.stats().load_count == 1
        assert cached.size() == 1

    def test_hit_does_not_increment_load_count(self, cached):
        cached.authenticate("credentials1")
        cached.authenticate("credentials1")

        stats = cached.stats()
        assert stats.load_count == 1
        assert stats.hit_count == 1
        assert stats.miss_count == 1

    def test_should_not_cache_absent_principals(self, cached, underlying):
        underlying.authenticate.return_value = None

        assert cached.authenticate("credentials") is None
        underlying.authenticate.assert_called_once_with("credentials")
        assert cached.size() == 0

        assert cached.authenticate("credentials") is None
        assert underlying.authenticate.call_count == 2
        assert cached.stats().load_failure_count == 2

    def test_should_propagate_authentication_exception(self, cached, underlying):
        error = AuthenticationException("Auth failed")
        underlying.authenticate.side_effect = error

        with pytest.raises(AuthenticationException) as exc_info:
            cached.authenticate("credentials")

        assert exc_info.value is error
        assert cached.size() == 0

    def test_should_propagate_runtime_exception(self, cached, underlying):
        error = TypeError()
        underlying.authenticate.side_effect = error

        with pytest.raises(TypeError) as exc_info:
            cached.authenticate("credentials")

        assert exc_info.value is error
        assert cached.size() == 0

    def test_failures_are_not_sticky(self, cached, underlying):
        """Test that a failed load is retried and a later success is cached."""
        underlying.authenticate.side_effect = [AuthenticationException("provider down"), PrincipalImpl("principal")]

        with pytest.raises(AuthenticationException):
            cached.authenticate("credentials")

        assert cached.authenticate("credentials") == PrincipalImpl("principal")
        assert cached.authenticate("credentials") == PrincipalImpl("principal")
        assert underlying.authenticate.call_count == 2
        assert cached.stats().load_count == 2

    def test_invalidation_removes_only_the_requested_credentials(self, underlying):
        cached = CachingAuthenticatorCacheAsideDecorator(underlying, CachingAuthenticatorSettings(maximum_size=10))
        for credentials in ("c1", "c2", "c3"):
            cached.authenticate(credentials)

        cached.invalidate("c1")
        assert set(cached.cached_credentials()) == {"c2", "c3"}

        cached.invalidate_all(["c2", "not-cached"])
        assert set(cached.cached_credentials()) == {"c3"}

        cached.authenticate("c1")
        cached.authenticate("c4")
        cached.invalidate_all(lambda credentials: credentials in ("c1", "c4"))
        assert set(cached.cached_credentials()) == {"c3"}

        cached.invalidate_all()
        assert cached.size() == 0

    def test_unbounded_without_settings(self, underlying):
        cached = CachingAuthenticatorCacheAsideDecorator(underlying)
        for index in range(50):
            cached.authenticate(f"credentials{index}")

        assert cached.size() == 50
        assert cached.stats().eviction_count == 0

    def test_expire_after_access_uses_injected_timer(self, underlying, fake_timer):
        cached = CachingAuthenticatorCacheAsideDecorator(
            underlying, CachingAuthenticatorSettings(expire_after_access=10), timer=fake_timer
        )
        cached.authenticate("credentials")
        fake_timer.advance(9)
        cached.authenticate("credentials")
        fake_timer.advance(9)
        cached.authenticate("credentials")

        assert underlying.authenticate.call_count == 1

        fake_timer.advance(10)
        cached.authenticate("credentials")

        assert underlying.authenticate.call_count == 2
