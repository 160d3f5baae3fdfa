"""Constants for authenticators module.

This module contains all constants related to the caching authenticator,
its cache policy and the configuration keys it is hydrated from.
"""

# Cache policy keys (policy string form, e.g. "maximumSize=1000,expireAfterAccess=10m")
POLICY_KEY_MAXIMUM_SIZE = "maximumSize"
POLICY_KEY_EXPIRE_AFTER_WRITE = "expireAfterWrite"
POLICY_KEY_EXPIRE_AFTER_ACCESS = "expireAfterAccess"

POLICY_ENTRY_SEPARATOR = ","
POLICY_KEY_VALUE_SEPARATOR = "="

# Duration suffixes accepted in policy strings, mapped to seconds
DURATION_UNIT_SECONDS = {
    "d": 86400,
    "h": 3600,
    "m": 60,
    "s": 1,
}

# Opinionated default when nothing is configured
DEFAULT_MAXIMUM_SIZE = 10000
DEFAULT_CACHE_POLICY = f"{POLICY_KEY_MAXIMUM_SIZE}={DEFAULT_MAXIMUM_SIZE}"

# Config map names for hydrating the cache policy
CONFIG_MAP_AUTHENTICATION_CACHE_POLICY = "AUTHENTICATION_CACHE_POLICY"
CONFIG_MAP_AUTHENTICATION_CACHE_MAXIMUM_SIZE = "AUTHENTICATION_CACHE_MAXIMUM_SIZE"
CONFIG_MAP_AUTHENTICATION_CACHE_EXPIRE_AFTER_WRITE = "AUTHENTICATION_CACHE_EXPIRE_AFTER_WRITE"
CONFIG_MAP_AUTHENTICATION_CACHE_EXPIRE_AFTER_ACCESS = "AUTHENTICATION_CACHE_EXPIRE_AFTER_ACCESS"
