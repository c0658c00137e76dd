"""Core domain types and logic."""

from .config import Config, ConfigError, load_config, load_config_or_default
from .digest import Digest, DigestParseError, digest_from_repo_digest, parse_digest
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # config
    "Config",
    "ConfigError",
    "load_config",
    "load_config_or_default",
    # digest
    "Digest",
    "DigestParseError",
    "digest_from_repo_digest",
    "parse_digest",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]
