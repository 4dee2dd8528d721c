"""Configuration constants."""

# Maximum configuration file size (1 MB)
MAX_CONFIG_SIZE_BYTES: int = 1 * 1024 * 1024

# Prefix of environment variables overriding configuration values
DEFAULT_ENV_PREFIX: str = "RELRELOAD_"
