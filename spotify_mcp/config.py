import os
import logging
from dotenv import load_dotenv

from spotify_mcp.spotify.error_handling import RetryPolicy

load_dotenv()

logger = logging.getLogger(__name__)


class Config:
    """Base configuration."""
    SPOTIFY_CLIENT_ID = os.getenv('SPOTIFY_CLIENT_ID')
    SPOTIFY_CLIENT_SECRET = os.getenv('SPOTIFY_CLIENT_SECRET')
    SPOTIFY_REDIRECT_URI = os.getenv('SPOTIFY_REDIRECT_URI', 'http://localhost:3000/callback')
    SPOTIFY_REFRESH_TOKEN = os.getenv('SPOTIFY_REFRESH_TOKEN')

    # Retry settings (delays in seconds)
    MAX_RETRIES = int(os.getenv('SPOTIFY_MAX_RETRIES', 3))
    INITIAL_RETRY_DELAY = float(os.getenv('SPOTIFY_INITIAL_RETRY_DELAY', 1.0))
    MAX_RETRY_DELAY = float(os.getenv('SPOTIFY_MAX_RETRY_DELAY', 10.0))
    BACKOFF_MULTIPLIER = float(os.getenv('SPOTIFY_BACKOFF_MULTIPLIER', 2.0))

    # Application settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    DEBUG = False
    TESTING = False


class ProductionConfig(Config):
    """Production configuration."""
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'WARNING')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    LOG_LEVEL = 'DEBUG'


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    SPOTIFY_CLIENT_ID = 'test_client_id'
    SPOTIFY_CLIENT_SECRET = 'test_client_secret'
    SPOTIFY_REDIRECT_URI = 'http://localhost:3000/callback'
    SPOTIFY_REFRESH_TOKEN = 'test_refresh_token'
    INITIAL_RETRY_DELAY = 0.01
    MAX_RETRY_DELAY = 0.1


# Dictionary for easy config selection
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': ProductionConfig
}

REQUIRED_ENV_VARS = [
    'SPOTIFY_CLIENT_ID',
    'SPOTIFY_CLIENT_SECRET',
    'SPOTIFY_REDIRECT_URI',
]


def get_config(config_name=None):
    """Look up a config class by name, falling back to the default."""
    if config_name is None:
        config_name = os.getenv('SPOTIFY_MCP_ENV', 'default')
    return config.get(config_name, config['default'])


def validate_required_env_vars(config_class=None):
    """
    Check that the Spotify app credentials are configured.

    A missing refresh token only produces a warning: the authorization
    flow can still be completed with ``spotify-mcp authorize``.

    Raises:
        ValueError: Naming every missing variable.
    """
    config_class = config_class or Config
    missing = [
        name for name in REQUIRED_ENV_VARS
        if not getattr(config_class, name, None)
    ]
    if missing:
        raise ValueError(
            f"Missing required environment variables: {', '.join(missing)}. "
            "Please set them in the .env file."
        )

    if not getattr(config_class, 'SPOTIFY_REFRESH_TOKEN', None):
        logger.warning(
            "SPOTIFY_REFRESH_TOKEN not set. You will need to complete "
            "the OAuth flow to use the server."
        )


def get_retry_policy(config_class=None) -> RetryPolicy:
    """Build the RetryPolicy described by a config class."""
    config_class = config_class or Config
    return RetryPolicy(
        max_retries=config_class.MAX_RETRIES,
        initial_delay=config_class.INITIAL_RETRY_DELAY,
        max_delay=config_class.MAX_RETRY_DELAY,
        backoff_multiplier=config_class.BACKOFF_MULTIPLIER,
    )
