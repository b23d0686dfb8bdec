"""Package initialization for envconfig."""

from .environment import (
    ENV_PATH,
    EnvironmentConfig,
    build_config,
    config,
    get_all_env,
    get_env,
    load_env_file,
    load_environment,
    production_advisories,
    validate_production_readiness,
)

__all__ = [
    'ENV_PATH',
    'EnvironmentConfig',
    'build_config',
    'config',
    'get_all_env',
    'get_env',
    'load_env_file',
    'load_environment',
    'production_advisories',
    'validate_production_readiness',
]
