"""loguru configuration for the git-home command line."""

import sys

from loguru import logger

from git_home.config import GitHomeConfig


def setup_logging(config: GitHomeConfig) -> None:
    """Setup loguru logging for one invocation.

    Configures:
    - Console output: GIT_HOME_LOG_LEVEL (WARNING by default) on stderr
    - File output: DEBUG+ if GIT_HOME_LOG_FILE is set
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level=config.log_level,
        format="<level>{level}</level>: {message}",
        colorize=config.color_enabled,
    )

    if config.log_file is not None:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            config.log_file,
            level="DEBUG",
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}",
            rotation="1 MB",
            retention=3,
        )
        logger.debug(f"File logging enabled: {config.log_file}")
