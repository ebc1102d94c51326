"""
Codec configuration.

Values come from the environment once at import:

  PKX_STRICT_SIZE   '1'/'true'/'yes'/'on' makes new_or_default() raise
                    RecordSizeError instead of returning an empty record
  PKX_LOG_LEVEL     level name applied to the 'pkx' logger (e.g. DEBUG)
"""

import os
import logging
from typing import Optional

_TRUTHY = ('1', 'true', 'yes', 'on')


class CodecConfig:
    """Process-wide codec settings."""

    STRICT_SIZE: bool = os.environ.get('PKX_STRICT_SIZE', '').strip().lower() in _TRUTHY
    LOG_LEVEL: Optional[str] = os.environ.get('PKX_LOG_LEVEL') or None

    @classmethod
    def strict_size(cls) -> bool:
        return cls.STRICT_SIZE

    @classmethod
    def apply_log_level(cls) -> None:
        """Set the package logger level from PKX_LOG_LEVEL, if given."""
        if not cls.LOG_LEVEL:
            return
        level = logging.getLevelName(cls.LOG_LEVEL.strip().upper())
        if isinstance(level, int):
            logging.getLogger('pkx').setLevel(level)
        else:
            logging.getLogger(__name__).warning(
                f"Ignoring unknown PKX_LOG_LEVEL: {cls.LOG_LEVEL}")
