"""
Caller-side configuration.

The core never reads the environment; callers build a ``CalculatorConfig`` (or
use ``load_config``) and pass it to whatever needs it.
"""

import logging
import os
from typing import Dict, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

logger = logging.getLogger(__name__)

DEFAULT_MAX_DIGITS = 10
DEFAULT_HISTORY_COUNT = 5
# Results must stay printable under the interpreter's int-to-str digit limit.
MAX_PRINTABLE_DIGITS = 4300

ENV_VARS: Dict[str, str] = {
    'max_digits': 'CALC_MAX_DIGITS',
    'history_count': 'CALC_HISTORY_COUNT',
}


class CalculatorConfig(BaseModel):
    """Limits consumed by the caller of the expression engine."""
    model_config = ConfigDict(frozen=True)

    max_digits: int = Field(
        DEFAULT_MAX_DIGITS, ge=1, le=MAX_PRINTABLE_DIGITS, description="Maximum digits in a result"
    )
    history_count: int = Field(DEFAULT_HISTORY_COUNT, ge=0, description="History entries to keep")


def load_config(env: Optional[Mapping[str, str]] = None) -> CalculatorConfig:
    """
    Build a config from environment variables.

    Args:
        env: Mapping to read from. Defaults to ``os.environ`` after loading a
            ``.env`` file, if one exists.

    Returns:
        CalculatorConfig where any missing, non-integer or out-of-range value
        falls back to its default.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    values: Dict[str, int] = {}
    for field, var in ENV_VARS.items():
        raw = env.get(var)
        if raw is None or not raw.strip():
            continue
        try:
            values[field] = int(raw.strip())
        except ValueError:
            logger.warning(f"Ignoring non-integer {var}={raw!r}; using default")

    try:
        return CalculatorConfig(**values)
    except PydanticValidationError as e:
        rejected = {err['loc'][0] for err in e.errors()}
        for field in sorted(rejected):
            logger.warning(f"Ignoring out-of-range {ENV_VARS[field]}={values[field]}; using default")
        return CalculatorConfig(**{k: v for k, v in values.items() if k not in rejected})
