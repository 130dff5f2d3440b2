"""Core planboard components: types, configuration and exceptions."""

from planboard.core.config import PlanboardConfig
from planboard.core.exceptions import *  # noqa: F403
from planboard.core.exceptions import __all__ as exceptions__all__
from planboard.core.types import *  # noqa: F403
from planboard.core.types import __all__ as types__all__

__all__ = [
    "PlanboardConfig",
]

__all__ += exceptions__all__
__all__ += types__all__
