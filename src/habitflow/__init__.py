"""HabitFlow - Daily habit and sleep tracker with reports and AI insights.

HabitFlow provides:
- Daily habit completion and sleep logging
- Daily, weekly and monthly statistics
- Multi-page PDF reports over any date range
- AI-generated tips and insight bundles (Anthropic Claude)

Usage:
    python -m habitflow habits
    python -m habitflow --profile prod export --months 3
"""

__version__ = "0.1.0"

from .config import HabitFlowConfig
from .config.loader import load_config

__all__ = [
    "HabitFlowConfig",
    "__version__",
    "load_config",
]
