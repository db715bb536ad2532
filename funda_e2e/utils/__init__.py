"""Utility modules for Funda E2E"""

from funda_e2e.utils.generators import generate_random_email, generate_random_password
from funda_e2e.utils.strategies import Strategy, StrategyOutcome, try_strategies

__all__ = [
    'generate_random_email',
    'generate_random_password',
    'Strategy',
    'StrategyOutcome',
    'try_strategies',
]
