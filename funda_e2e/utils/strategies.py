"""
Ordered fallback strategies for flaky UI interactions.

Page objects often have several ways to do one thing (a primary selector,
a secondary selector, the keyboard). Each way is a Strategy; they are tried
in order until one reports success.

Example:
    outcome = try_strategies([
        Strategy("suggestion", lambda: click_suggestion()),
        Strategy("enter key", lambda: press_enter()),
    ])
    if outcome.succeeded:
        logger.info(f"Search submitted via {outcome.strategy}")
"""

from typing import Callable, List, NamedTuple, Optional, Sequence, Tuple
import logging

logger = logging.getLogger(__name__)


class Strategy(NamedTuple):
    name: str
    action: Callable[[], object]


class StrategyOutcome(NamedTuple):
    succeeded: bool
    strategy: Optional[str]
    attempts: List[str]
    errors: List[Tuple[str, str]]

    def __bool__(self):
        return self.succeeded


def try_strategies(strategies: Sequence[Strategy], label: str = "action") -> StrategyOutcome:
    """
    Run strategies in order and stop at the first truthy result.

    A strategy fails when it returns a falsy value or raises; the exception
    is recorded and the next strategy runs.
    """
    attempts = []
    errors = []

    for strategy in strategies:
        attempts.append(strategy.name)
        try:
            if strategy.action():
                logger.debug(f"[Strategies] {label}: '{strategy.name}' succeeded")
                return StrategyOutcome(True, strategy.name, attempts, errors)
            logger.debug(f"[Strategies] {label}: '{strategy.name}' did not apply")
        except Exception as e:
            errors.append((strategy.name, str(e)))
            logger.debug(f"[Strategies] {label}: '{strategy.name}' failed: {e}")

    logger.info(f"[Strategies] {label}: all {len(attempts)} strategies failed")
    return StrategyOutcome(False, None, attempts, errors)
