"""Run mode passed explicitly to page objects and the CAPTCHA handler"""

from enum import Enum


class RunMode(str, Enum):
    INTERACTIVE = "interactive"
    NON_INTERACTIVE = "non_interactive"

    @classmethod
    def from_headless(cls, headless: bool) -> "RunMode":
        return cls.NON_INTERACTIVE if headless else cls.INTERACTIVE

    @property
    def is_interactive(self) -> bool:
        return self is RunMode.INTERACTIVE
