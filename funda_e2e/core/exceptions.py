"""Errors raised by the suite's helpers"""


class FixtureError(Exception):
    """Base class for fixture and credentials file problems"""


class FixtureFileError(FixtureError):
    """Fixture file missing or not valid JSON"""


class FixtureNotFoundError(FixtureError, KeyError):
    """Requested key is not present in a fixture file"""

    def __str__(self):
        # KeyError quotes its message; keep it readable
        return str(self.args[0]) if self.args else ""


class CaptchaError(RuntimeError):
    """A human-verification challenge blocked the scenario"""


class CaptchaInHeadlessModeError(CaptchaError):
    """Challenge detected while nobody can solve it"""


class CaptchaTimeoutError(CaptchaError, TimeoutError):
    """Challenge was not solved before the ceiling"""


class PageObjectError(RuntimeError):
    """Expected element or state missing on a page (empty results, bad index)"""
