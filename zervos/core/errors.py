"""Errors raised by persistence media. SafeStore absorbs all of them."""


class StoreError(Exception):
    """Base class for persistence medium failures."""


class QuotaExceededError(StoreError):
    """A write would push the medium past its size quota."""

    def __init__(self, key: str, needed: int, quota: int):
        self.key = key
        self.needed = needed
        self.quota = quota
        super().__init__(f"Writing '{key}' needs {needed} bytes, quota is {quota}")


class MediumUnavailableError(StoreError):
    """The medium cannot be reached at all (disabled, unopenable file)."""
