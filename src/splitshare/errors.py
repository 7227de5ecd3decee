from __future__ import annotations


class SplitShareError(Exception):
    pass


class InvalidAmount(SplitShareError, ValueError):
    pass


class InvalidSplit(SplitShareError, ValueError):
    pass


class SplitMismatch(InvalidSplit):
    pass


class LedgerError(SplitShareError):
    pass


class ExpenseNotFound(LedgerError, KeyError):
    def __str__(self) -> str:
        # KeyError quotes its argument otherwise
        return str(self.args[0]) if self.args else ""
