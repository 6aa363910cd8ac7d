# src/tabula/core/errors.py


class TabulaError(Exception):
    """Base class for errors raised by tabula itself."""


class SchemaError(TabulaError):
    """A table cannot be exposed (no usable primary key)."""

    def __init__(self, table: str, reason: str):
        self.table = table
        self.reason = reason
        super().__init__(f"Table '{table}': {reason}")


class HookError(TabulaError):
    """Wraps an exception raised by a user-supplied operation hook."""

    def __init__(self, stage: str, original: BaseException):
        self.stage = stage
        self.original = original
        super().__init__(str(original) or f"Hook execution failed in {stage}")


class RecordNotFound(TabulaError):
    def __init__(self, table: str, record_id: object):
        self.table = table
        self.record_id = record_id
        super().__init__(f"Record {record_id!r} not found in '{table}'")
