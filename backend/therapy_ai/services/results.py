# backend/therapy_ai/services/results.py
from __future__ import annotations
from enum import Enum
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class TherapyAIError(Exception):
    pass


class ServiceError(TherapyAIError):
    pass


class NotFoundError(ServiceError):
    pass


class InvalidOperationError(ServiceError):
    pass


class InvalidCredentialsError(TherapyAIError):
    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class ResultStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    INVALID = "invalid"


class OpResult(BaseModel, Generic[T]):
    """
    Outcome of a mutating service operation.
    Not-found and validation failures are values, not exceptions; call
    ``unwrap()`` to turn them into a ServiceError instead.
    """
    status: ResultStatus
    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == ResultStatus.OK

    @property
    def is_not_found(self) -> bool:
        return self.status == ResultStatus.NOT_FOUND

    @classmethod
    def success(cls, value=None) -> "OpResult":
        return cls(status=ResultStatus.OK, value=value)

    @classmethod
    def not_found(cls, error: str = "Record not found") -> "OpResult":
        return cls(status=ResultStatus.NOT_FOUND, error=error)

    @classmethod
    def invalid(cls, error: str) -> "OpResult":
        return cls(status=ResultStatus.INVALID, error=error)

    def unwrap(self):
        if self.status == ResultStatus.NOT_FOUND:
            raise NotFoundError(self.error)
        if self.status == ResultStatus.INVALID:
            raise InvalidOperationError(self.error)
        return self.value
