from __future__ import annotations

from pydantic import BaseModel


class ApiResponse[T](BaseModel):
    success: bool
    message: str
    data: T | None = None


def ok[T](message: str, data: T | None = None) -> ApiResponse[T]:
    return ApiResponse(success=True, message=message, data=data)


def fail[T](message: str, data: T | None = None) -> ApiResponse[T]:
    return ApiResponse(success=False, message=message, data=data)
