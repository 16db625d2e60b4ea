"""Callback contracts supplied per resource.

Every callback may be a plain function or a coroutine function; the
handler awaits the returned value when it is awaitable.
"""

from collections.abc import Awaitable, Callable
from typing import Any, TypeAlias

from starlette.requests import Request

from store_crud.entities import (
    ChangeResult,
    CreateResult,
    ErrorContext,
    StoreRow,
    SuccessContext,
)

Record: TypeAlias = dict[str, Any]
MarshalResult: TypeAlias = Record | ChangeResult | CreateResult

# Convert request data to a record; raise to reject it
MarshalFn: TypeAlias = Callable[[Request], MarshalResult | Awaitable[MarshalResult]]
UnmarshalFn: TypeAlias = Callable[[Request, StoreRow], Record | Awaitable[Record]]

# Unique key from the record and request
GetKey: TypeAlias = Callable[[Record, Request], str | Awaitable[str]]

OnSuccess: TypeAlias = Callable[[SuccessContext], Any]
OnError: TypeAlias = Callable[[ErrorContext, Exception], Any]
