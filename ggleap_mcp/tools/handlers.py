"""Tool handlers mapping MCP tool arguments onto GGLeap API calls.

Every handler takes the configured gateway and the raw tool arguments and
returns the text shown to the MCP client. Errors propagate to the caller.
"""

import json
import uuid
from typing import Any, Awaitable, Callable

from pydantic import BaseModel, ConfigDict, Field

from ggleap_mcp.auth import GGLeapAuth, ToolArgumentError

ToolHandler = Callable[[GGLeapAuth, dict[str, Any]], Awaitable[str]]

DEFAULT_ACTIVITY_LOG_LIMIT = 100


def new_correlation_id() -> str:
    """Generate a unique X-Correlation-Id for a mutating call."""
    return str(uuid.uuid4())


def _correlated_headers() -> dict[str, str]:
    return {"X-Correlation-Id": new_correlation_id()}


def _format(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


def _number(value: int | float) -> int | float:
    """Collapse whole-number floats to int so 3.0 renders as 3."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


class GetUserArgs(BaseModel):
    uuid: str | None = None
    username: str | None = None
    email: str | None = None


class CreateUserArgs(BaseModel):
    """User fields are forwarded verbatim, including unknown keys."""

    model_config = ConfigDict(extra="allow")

    username: str
    email: str
    firstName: str | None = None
    lastName: str | None = None
    phoneNumber: str | None = None


class AddUserBalanceArgs(BaseModel):
    userUuid: str
    amount: int | float


class GetUserBalanceArgs(BaseModel):
    userUuid: str


class ListBookingsArgs(BaseModel):
    date: str | None = None
    days: int | float | None = None
    includePast: bool = False


class CreateBookingArgs(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    startLocal: str
    duration: int | float
    machines: list[str]
    userUuid: str | None = None
    guestName: str | None = None
    email: str | None = None
    phone: str | None = None


class SearchActivityLogsArgs(BaseModel):
    start: str | None = None
    end: str | None = None
    limit: int | float = Field(default=DEFAULT_ACTIVITY_LOG_LIMIT)


async def list_machines(auth: GGLeapAuth, arguments: dict[str, Any]) -> str:
    return _format(await auth.request("/machines/get-all"))


async def get_user(auth: GGLeapAuth, arguments: dict[str, Any]) -> str:
    args = GetUserArgs.model_validate(arguments)
    params: dict[str, str] = {}
    if args.uuid:
        params["Uuid"] = args.uuid
    if args.username:
        params["Username"] = args.username
    if args.email:
        params["Email"] = args.email
    if not params:
        raise ToolArgumentError("Must provide uuid, username, or email")

    return _format(await auth.request("/users/user-details", params=params))


async def create_user(auth: GGLeapAuth, arguments: dict[str, Any]) -> str:
    args = CreateUserArgs.model_validate(arguments)
    response = await auth.request(
        "/users/create",
        method="POST",
        headers=_correlated_headers(),
        json={"User": args.model_dump(exclude_none=True)},
    )
    return f"User created: {_format(response)}"


async def add_user_balance(auth: GGLeapAuth, arguments: dict[str, Any]) -> str:
    args = AddUserBalanceArgs.model_validate(arguments)
    amount = _number(args.amount)
    await auth.request(
        "/users/add-balance",
        method="POST",
        headers=_correlated_headers(),
        json={"UserUuid": args.userUuid, "Amount": amount},
    )
    return f"Added ${amount} to user {args.userUuid}"


async def get_user_balance(auth: GGLeapAuth, arguments: dict[str, Any]) -> str:
    args = GetUserBalanceArgs.model_validate(arguments)
    return _format(await auth.request("/coins/balance", params={"UserUuid": args.userUuid}))


async def list_bookings(auth: GGLeapAuth, arguments: dict[str, Any]) -> str:
    args = ListBookingsArgs.model_validate(arguments)
    params: dict[str, str] = {}
    if args.date:
        params["Date"] = args.date
    if args.days:
        params["Days"] = str(_number(args.days))
    if args.includePast:
        params["IncludePast"] = "true"

    return _format(await auth.request("/bookings/get-bookings", params=params))


async def create_booking(auth: GGLeapAuth, arguments: dict[str, Any]) -> str:
    args = CreateBookingArgs.model_validate(arguments)
    response = await auth.request(
        "/bookings/create",
        method="POST",
        json=args.model_dump(exclude_none=True),
    )
    return f"Booking created: {_format(response)}"


async def search_activity_logs(auth: GGLeapAuth, arguments: dict[str, Any]) -> str:
    args = SearchActivityLogsArgs.model_validate(arguments)
    params: dict[str, str] = {}
    if args.start:
        params["Start"] = args.start
    if args.end:
        params["End"] = args.end
    params["Limit"] = str(_number(args.limit))

    return _format(await auth.request("/activity-logs/search", params=params))


TOOL_HANDLERS: dict[str, ToolHandler] = {
    "ggleap_list_machines": list_machines,
    "ggleap_get_user": get_user,
    "ggleap_create_user": create_user,
    "ggleap_add_user_balance": add_user_balance,
    "ggleap_get_user_balance": get_user_balance,
    "ggleap_list_bookings": list_bookings,
    "ggleap_create_booking": create_booking,
    "ggleap_search_activity_logs": search_activity_logs,
}
