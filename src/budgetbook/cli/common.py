#!/usr/bin/env python3
"""Shared helpers for the CLI commands."""

import functools
from collections.abc import Callable
from typing import Any

import click

from ..core.config import get_config
from ..core.currency import parse_euros_to_cents
from ..core.dates import MonthKey
from ..core.errors import BudgetBookError
from ..service import BudgetBook


def get_book(ctx: click.Context) -> BudgetBook:
    """Open the configured ledger once per invocation."""
    obj = ctx.ensure_object(dict)
    if "book" not in obj:
        obj["book"] = BudgetBook.from_config(obj.get("config") or get_config())
    return obj["book"]


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Report ledger errors as click errors instead of tracebacks."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except BudgetBookError as e:
            raise click.ClickException(str(e)) from e

    return wrapper


def amount_option(ctx: click.Context, param: click.Parameter, value: str | None) -> int | None:
    """click callback: parse a euro amount like ``12,34`` into cents."""
    if value is None:
        return None
    try:
        return parse_euros_to_cents(value)
    except BudgetBookError as e:
        raise click.BadParameter(str(e)) from e


def signed_amount_option(ctx: click.Context, param: click.Parameter, value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return parse_euros_to_cents(value, allow_negative=True)
    except BudgetBookError as e:
        raise click.BadParameter(str(e)) from e


def month_option(ctx: click.Context, param: click.Parameter, value: str | None) -> MonthKey:
    """click callback: parse ``YYYY-MM``; defaults to the current month."""
    if value is None:
        return MonthKey.current()
    try:
        return MonthKey.parse(value)
    except BudgetBookError as e:
        raise click.BadParameter(str(e)) from e
