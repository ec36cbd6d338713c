"""Shared helpers for asserting exceptions in tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import ParamSpec, TypeVar

from kdeconnect_core.protocol.exceptions import PacketDecodeError
from kdeconnect_core.protocol.packet import Packet

P = ParamSpec("P")
TException = TypeVar("TException", bound=BaseException)


def expect_exception(
    func: Callable[P, object],
    exception_type: type[TException],
    *args: P.args,
    **kwargs: P.kwargs,
) -> TException:
    """Run a callable and return the raised exception for inspection."""
    try:
        _ = func(*args, **kwargs)
    except exception_type as err:
        return err
    message = f"Expected {exception_type.__name__} to be raised"
    raise AssertionError(message)  # pragma: no cover


def expect_decode_failure(data: bytes | str) -> PacketDecodeError:
    """Assert that data is rejected both by parse (None) and decode (error)."""
    assert Packet.parse(data) is None
    return expect_exception(Packet.decode, PacketDecodeError, data)
