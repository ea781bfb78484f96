from __future__ import annotations

import aiohttp
import pytest

from nihongo_translate.errors import (
    FetchError,
    HttpStatusError,
    ProtocolError,
    SafeMessage,
    classify_error,
    failure_from_exception,
    safe_message,
)
from nihongo_translate.models import ErrorKind


@pytest.mark.parametrize(
    ("exc", "kind"),
    [
        (FetchError("Failed to fetch https://x"), ErrorKind.NETWORK_FAILURE),
        (HttpStatusError("HTTP 500: boom", 500), ErrorKind.NETWORK_FAILURE),
        (TimeoutError(), ErrorKind.NETWORK_FAILURE),
        (aiohttp.ClientConnectionError("refused"), ErrorKind.NETWORK_FAILURE),
        (ProtocolError("bad"), ErrorKind.PROTOCOL_FAILURE),
        (KeyError("responseData"), ErrorKind.UNKNOWN),
        (RuntimeError("secret internals"), ErrorKind.UNKNOWN),
    ],
)
def test_classify_error(exc: Exception, kind: ErrorKind) -> None:
    assert classify_error(exc) is kind


def test_every_kind_has_a_safe_message() -> None:
    messages = {safe_message(kind) for kind in ErrorKind}

    assert messages == {message.value for message in SafeMessage}


def test_failure_hides_exception_text() -> None:
    failure = failure_from_exception(RuntimeError("db password=hunter2"))

    assert failure.kind is ErrorKind.UNKNOWN
    assert failure.message == SafeMessage.GENERAL.value
    assert "hunter2" not in failure.message
    assert failure.reset_time_ms is None


def test_network_failure_message() -> None:
    failure = failure_from_exception(HttpStatusError("HTTP 502: Bad Gateway", 502))

    assert failure.kind is ErrorKind.NETWORK_FAILURE
    assert failure.message == SafeMessage.NETWORK.value
    assert "502" not in failure.message
