"""Unit tests for Call building, lifecycle and results."""

import asyncio
from dataclasses import dataclass
from typing import Optional
from unittest.mock import MagicMock

import pytest

from restproxy.core.config import HttpMethod, SignerKind
from restproxy.core.exceptions import (
    CallStateError,
    ConfigurationError,
    InvalidArgumentError,
    TransportError,
)
from restproxy.core.protocols.transport import TransportResponse
from restproxy.domains.proxy.call import join_url
from restproxy.domains.proxy.proxy import new_proxy
from restproxy.domains.proxy.types import CallState

BASE_URL = "http://fake.example.com/"

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _proxy(fake_transport, **kwargs):
    return new_proxy(base_url=BASE_URL, transport=fake_transport, **kwargs)


def _call(fake_transport, function: Optional[str] = "ping", **kwargs):
    call = _proxy(fake_transport, **kwargs).new_call()
    call.set_function(function)
    return call


# ===========================================================================
# join_url (table-driven)
# ===========================================================================


@dataclass
class JoinCase:
    desc: str
    base: str
    function: Optional[str]
    expected: str


JOIN_CASES = [
    JoinCase("no function", "http://h/api/", None, "http://h/api/"),
    JoinCase("empty function", "http://h/api/", "", "http://h/api/"),
    JoinCase("base has slash", "http://h/api/", "ping", "http://h/api/ping"),
    JoinCase("function has slash", "http://h/api", "/ping", "http://h/api/ping"),
    JoinCase("neither has slash", "http://h/api", "ping", "http://h/api/ping"),
    JoinCase("both have slash", "http://h/api/", "/ping", "http://h/api/ping"),
    JoinCase("nested function", "http://h/", "users/1/photos", "http://h/users/1/photos"),
]


@pytest.mark.parametrize("case", JOIN_CASES, ids=lambda c: c.desc)
def test_join_url(case: JoinCase):
    assert join_url(case.base, case.function) == case.expected


# ===========================================================================
# Building a NEW call
# ===========================================================================


class TestBuilding:
    def test_new_call_defaults(self, fake_transport):
        call = _proxy(fake_transport).new_call()
        assert call.state == CallState.NEW
        assert call.function is None
        assert call.method == "GET"
        assert dict(call.params) == {}

    def test_params_rendered_as_strings(self, fake_transport):
        call = _call(fake_transport)
        call.set_params({"per_page": 10}, extras=True)
        assert dict(call.params) == {"per_page": "10", "extras": "True"}

    def test_param_overwrite(self, fake_transport):
        call = _call(fake_transport)
        call.set_param("a", "1")
        call.set_param("a", "2")
        assert call.get_param("a") == "2"

    def test_remove_param(self, fake_transport):
        call = _call(fake_transport)
        call.set_param("a", "1")
        call.remove_param("a")
        call.remove_param("never-set")
        assert call.get_param("a") is None

    def test_params_view_is_read_only(self, fake_transport):
        call = _call(fake_transport)
        with pytest.raises(TypeError):
            call.params["a"] = "1"

    @pytest.mark.parametrize("key, value", [("", "v"), ("k", None)])
    def test_invalid_param(self, fake_transport, key, value):
        with pytest.raises(InvalidArgumentError):
            _call(fake_transport).set_param(key, value)

    @pytest.mark.parametrize("method", ["post", "POST", HttpMethod.POST])
    def test_set_method(self, fake_transport, method):
        call = _call(fake_transport)
        call.set_method(method)
        assert call.method == "POST"

    def test_unknown_method(self, fake_transport):
        with pytest.raises(InvalidArgumentError):
            _call(fake_transport).set_method("BREW")


# ===========================================================================
# prepare
# ===========================================================================


class TestPrepare:
    def test_prepare_freezes_request(self, fake_transport):
        call = _call(fake_transport, user_agent="ua/1")
        call.set_param("a", "1")
        call.add_header("X-Trace", "abc")

        request = call.prepare()

        assert call.state == CallState.PREPARED
        assert request.method == "GET"
        assert request.url == BASE_URL + "ping"
        assert dict(request.params) == {"a": "1"}
        assert request.headers == {"User-Agent": "ua/1", "X-Trace": "abc"}
        assert call.request is request

    def test_call_header_overrides_user_agent(self, fake_transport):
        call = _call(fake_transport)
        call.add_header("User-Agent", "custom")
        assert call.prepare().headers["User-Agent"] == "custom"

    def test_reprepare_rejected(self, fake_transport):
        call = _call(fake_transport)
        call.prepare()
        with pytest.raises(CallStateError) as exc_info:
            call.prepare()
        assert exc_info.value.state == "prepared"

    @pytest.mark.parametrize(
        "mutate",
        [
            lambda c: c.set_param("a", "1"),
            lambda c: c.set_params(a="1"),
            lambda c: c.remove_param("a"),
            lambda c: c.set_function("other"),
            lambda c: c.set_method("POST"),
            lambda c: c.add_header("X", "1"),
        ],
        ids=["set_param", "set_params", "remove_param", "set_function", "set_method", "header"],
    )
    def test_mutation_after_prepare_rejected(self, fake_transport, mutate):
        call = _call(fake_transport)
        call.set_param("a", "0")
        call.prepare()

        with pytest.raises(CallStateError):
            mutate(call)

        assert call.request.params == {"a": "0"}

    def test_prepared_params_are_read_only(self, fake_transport):
        call = _call(fake_transport)
        call.set_param("a", "1")
        request = call.prepare()

        with pytest.raises(TypeError):
            request.params["a"] = "x"
        with pytest.raises(TypeError):
            request.headers["User-Agent"] = "x"

    def test_sent_params_match_signature(self, fake_transport):
        fake_transport.seed_response("/", TransportResponse(status_code=200))
        proxy = new_proxy(
            "ck",
            "cs",
            base_url=BASE_URL,
            signer_kind=SignerKind.FLICKR,
            transport=fake_transport,
        )
        call = proxy.new_call()
        call.set_param("a", "1")
        request = call.prepare()

        with pytest.raises(TypeError):
            request.params["a"] = "tampered"
        call.send()

        assert fake_transport.last_request.params["a"] == "1"
        assert fake_transport.last_request.params["api_sig"] == request.params["api_sig"]

    def test_failed_signing_leaves_call_new(self, fake_transport):
        proxy = new_proxy(
            base_url="https://{}.example.com/", binding_required=True, transport=fake_transport
        )
        call = proxy.new_call()
        with pytest.raises(ConfigurationError):
            call.prepare()
        assert call.state == CallState.NEW


# ===========================================================================
# send
# ===========================================================================


class TestSend:
    def test_send_before_prepare_rejected(self, fake_transport):
        with pytest.raises(CallStateError):
            _call(fake_transport).send()
        assert fake_transport.request_count == 0

    def test_success_is_done(self, fake_transport):
        fake_transport.seed_response(
            "/ping",
            TransportResponse(
                status_code=200,
                content=b'{"stat": "ok"}',
                headers={"content-type": "application/json"},
                reason="OK",
            ),
        )
        call = _call(fake_transport)

        assert call.sync() is call

        assert call.state == CallState.DONE
        assert call.status_code == 200
        assert call.reason == "OK"
        assert call.ok is True
        assert call.payload == b'{"stat": "ok"}'
        assert call.text == '{"stat": "ok"}'
        assert call.json() == {"stat": "ok"}
        assert call.response_headers["content-type"] == "application/json"
        assert call.error is None

    @pytest.mark.parametrize("status", [301, 404, 500, 501])
    def test_non_2xx_is_done_not_failed(self, fake_transport, status):
        fake_transport.seed_response("/ping", TransportResponse(status_code=status))
        call = _call(fake_transport)

        call.sync()

        assert call.state == CallState.DONE
        assert call.status_code == status
        assert call.ok is False

    def test_transport_error_is_failed(self, fake_transport):
        fake_transport.seed_error("Connection refused")
        call = _call(fake_transport)

        with pytest.raises(TransportError):
            call.sync()

        assert call.state == CallState.FAILED
        assert isinstance(call.error, TransportError)
        with pytest.raises(CallStateError):
            call.status_code

    def test_interrupted_send_is_failed(self):
        transport = MagicMock()
        transport.send.side_effect = KeyboardInterrupt
        call = new_proxy(base_url=BASE_URL, transport=transport).new_call()
        call.prepare()

        with pytest.raises(KeyboardInterrupt):
            call.send()

        assert call.state == CallState.FAILED
        assert isinstance(call.error, KeyboardInterrupt)

    def test_send_twice_rejected(self, fake_transport):
        call = _call(fake_transport)
        call.sync()
        with pytest.raises(CallStateError):
            call.send()
        assert fake_transport.request_count == 1

    def test_results_before_done_rejected(self, fake_transport):
        call = _call(fake_transport)
        call.prepare()
        with pytest.raises(CallStateError):
            call.payload

    def test_sent_request_matches_prepared(self, fake_transport):
        call = _call(fake_transport)
        call.set_param("q", "cats")
        prepared = call.prepare()

        call.send()

        assert fake_transport.last_request == prepared

    def test_signed_call_reaches_transport_with_signature(self, fake_transport):
        proxy = new_proxy(
            "ck",
            "cs",
            base_url=BASE_URL,
            signer_kind=SignerKind.FLICKR,
            transport=fake_transport,
        )
        call = proxy.new_call()
        call.set_function("flickr.test.echo")

        call.sync()

        sent = fake_transport.last_request
        assert sent.url == BASE_URL
        assert "api_sig" in sent.params


# ===========================================================================
# async path
# ===========================================================================


class TestAsync:
    @pytest.mark.asyncio
    async def test_invoke_async_done(self, fake_async_transport):
        fake_async_transport.seed_response("/ping", TransportResponse(status_code=200))
        proxy = new_proxy(base_url=BASE_URL, async_transport=fake_async_transport)
        call = proxy.new_call()
        call.set_function("ping")

        await call.invoke_async()

        assert call.state == CallState.DONE
        assert call.status_code == 200
        assert fake_async_transport.last_request.url == BASE_URL + "ping"

    @pytest.mark.asyncio
    async def test_invoke_async_failed(self, fake_async_transport):
        fake_async_transport.seed_error()
        proxy = new_proxy(base_url=BASE_URL, async_transport=fake_async_transport)
        call = proxy.new_call()

        with pytest.raises(TransportError):
            await call.invoke_async()

        assert call.state == CallState.FAILED

    @pytest.mark.asyncio
    async def test_send_async_requires_prepare(self, fake_async_transport):
        proxy = new_proxy(base_url=BASE_URL, async_transport=fake_async_transport)
        with pytest.raises(CallStateError):
            await proxy.new_call().send_async()

    @pytest.mark.asyncio
    async def test_cancelled_send_async_is_failed(self):
        started = asyncio.Event()

        class StalledTransport:
            async def send(self, request):
                started.set()
                await asyncio.Event().wait()

            async def aclose(self):
                pass

        proxy = new_proxy(base_url=BASE_URL, async_transport=StalledTransport())
        call = proxy.new_call()
        call.prepare()

        task = asyncio.create_task(call.send_async())
        await started.wait()
        assert call.state == CallState.IN_FLIGHT
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        assert call.state == CallState.FAILED
        assert isinstance(call.error, asyncio.CancelledError)
