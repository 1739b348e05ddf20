"""Root conftest for pytest configuration and shared fixtures.

Loaded before both testpaths (tests/ and restproxy/), so fixtures here are
available to the top-level scenario tests and the colocated domain tests.
"""

import os

import pytest

# Register pytest-asyncio plugin at the root level
pytest_plugins = ("pytest_asyncio",)

# ---------------------------------------------------------------------------
# Environment variables, set before any restproxy module import
# Uses setdefault so real env vars are never overridden.
# ---------------------------------------------------------------------------
os.environ.setdefault("RESTPROXY_LOG_LEVEL", "DEBUG")
os.environ.setdefault("RESTPROXY_TIMEOUT_SECONDS", "5")
# Tests talk to 127.0.0.1; never route them through an ambient HTTP proxy.
os.environ["RESTPROXY_TRUST_ENV"] = "false"


# ---------------------------------------------------------------------------
# Shared fake fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_transport():
    """Fake Transport that records requests and answers 501 unless seeded."""
    from restproxy.adapters.transport.fake import FakeTransport

    return FakeTransport()


@pytest.fixture
def fake_async_transport():
    """Fake AsyncTransport with the same routing as the sync fake."""
    from restproxy.adapters.transport.fake import FakeAsyncTransport

    return FakeAsyncTransport()


@pytest.fixture
def fixed_oauth_signer():
    """OAuth PLAINTEXT signer with a pinned clock and nonce."""
    from restproxy.domains.signing.oauth_plaintext import OAuthPlaintextSigner

    return OAuthPlaintextSigner(
        timestamp_factory=lambda: "1234567890",
        nonce_factory=lambda: "42",
    )
