"""Tests for session wiring."""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from jspec_server.models.config import ServerConfig
from jspec_server.notifier import DesktopNotifier, NullNotifier
from jspec_server.orchestrator import LaunchOrchestrator
from jspec_server.session import Session
from jspec_server.testing.browsers import wait_until_listening


@pytest.fixture
def orchestrator_mock() -> Mock:
    """Create a mock orchestrator."""
    orchestrator = Mock(spec=LaunchOrchestrator)
    orchestrator.launch_all = AsyncMock(return_value=[])
    orchestrator.close = AsyncMock()
    return orchestrator


def test_from_config_selects_notifier(config: ServerConfig) -> None:
    """Uses desktop notifications only when enabled."""
    enabled = Session.from_config(config.model_copy(update={"notify": True}))
    disabled = Session.from_config(config.model_copy(update={"notify": False}))

    assert isinstance(enabled.notifier, DesktopNotifier)
    assert isinstance(disabled.notifier, NullNotifier)


def test_monitor_expects_configured_browsers(config: ServerConfig) -> None:
    """Expects one result per configured browser."""
    session = Session(config=config)

    assert session.monitor.expected == 2
    assert session.monitor.state == "waiting"


async def test_launches_after_listener_is_bound(
    config: ServerConfig, orchestrator_mock: Mock
) -> None:
    """Launches configured browsers against the bound page URL."""
    session = Session(
        config=config.model_copy(update={"server_only": False, "deadline": 0.2}),
        orchestrator=orchestrator_mock,
    )

    outcome = await session.run()

    assert outcome.status == "timeout"
    assert session.url is not None
    assert session.url.host == "127.0.0.1"
    assert session.url.port != 0
    assert session.url.path == "/index.html"
    orchestrator_mock.launch_all.assert_awaited_once()
    browsers, url = orchestrator_mock.launch_all.await_args.args
    assert tuple(browsers) == ("Firefox", "Safari")
    assert url == str(session.url)
    orchestrator_mock.close.assert_awaited_once()


async def test_server_only_does_not_launch(
    config: ServerConfig, orchestrator_mock: Mock
) -> None:
    """Skips launching browsers in server only mode."""
    session = Session(
        config=config.model_copy(update={"deadline": 0.1}),
        orchestrator=orchestrator_mock,
    )

    await session.run()

    orchestrator_mock.launch_all.assert_not_called()


async def test_startup_delay_postpones_launch(
    config: ServerConfig, orchestrator_mock: Mock
) -> None:
    """Waits for the startup delay before launching."""
    session = Session(
        config=config.model_copy(
            update={"server_only": False, "startup_delay": 0.5, "deadline": 5}
        ),
        orchestrator=orchestrator_mock,
    )
    task = asyncio.create_task(session.run())
    await wait_until_listening(session, task)

    orchestrator_mock.launch_all.assert_not_called()
    session.shutdown()
    outcome = await task

    assert outcome.status == "cancelled"
    orchestrator_mock.launch_all.assert_not_called()


async def test_completes_immediately_without_browsers(
    config: ServerConfig, orchestrator_mock: Mock
) -> None:
    """Completes as soon as the listener is up when no browsers are expected."""
    session = Session(
        config=config.model_copy(update={"browsers": (), "server_only": False}),
        orchestrator=orchestrator_mock,
    )

    outcome = await asyncio.wait_for(session.run(), timeout=5)

    assert outcome.status == "complete"
    assert outcome.results == ()


def test_page_url_names_bound_address_for_ephemeral_port(
    config: ServerConfig,
) -> None:
    """Uses the first bound address when the port was chosen by the system."""
    session = Session(config=config.model_copy(update={"host": "localhost"}))
    runner = Mock(addresses=[("127.0.0.1", 50123), ("::1", 50124, 0, 0)])

    url = session.page_url(runner)

    assert str(url) == "http://127.0.0.1:50123/index.html"


def test_page_url_keeps_host_for_fixed_port(config: ServerConfig) -> None:
    """Uses the configured host name when a fixed port was requested."""
    session = Session(
        config=config.model_copy(update={"host": "localhost", "port": 4444})
    )
    runner = Mock(addresses=[("::1", 4444, 0, 0), ("127.0.0.1", 4444)])

    url = session.page_url(runner)

    assert str(url) == "http://localhost:4444/index.html"
