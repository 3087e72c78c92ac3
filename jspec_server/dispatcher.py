"""HTTP request dispatcher serving test assets and collecting results."""

import logging
from collections.abc import Mapping

from aiohttp import hdrs, web

from jspec_server.assets import AssetNotFoundError, classify_asset
from jspec_server.browsers import resolve_browser
from jspec_server.collector import ResultCollector, parse_count
from jspec_server.models.config import ServerConfig
from jspec_server.notifier import Notifier, notify_safely

log = logging.getLogger(__name__)

REPORT_PATHS = frozenset({"/", "/results"})
REPORT_RESPONSE = "close"

CONFIG_KEY = web.AppKey("config", ServerConfig)
COLLECTOR_KEY = web.AppKey("collector", ResultCollector)
NOTIFIER_KEY = web.AppKey("notifier", Notifier)


def create_app(
    config: ServerConfig,
    collector: ResultCollector,
    notifier: Notifier,
) -> web.Application:
    """Build the web application for a coordination session."""
    app = web.Application()
    app[CONFIG_KEY] = config
    app[COLLECTOR_KEY] = collector
    app[NOTIFIER_KEY] = notifier
    app.router.add_route("*", "/{tail:.*}", handle)
    return app


async def handle(request: web.Request) -> web.Response:
    """Route a request to result collection or asset serving."""
    if request.path in REPORT_PATHS:
        return await handle_report(request)
    return await handle_asset(request)


async def handle_report(request: web.Request) -> web.Response:
    """Record one browser result.

    The response is always "close": the server is authoritative over
    counting, not over the correctness of the reported numbers.
    """
    params = await request_params(request)
    browser = resolve_browser(request.headers.get(hdrs.USER_AGENT))
    failures = parse_count(params.get("failures"))
    passes = parse_count(params.get("passes"))

    result = request.app[COLLECTOR_KEY].submit(browser, failures, passes)
    log.info(
        "%s %s - failures %d passes %d",
        "✅" if result.passed else "❌",
        browser,
        failures,
        passes,
    )

    await notify_safely(request.app[NOTIFIER_KEY], result)

    return web.Response(text=REPORT_RESPONSE, content_type="text/plain")


async def handle_asset(request: web.Request) -> web.Response:
    """Serve a library or project asset."""
    config = request.app[CONFIG_KEY]
    asset = classify_asset(request.path, config.root, config.library_root)

    try:
        body = await asset.read()
    except AssetNotFoundError as exc:
        log.warning("Asset not found: %s", exc)
        raise web.HTTPNotFound(text=str(exc)) from exc
    except OSError as exc:
        log.error("Failed to read asset %s: %s", request.path, exc)
        raise web.HTTPInternalServerError(
            text=f"Failed to read asset '{request.path}'"
        ) from exc

    return web.Response(body=body, content_type=asset.content_type)


async def request_params(request: web.Request) -> Mapping[str, str]:
    """Merge query string and form body parameters, the body taking precedence.

    A body that cannot be decoded as a form is ignored, leaving only the
    query string parameters.
    """
    params = dict(request.query)
    if not request.can_read_body:
        return params

    try:
        form = await request.post()
    except ValueError as exc:
        # UnicodeDecodeError is a ValueError, as are multipart boundary errors
        log.warning(
            "Ignoring unreadable report body from %s: %s", request.remote, exc
        )
        return params

    params.update((key, str(value)) for key, value in form.items())
    return params
