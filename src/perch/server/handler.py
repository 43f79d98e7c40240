"""ASGI handler: translates ASGI scope/messages to perch types.

The only component that touches raw ASGI HTTP messages. Converts the
scope to a typed Request, resolves it against one route-table generation,
and sends the Response back through ASGI send().
"""

from urllib.parse import quote

from perch._internal.asgi import Receive, Scope, Send
from perch.config import AppConfig
from perch.errors import HTTPError, MethodNotAllowed, NotFound
from perch.http.request import Request
from perch.http.response import Redirect, Response
from perch.routing.resolver import resolve
from perch.routing.table import RouteTable
from perch.server.errors import handle_http_error, handle_internal_error
from perch.server.sender import send_response
from perch.templating.page import DiscoveryPage

ALLOWED_METHODS = frozenset({"GET"})

# Location must stay latin-1 encodable; everything else is percent-encoded.
REDIRECT_SAFE = "/:@[]"


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    table: RouteTable,
    page: DiscoveryPage,
    config: AppConfig,
) -> None:
    """Process a single HTTP request against *table*.

    The caller passes the table it read from the supervisor; a reload that
    lands while this request is in flight does not affect it.
    """
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)

    try:
        response = dispatch(request, table, page=page, config=config)
    except HTTPError as exc:
        response = handle_http_error(exc, request, debug=config.debug)
    except Exception as exc:
        response = handle_internal_error(exc, request, debug=config.debug)

    await send_response(response, send)


def dispatch(
    request: Request,
    table: RouteTable,
    *,
    page: DiscoveryPage,
    config: AppConfig,
) -> Response:
    """Answer one discovery request.

    1. Non-GET        -> 405
    2. No prefix      -> 404
    3. No ``go-get=1`` -> 303 to the documentation site
    4. Otherwise      -> go-import page
    """
    if request.method not in ALLOWED_METHODS:
        raise MethodNotAllowed(ALLOWED_METHODS)

    match = resolve(table, request.path)
    if match is None:
        raise NotFound()

    host = request.host
    if request.query.get(config.discovery_param) != "1":
        target = quote(f"{host}{request.path}", safe=REDIRECT_SAFE)
        return Redirect(f"{config.redirect_base}{target}").to_response()

    return Response(body=page.render(host, match))
