"""Sends resolved requests through an injected transport."""

import logging

from xdiff.modules.request.overrides import ExtraArgs
from xdiff.modules.request.profile import RequestProfile, ResolvedRequest
from xdiff.tools import HTTPResponse, HTTPTransport
from xdiff.utils.debug import debug_request, debug_response

logger = logging.getLogger(__name__)


class RequestExecutor:
    """Dispatches requests; retries and timeouts belong to the transport."""

    def __init__(self, transport: HTTPTransport):
        self.transport = transport

    async def send(self, request: ResolvedRequest) -> HTTPResponse:
        """Send a resolved request. Transport errors propagate unchanged."""
        url = request.full_url
        logger.debug("Sending %s %s", request.method, url)
        debug_request(request.method, url, dict(request.headers.items()), request.content)

        response = await self.transport.execute(
            request.method,
            url,
            headers=request.headers,
            content=request.content,
        )

        debug_response(url, response.status_code, response.response_time, len(response.content))
        return response

    async def send_profile(
        self,
        profile: RequestProfile,
        args: ExtraArgs | None = None,
    ) -> HTTPResponse:
        """Apply overrides to a profile and send the result."""
        return await self.send(profile.with_overrides(args))
