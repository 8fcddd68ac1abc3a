"""
Response Normalizer
Turns whatever a route handler or before filter returned into a Sanic HTTPResponse
"""
import inspect
from typing import Any

from sanic.response import HTTPResponse, html, json, text, raw


class ResponseNormalizer:
    """
    Prepares route results for sending (Laravel Router::prepare)

    Example:
        normalizer = ResponseNormalizer()
        response = await normalizer.prepare({'user': 'John'}, request)
        response.content_type  # 'application/json'
    """

    async def prepare(self, candidate: Any, request: Any) -> HTTPResponse:
        """
        Convert a response candidate into a finalized response

        Args:
            candidate: Handler or before-filter result
            request: The current request

        Returns:
            HTTPResponse (passed through untouched if already one)
        """
        # Response builders expose build(), which may itself be async
        if not isinstance(candidate, HTTPResponse) and callable(getattr(candidate, 'build', None)):
            candidate = candidate.build()
            if inspect.isawaitable(candidate):
                candidate = await candidate

        return self._create_response(candidate, self._determine_response_type(candidate))

    def _determine_response_type(self, content: Any) -> str:
        """Auto-detect response type from content"""
        if content is None:
            return 'text'

        match content:
            case HTTPResponse():
                return 'response'
            case dict() | list() | tuple():
                return 'json'
            case bool() | int() | float():
                return 'json'
            case str():
                content_lower = content.strip().lower()
                if content_lower.startswith('<!doctype') or content_lower.startswith('<html'):
                    return 'html'
                elif '<' in content and '>' in content:
                    return 'html'
                else:
                    return 'text'
            case bytes() | bytearray():
                return 'raw'
            case _:
                return 'text'

    def _create_response(self, content: Any, response_type: str) -> HTTPResponse:
        """Create Sanic response based on detected type"""
        if response_type == 'response':
            return content

        if response_type == 'json':
            return json(content)

        if response_type == 'html':
            return html(content)

        if response_type == 'raw':
            return raw(bytes(content))

        return text('' if content is None else str(content))
