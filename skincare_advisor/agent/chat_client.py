from __future__ import annotations
from typing import Any, Optional, Sequence
import logging

import requests

from skincare_advisor.errors import TransportFailure
from skincare_advisor.schemas import Message
from skincare_advisor.services.chat import NO_RESPONSE_NOTICE

logger = logging.getLogger(__name__)


def extract_reply(data: Any) -> str:
    """Pull choices[0].message.content out of a chat-completion payload.

    Anything missing, non-string or blank yields NO_RESPONSE_NOTICE.
    """
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return NO_RESPONSE_NOTICE
    if not isinstance(content, str) or not content.strip():
        return NO_RESPONSE_NOTICE
    return content.strip()


class ChatClient:
    """Posts the whole conversation to an OpenAI-compatible chat endpoint."""

    def __init__(self, endpoint: str, timeout: float = 60.0,
                 session: Optional[requests.Session] = None):
        self.endpoint = endpoint
        self.timeout = timeout
        self._session = session or requests.Session()

    def complete(self, messages: Sequence[Message]) -> str:
        payload = {"messages": [m.model_dump() for m in messages]}
        logger.debug("POST %s with %d messages", self.endpoint, len(payload["messages"]))
        try:
            resp = self._session.post(self.endpoint, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportFailure(str(e)) from e
        if not 200 <= resp.status_code < 300:
            raise TransportFailure(f"Server error: {resp.status_code}")
        try:
            data = resp.json()
        except ValueError as e:
            raise TransportFailure("Invalid JSON in chat response") from e
        return extract_reply(data)
