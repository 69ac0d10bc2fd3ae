from __future__ import annotations
from enum import Enum
from typing import List, Optional, Protocol, Sequence, Tuple
import asyncio, logging

from skincare_advisor.errors import ConversationBusy, EmptyInput, TransportFailure
from skincare_advisor.schemas import Message, Product, Turn
from skincare_advisor.services.chat import (
    GREETING, SYSTEM_PROMPT, clean_user_text, error_notice, selection_prompt,
)
from skincare_advisor.services.markup import TextNode, render

logger = logging.getLogger(__name__)


class ChatTransport(Protocol):
    def complete(self, messages: Sequence[Message]) -> str: ...


class ConversationState(str, Enum):
    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting_response"


def _user_turn(text: str) -> Turn:
    return Turn(role="user", content=text, nodes=[TextNode(text=text)])


def _assistant_turn(text: str, notice: bool = False) -> Turn:
    return Turn(role="assistant", content=text, nodes=render(text), notice=notice)


class ConversationManager:
    """
    Owns one page session's conversation.

    `history` is what gets sent upstream: the system prompt, then user and
    assistant messages, append-only. `turns` is what the page shows: the
    greeting, user text, rendered replies and error notices. Error notices
    never enter `history`, so the model does not see its own failed turns.

    Any error raised by the transport ends the cycle with a notice turn.
    Only one request cycle may be outstanding; a submission made while a
    reply is pending raises ConversationBusy.
    """

    def __init__(self, transport: ChatTransport, system_prompt: str = SYSTEM_PROMPT,
                 greeting: Optional[str] = GREETING):
        self._transport = transport
        self._history: List[Message] = [Message(role="system", content=system_prompt)]
        self._turns: List[Turn] = []
        self._state = ConversationState.IDLE
        if greeting:
            self._turns.append(_assistant_turn(greeting))

    @property
    def state(self) -> ConversationState:
        return self._state

    @property
    def history(self) -> Tuple[Message, ...]:
        return tuple(self._history)

    @property
    def turns(self) -> Tuple[Turn, ...]:
        return tuple(self._turns)

    async def submit_user_text(self, text: Optional[str]) -> Optional[Turn]:
        """Send the trimmed text. Blank input is ignored and returns None."""
        try:
            message = clean_user_text(text)
        except EmptyInput:
            logger.debug("Ignoring blank submission")
            return None
        return await self._cycle(message)

    async def submit_selection_prompt(self, selection: Sequence[Product]) -> Optional[Turn]:
        """Ask for a routine built from `selection`. An empty selection returns None."""
        try:
            message = selection_prompt(selection)
        except EmptyInput:
            logger.debug("Ignoring routine request with no products selected")
            return None
        return await self._cycle(message)

    async def _cycle(self, content: str) -> Turn:
        if self._state is ConversationState.AWAITING_RESPONSE:
            logger.info("Rejecting submission while a reply is pending")
            raise ConversationBusy("A reply is still pending")

        self._history.append(Message(role="user", content=content))
        self._turns.append(_user_turn(content))
        self._state = ConversationState.AWAITING_RESPONSE
        try:
            reply = await asyncio.to_thread(self._transport.complete, list(self._history))
        except Exception as e:
            if isinstance(e, TransportFailure):
                logger.warning("Chat request failed: %s", e)
            else:
                logger.exception("Unexpected error during chat request")
            turn = _assistant_turn(error_notice(e), notice=True)
            self._turns.append(turn)
            return turn
        else:
            self._history.append(Message(role="assistant", content=reply))
            turn = _assistant_turn(reply)
            self._turns.append(turn)
            return turn
        finally:
            self._state = ConversationState.IDLE
