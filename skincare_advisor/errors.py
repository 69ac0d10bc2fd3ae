from __future__ import annotations


class AdvisorError(Exception):
    """Base class for errors raised by the skincare advisor core."""


class LoadFailure(AdvisorError):
    """The product catalog could not be fetched, decoded or validated."""


class TransportFailure(AdvisorError):
    """The chat endpoint could not be reached or returned an unusable response."""


class EmptyInput(AdvisorError):
    """Blank text or an empty selection was submitted."""


class ConversationBusy(AdvisorError):
    """A request cycle is already outstanding."""
