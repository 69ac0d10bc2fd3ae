from __future__ import annotations
from typing import Sequence

from skincare_advisor.errors import EmptyInput
from skincare_advisor.schemas import Product

SYSTEM_PROMPT = (
    "You are a professional skincare and beauty product advisor specializing in L'Oréal portfolio "
    "brands including CeraVe, La Roche-Posay, Vichy, Lancôme, Urban Decay, Maybelline, and other "
    "L'Oréal owned brands.\n\n"
    "When users ask about routines or products, provide helpful, detailed advice about:\n"
    "- Skincare routines and product order\n"
    "- Product benefits and ingredients\n"
    "- Skin type recommendations\n"
    "- How to use products effectively\n"
    "- Compatibility between products\n\n"
    "You should focus on the products available in our catalog and provide practical, actionable "
    "skincare advice. If someone asks about topics unrelated to skincare, beauty, or our product "
    "range, politely redirect them back to skincare and beauty topics."
)

GREETING = (
    "👋 Hello! How can I help you today? "
    "You can search for products above and select them to build a routine!"
)

NO_RESPONSE_NOTICE = "⚠️ No response from AI."

ROUTINE_PROMPT_PREFIX = "Please create a skincare routine using these products: "


def error_notice(reason: object) -> str:
    return f"⚠️ Error: {reason}"


def clean_user_text(text: str | None) -> str:
    message = (text or "").strip()
    if not message:
        raise EmptyInput("Message is blank")
    return message


def selection_prompt(products: Sequence[Product]) -> str:
    """Build the routine request for the given working set, in selection order."""
    if not products:
        raise EmptyInput("No products selected")
    return ROUTINE_PROMPT_PREFIX + ", ".join(p.display_name for p in products)
