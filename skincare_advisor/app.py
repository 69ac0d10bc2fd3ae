from __future__ import annotations
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from typing import List, Optional
import logging

from skincare_advisor.agent.chat_client import ChatClient
from skincare_advisor.agent.conversation import ChatTransport, ConversationManager
from skincare_advisor.config import Settings, load_settings
from skincare_advisor.errors import ConversationBusy
from skincare_advisor.schemas import (
    CatalogResponse, ChatRequest, ConversationResponse, Product, ProductCard,
    SelectionChip, SelectionResponse, TurnResponse,
)
from skincare_advisor.services.catalog_index import NO_RESULTS_TEXT, CatalogIndex
from skincare_advisor.services.selection import NO_SELECTION_TEXT, SelectionSet

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None,
               transport: Optional[ChatTransport] = None) -> FastAPI:
    """Build the app around one page session: catalog, selection and conversation."""
    settings = settings or load_settings()
    logging.basicConfig(level=settings.log_level)

    catalog = CatalogIndex(settings.catalog_source, timeout=settings.catalog_timeout)
    catalog.load()
    transport = transport or ChatClient(settings.chat_endpoint, timeout=settings.chat_timeout)

    app = FastAPI(title="Skincare Routine Advisor")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"], allow_credentials=True,
        allow_methods=["*"], allow_headers=["*"]
    )
    app.state.catalog = catalog

    def new_session() -> None:
        app.state.selection = SelectionSet(catalog)
        app.state.conversation = ConversationManager(transport)

    new_session()

    # -------- view helpers ----------
    def cards(products: List[Product]) -> List[ProductCard]:
        selection: SelectionSet = app.state.selection
        return [ProductCard.from_product(p, selected=selection.is_selected(p.id)) for p in products]

    def selection_summary() -> SelectionResponse:
        members = app.state.selection.members()
        return SelectionResponse(
            chips=[SelectionChip(id=p.id, label=p.display_name) for p in members],
            generate_enabled=bool(members),
            generate_label="Generate Routine" if members else "Select Products First",
            message=None if members else NO_SELECTION_TEXT,
        )

    def turn_response(turn) -> TurnResponse:
        return TurnResponse(turn=turn, state=app.state.conversation.state.value)

    # -------- catalog ----------
    @app.get("/api/catalog", response_model=CatalogResponse)
    def get_catalog():
        return CatalogResponse(items=cards(catalog.search("")), message=catalog.error_message)

    @app.get("/api/search", response_model=CatalogResponse)
    def search(q: str = ""):
        items = catalog.search(q)
        message = catalog.error_message or (NO_RESULTS_TEXT if not items else None)
        return CatalogResponse(items=cards(items), message=message)

    # -------- selection ----------
    @app.get("/api/selection", response_model=SelectionResponse)
    def get_selection():
        return selection_summary()

    @app.post("/api/selection/{product_id}/toggle", response_model=SelectionResponse)
    def toggle(product_id: int):
        app.state.selection.toggle(product_id)
        return selection_summary()

    # -------- conversation ----------
    @app.get("/api/conversation", response_model=ConversationResponse)
    def get_conversation():
        conversation: ConversationManager = app.state.conversation
        return ConversationResponse(turns=list(conversation.turns), state=conversation.state.value)

    @app.post("/api/chat", response_model=TurnResponse)
    async def chat(body: ChatRequest):
        try:
            turn = await app.state.conversation.submit_user_text(body.message)
        except ConversationBusy as e:
            raise HTTPException(status_code=409, detail=str(e))
        return turn_response(turn)

    @app.post("/api/routine", response_model=TurnResponse)
    async def routine():
        try:
            turn = await app.state.conversation.submit_selection_prompt(app.state.selection.members())
        except ConversationBusy as e:
            raise HTTPException(status_code=409, detail=str(e))
        return turn_response(turn)

    @app.post("/api/session/reset")
    def reset():
        new_session()
        return {"ok": True}

    return app


app = create_app()
