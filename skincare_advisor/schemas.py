from typing import List, Optional, Literal
from pydantic import BaseModel, ConfigDict

from skincare_advisor.services.markup import Node
from skincare_advisor.services.utils import capitalize_first, truncate_text

PLACEHOLDER_IMAGE = "img/placeholder.png"

Role = Literal["system", "user", "assistant"]

class Product(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    brand: str
    name: str
    category: str
    description: str
    image: Optional[str] = None  # relative URL like img/cerave-cream.jpg; may be missing

    @property
    def display_name(self) -> str:
        return f"{self.brand} {self.name}"

    @property
    def image_or_placeholder(self) -> str:
        return self.image if self.image and self.image.strip() else PLACEHOLDER_IMAGE

class CatalogDocument(BaseModel):
    products: List[Product]

class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Role
    content: str

class Turn(BaseModel):
    """One on-screen chat bubble. User turns hold their text as a single literal node."""
    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: str
    nodes: List[Node]
    notice: bool = False

# ---- HTTP bodies ----

class ProductCard(BaseModel):
    id: int
    brand: str
    name: str
    display_name: str
    category_label: str
    short_description: str
    image: str
    selected: bool
    action_label: str

    @classmethod
    def from_product(cls, product: Product, selected: bool) -> "ProductCard":
        return cls(
            id=product.id,
            brand=product.brand,
            name=product.name,
            display_name=product.display_name,
            category_label=capitalize_first(product.category),
            short_description=truncate_text(product.description, 80),
            image=product.image_or_placeholder,
            selected=selected,
            action_label="Remove" if selected else "Select",
        )

class CatalogResponse(BaseModel):
    items: List[ProductCard]
    message: Optional[str] = None

class SelectionChip(BaseModel):
    id: int
    label: str

class SelectionResponse(BaseModel):
    chips: List[SelectionChip]
    generate_enabled: bool
    generate_label: str
    message: Optional[str] = None

class ChatRequest(BaseModel):
    message: str = ""

class TurnResponse(BaseModel):
    turn: Optional[Turn] = None
    state: str

class ConversationResponse(BaseModel):
    turns: List[Turn]
    state: str
