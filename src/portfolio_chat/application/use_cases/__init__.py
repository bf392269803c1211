from .answer_chat import ChatResponse, ChatUseCase
from .load_documents import DocumentStoreLoader
from .route_intent import IntentRouter

__all__ = [
    "ChatResponse",
    "ChatUseCase",
    "DocumentStoreLoader",
    "IntentRouter",
]
