from .llm_port import LLMPort
from .loader_port import DocumentLoaderPort
from .object_store_port import ObjectStorePort

__all__ = [
    "LLMPort",
    "ObjectStorePort",
    "DocumentLoaderPort",
]
