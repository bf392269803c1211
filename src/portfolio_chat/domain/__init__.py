"""Domain layer: pure types and logic (no I/O, no external libs).

Keep this layer free of side-effects. Define entities, string predicates and
small pure helpers only.
"""

from .context import assemble_context
from .dedup import DedupConfig, DuplicateDetector
from .document import Document, RetrievalResult, ScoredDocument, is_config_sourced
from .intents import ConversationMeta, DirectAnswer, GenerationPlan, Intent, TemplateKind
from .language import detect_language
from .scoring import GREETING_CONTEXT, LexicalScorer, ScoringConfig

__all__ = [
    "Document",
    "ScoredDocument",
    "RetrievalResult",
    "is_config_sourced",
    "DuplicateDetector",
    "DedupConfig",
    "LexicalScorer",
    "ScoringConfig",
    "GREETING_CONTEXT",
    "assemble_context",
    "Intent",
    "TemplateKind",
    "ConversationMeta",
    "DirectAnswer",
    "GenerationPlan",
    "detect_language",
]
