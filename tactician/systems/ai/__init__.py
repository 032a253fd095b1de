# tactician/systems/ai/__init__.py
from __future__ import annotations

from .context import MovePattern, TacticalContext, detect_move_patterns, extract_context, summarize_context
from .controller import Decision, DecisionState, DecisionTrace, TacticalController
from .intents import Intent, IntentType, choose_intent, intent_priority, should_maintain_intent
from .interface import MoveController
from .legality import LegalMoves, filter_legal_moves
from .scoring import MoveScore, score_move, score_moves, top_moves

__all__ = [
    "MovePattern",
    "TacticalContext",
    "detect_move_patterns",
    "extract_context",
    "summarize_context",
    "Decision",
    "DecisionState",
    "DecisionTrace",
    "TacticalController",
    "Intent",
    "IntentType",
    "choose_intent",
    "intent_priority",
    "should_maintain_intent",
    "MoveController",
    "LegalMoves",
    "filter_legal_moves",
    "MoveScore",
    "score_move",
    "score_moves",
    "top_moves",
]
