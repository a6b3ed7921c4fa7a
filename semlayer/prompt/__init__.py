"""semlayer prompt layer: join-proposal prompts and answer parsing."""
from semlayer.prompt.builder import (
    JoinPromptBuilder,
    PromptComponents,
    parse_join_proposals,
    propose_joins,
)

__all__ = [
    "JoinPromptBuilder",
    "PromptComponents",
    "parse_join_proposals",
    "propose_joins",
]
