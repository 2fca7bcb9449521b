"""Constants for AI services."""

# Completion token limits
EXTRACTION_MAX_TOKENS = 2048
TAXONOMY_MAX_TOKENS = 1024

# Confidence assumed when the model omits one
DEFAULT_AI_CONFIDENCE = 0.8

BASE_TEMPLATES = ("coffee", "tea", "wine", "spirits", "beer", "chocolate", "cheese", "other")
