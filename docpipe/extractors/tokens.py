"""Token budget for model input.

Counts are approximate (about four characters per token for English
text); the budget is a ceiling, so approximation errs on the short side.
"""

CHARS_PER_TOKEN = 4


def estimate_tokens(text: str) -> int:
    return -(-len(text) // CHARS_PER_TOKEN)


def truncate_to_token_budget(text: str, max_tokens: int) -> str:
    """Cut ``text`` so it fits in ``max_tokens``, on a whitespace boundary when possible."""
    if max_tokens <= 0:
        raise ValueError("max_tokens must be positive")
    max_chars = max_tokens * CHARS_PER_TOKEN
    if len(text) <= max_chars:
        return text
    cut = text[:max_chars]
    boundary = cut.rfind(" ", max_chars // 2)
    newline = cut.rfind("\n", max_chars // 2)
    boundary = max(boundary, newline)
    if boundary > 0:
        cut = cut[:boundary]
    return cut.rstrip()
