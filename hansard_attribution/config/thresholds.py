"""Named thresholds for fuzzy name scoring.

Changing any of these changes which speakers get suggestions or broad-pass
credit; the unit tests pin each boundary.
"""

# Tokens of this length or shorter are ignored by token-overlap scoring.
MIN_TOKEN_LENGTH = 3

# Suggestions attached to an unmatched speaker.
SUGGESTION_MIN_SCORE = 0.3
SUGGESTION_MIN_SHARED_TOKENS = 1
MAX_SUGGESTIONS = 3

# Name matching used by the all-instances counting pass.
BROAD_MATCH_MIN_SCORE = 0.5
BROAD_MATCH_MIN_SHARED_TOKENS = 2

# Names shorter than this after normalization are never looked up.
MIN_NAME_LENGTH = 3
