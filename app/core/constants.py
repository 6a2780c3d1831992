"""Core constants: search tier scores, limits and fixed user-facing strings.

Single source of truth for literal values shared by the retrieval pipeline.
Tunable values (per-branch limits, TTL, timeouts) live in app.core.config.
"""

# Keyword search: limit bounds and term extraction
SEARCH_LIMIT_MIN = 1
SEARCH_LIMIT_MAX = 50
RECENT_POSTS_LIMIT_MAX = 20
SEARCH_TERM_MIN_LENGTH = 2
SEARCH_MAX_TERMS = 10
SEARCH_MAX_SUBSTRING_TERMS = 5

# Fixed scores per retrieval tier (higher = more confident)
SCORE_TAG_MATCH = 1.0
SCORE_SUBSTRING_MATCH = 0.5
SCORE_RECENT_POST = 0.3

# Only regular replies are searchable (not rename/sticky/etc. event posts)
POST_TYPE_COMMENT = "comment"

# LLM components
QUERY_EXPANSION_MAX = 4
TAG_MATCH_MAX = 3
RERANK_SNIPPET_CHARS = 300

# Context rendering
CONTEXT_SNIPPET_CHARS = 400
RESULT_SNIPPET_CHARS = 150
ELLIPSIS = "..."
UNKNOWN_AUTHOR = "User"

# Access filter teasers
TEASER_SIGN_IN = "🔒 This discussion is private. Sign in to view."
TEASER_NO_ACCESS = "🔒 This discussion is private. You don't have access to it."

# Post suggestions
SUGGESTION_TITLE_MAX = 100
DEFAULT_SUGGESTED_TAG = "general"

# Sessions: tokens idle for longer than this are rejected
SESSION_MAX_IDLE_DAYS = 30
SESSION_COOKIE_NAMES = ("flarum_remember", "flarum_session")
