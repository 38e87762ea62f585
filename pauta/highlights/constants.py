"""
Shared constants for the hot-topics highlight scoring.

Values are tuned heuristics; changing any of them changes the ranking shown
on the landing page and the /api/propositions/highlights endpoint.
"""

# Component weights (sum to 1.0; the override boost is added on top)
RECENCY_WEIGHT = 0.4
ENGAGEMENT_WEIGHT = 0.3
MOMENTUM_WEIGHT = 0.2
THEME_WEIGHT = 0.1

# Recency decays linearly to zero over this many days
RECENCY_WINDOW_DAYS = 30

# Engagement aggregate weights
COMMENT_WEIGHT = 0.4
STANCE_WEIGHT = 0.3
VIEW_WEIGHT = 0.05
FAVORITE_WEIGHT = 0.2
SHARE_WEIGHT = 0.25

# Aggregate value that maps to an engagement score of 1.0 on the log curve
ENGAGEMENT_LOG_CAP = 50

# Momentum
MOMENTUM_NO_WINDOW = 0.25  # no interaction record at all
MOMENTUM_COLD_START_DIVISOR = 10
MOMENTUM_COLD_START_FLOOR = 0.4

# Theme bonus
PRIORITY_THEMES = frozenset([
    'Educação',
    'Saúde',
    'Segurança Pública',
    'Meio Ambiente',
    'Direitos Humanos',
])
PRIORITY_THEME_BONUS = 0.6

# Procedural stages that signal an imminent decision (matched lower-cased)
STATUS_PRIORITY_KEYWORDS = ('parecer', 'urgência', 'plenário', 'votação')
STATUS_KEYWORD_BONUS = 0.4

# Curator override
OVERRIDE_PRIORITY_SCALE = 10
OVERRIDE_MAX_BOOST = 0.5
OVERRIDE_MIN_PRIORITY = 0
OVERRIDE_MAX_PRIORITY = 10

# Labels
LABEL_SPECIAL_CURATION = 'Special Curation'
LABEL_TRENDING_NOW = 'Trending now'
LABEL_NEW_AND_RELEVANT = 'New & relevant'
LABEL_STABLE = 'Stable'
LABEL_TRENDING = 'Trending'

LABEL_OVERRIDE_THRESHOLD = 0.3
LABEL_MOMENTUM_HIGH = 0.75
LABEL_RECENCY_HIGH = 0.75
LABEL_MOMENTUM_LOW = 0.25

# Selector defaults (overridable through app config)
DEFAULT_LOOKBACK_DAYS = 45
DEFAULT_MAX_CANDIDATES = 80
DEFAULT_LIMIT = 5
