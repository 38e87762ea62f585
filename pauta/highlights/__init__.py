"""
Hot-topics highlights.

- scoring: pure highlight score engine
- selector: ranks recent propositions through a pluggable data source
- repository: SQLAlchemy implementation of that data source
- overrides: curator priority boosts
"""

from pauta.highlights.scoring import compute_highlight_score
from pauta.highlights.selector import HotTopicsSelector, HotTopicsSource, list_hot_topics

__all__ = [
    'compute_highlight_score',
    'HotTopicsSelector',
    'HotTopicsSource',
    'list_hot_topics',
]
