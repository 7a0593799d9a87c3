"""
Analysis Module.

Fixture lookahead, Transfer Value Score ranking, news snippet filtering
and "why buy" narrative generation.
"""
