"""
Recommendation engine: converts scores and projections into ranked,
actionable recommendations.

Modules
-------
rules  : RuleContext + one rule function per recommendation id.
engine : evaluate_rules() + rank_recommendations() + generate_recommendations().
"""
