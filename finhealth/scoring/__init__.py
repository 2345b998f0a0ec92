"""
Score calculator: five 0–100 category scores and their weighted overall score.

Modules
-------
calculator : calculate_scores() + one pure function per category.
"""
