"""
Pydantic data models.

Modules
-------
profile : UserProfile, Allocation, FinancialGaps - validated questionnaire input.
results : Scores, portfolio, projection and recommendation output models,
          bundled as AssessmentResult.
"""
