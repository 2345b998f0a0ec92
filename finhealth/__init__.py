"""
Financial Health Assessment - questionnaire answers in, scores and
priority actions out.

Entry point: ``finhealth.assessment.run_assessment(profile, config=None)``.
"""

__version__ = "0.1.0"
