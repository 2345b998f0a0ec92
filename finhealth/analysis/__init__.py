"""
Portfolio and projection analysis.

Modules
-------
portfolio : Current-allocation issues vs. the age-based three-fund portfolio.
costs     : Fee estimates and the 30-year compounded fee-impact projection.
behavior  : Trading-frequency penalty and the 10-year behavioral projection.
"""
