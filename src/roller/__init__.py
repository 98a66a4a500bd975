"""Monte Carlo probabilities for compound dice conditions."""

__version__ = "0.1.0"
