"""Armora progressive disclosure risk assessment engine.

Scores questionnaire responses into a probability x impact risk matrix,
resolves the assessment path for the resulting tier, and composes the
progressive step sequence the questionnaire walks through.
"""

__version__ = "0.1.0"
