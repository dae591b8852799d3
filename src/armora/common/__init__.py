"""Shared types used across the risk and questionnaire packages."""
