"""
STARCOACH - Structured Answer Rating for Competency-Oriented Interview Coaching

A domain-driven toolkit for preparing behavioral (STAR) interview stories and
rating them against a fixed catalog of Leadership Principles.

Architecture:
- Catalog Context: Leadership Principles and the common question bank
- Stories Context: Story model, persistence, LP coverage and question matching
- Evaluation Context: Deterministic rule-based story scoring and reports
- Coaching Context: AI-assisted evaluation and story parsing (best effort)
"""

__version__ = "0.1.0"
