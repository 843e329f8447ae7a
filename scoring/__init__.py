"""Scoring package: model client, persona scoring, verdicts and the pipeline."""
