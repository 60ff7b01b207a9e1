"""Scoring components that turn a candidate/job pair into a match result."""
