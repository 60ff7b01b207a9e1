"""Pydantic models for candidates, jobs, match results and recommendations."""
