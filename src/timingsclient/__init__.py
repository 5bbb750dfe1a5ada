"""Fetch test timings data for the CI timings dashboard."""
