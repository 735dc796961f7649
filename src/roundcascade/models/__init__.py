"""Data models for Round Cascade."""
