"""Numeric building blocks: training stress, form zones, trends."""
