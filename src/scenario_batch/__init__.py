"""Run one analysis per named scenario and collate the results."""

__version__ = "0.1.0"
