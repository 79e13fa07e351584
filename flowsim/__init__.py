"""Workflow Simulator: validation and simulated execution of workflow graphs."""

__version__ = "1.0.0"
