"""Workflow orchestration: state machine, progress channels and review."""
