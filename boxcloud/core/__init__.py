"""Workflow core — shared state, step runner and pipeline assembly."""
