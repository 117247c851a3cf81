"""Resolve compatible component versions for disposable Kubernetes test clusters."""

__version__ = "0.1.0"
