"""Helpers for Kubernetes operators: conditions, env merging, affinity, annotations and Ansible inventories."""

__version__ = "0.1.0"