"""Tasker API Package — profiles, tasks, users and payments over REST.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
