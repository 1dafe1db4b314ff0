"""Domain models and value types.

Plain data only: the domain knows nothing about HTTP, subprocesses or the CLI.
"""
