"""Adapters: everything that talks to the outside world (gh, HTTP, disk)."""
