"""Core of gh-asset: configuration, domain, validation and services.

Nothing in here spawns processes or opens sockets; that lives in
`gh_asset.adapters`.
"""
