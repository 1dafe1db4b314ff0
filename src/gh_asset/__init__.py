"""gh-asset: download GitHub issue/PR attachments using `gh` authentication."""

__version__ = "0.2.0"
