"""auto-testid: hierarchy-derived test ids for JSX/TSX markup."""

__version__ = "0.1.0"
