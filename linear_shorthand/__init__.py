"""Linear Shorthand - create Linear issues from free-text shorthand."""

__version__ = "0.1.0"
