"""Long-record GHCN-D rainfall report for south-east Queensland / northern NSW."""

__version__ = "0.1.0"
