"""momo -- create and manage turbo monorepos."""

__version__ = "0.2.0"
