"""Scaffolding and code generation for Rust web API projects."""

__version__ = "0.1.0"
