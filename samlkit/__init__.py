"""Helpers for SAML service providers: timestamps, bindings, certificates and XML lookup."""

__version__ = "0.1.0"