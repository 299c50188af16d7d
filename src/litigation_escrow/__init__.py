"""Litigation Escrow — multisig escrow for litigation crowdfunding campaigns."""

__version__ = "0.1.0"
