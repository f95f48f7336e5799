"""Ruru NFT relay: pins NFT media to IPFS and keeps mint records in Supabase."""

__version__ = "0.1.0"
