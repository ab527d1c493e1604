"""google-dorker: multi-domain Google dorking and subdomain harvesting."""

__version__ = "1.0.0"
