"""docflow - document issuance and signature lifecycle engine."""

__version__ = "0.1.0"
