"""Patient-facing booking views for the MediBook appointment API."""
__version__ = "1.0.0"
