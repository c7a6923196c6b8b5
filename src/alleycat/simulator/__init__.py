"""Desktop pygame host for ALLEYCAT."""
