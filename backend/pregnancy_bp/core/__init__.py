"""Reading classification and derived-metrics engine."""
