"""HTTP service exposing the SCUC/SCED simulation engine."""
