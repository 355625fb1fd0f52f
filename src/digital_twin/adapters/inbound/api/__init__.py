"""HTTP API for the digital twin chat widget."""
