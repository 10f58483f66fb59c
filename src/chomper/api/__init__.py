"""HTTP clients for the hosted Chomper backend."""
