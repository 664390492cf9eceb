"""
Shared helpers: configuration, RPC connections, bundled ABIs, gas estimation
and status reporting.
"""
