"""
Fetch lifecycle and orchestration for sheet data.
"""
