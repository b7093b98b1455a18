"""Table model, value generation and choice primitives"""
