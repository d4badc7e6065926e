"""DC network analysis module.

Provides a dense Gaussian-elimination solver, susceptance (B) matrix
construction with slack-bus reduction, and DC power flow with line
loading checks.
"""
