"""
Payments Domain - SIMULATED

Consultation fees are not really charged. Payment details are shape-checked
and, after a fixed delay, the checkout continues as if the charge succeeded.
"""
