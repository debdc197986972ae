"""
L0 Data — static tables for k6 and browser provisioning.

Pure data. No logic.
"""
