"""Configuration and output helpers for the driver script"""
