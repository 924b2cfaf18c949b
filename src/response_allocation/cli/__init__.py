"""Command-line interface for Response Allocation"""
