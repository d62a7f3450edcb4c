"""Workload and VEN exports, import planning, IP list mapping, unmanaged
workload clean-up reports and template listing over CSV data."""

__version__ = "0.1.0"