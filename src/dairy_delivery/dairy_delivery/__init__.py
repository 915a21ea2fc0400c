"""Dairy Delivery package.

This package is organized by feature modules (customers, deliveries,
attendance, reports, ...) with a thin Flask controller layer on top of
service/repository layers.
"""
