"""
Package marker for the orders, products, and users services.
Shared HTTP and database plumbing lives in `src.api` and `src.common`; each service has its own subpackage.
"""
