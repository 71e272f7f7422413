# This file marks the orders service package.
# The service owns the `orders` table and exposes create, list, and get-by-id routes under `/order`.
