# This file marks the products service package.
# The service owns the `products` table and exposes list and create routes.
