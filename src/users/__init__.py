# This file marks the users service package.
# The service owns the `users` table and exposes registration, login, profile, list, and delete routes under `/user`.
