# This file marks the schemas package for payload models shared across services.
