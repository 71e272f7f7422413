# This file marks the routers package for endpoints shared by every service.
