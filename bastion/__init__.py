"""Bastion: role and permission authorization engine."""
