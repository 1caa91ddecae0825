"""Aishwarya Collections storefront: catalogue, cart, checkout and order back-office."""
