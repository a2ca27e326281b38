"""NGSI v2 request-contract layer."""
