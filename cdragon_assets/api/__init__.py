"""Clients for the CommunityDragon content mirror."""
