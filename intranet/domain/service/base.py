"""Domain service base."""


class Service:
    """Marker base for services that coordinate accounts and invitations."""
